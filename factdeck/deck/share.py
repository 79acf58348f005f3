"""
Share payloads for cards.

Delegates to a native share capability when one is available, otherwise
copies a formatted text block to the clipboard.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from loguru import logger

from ..models import Item


@dataclass(frozen=True)
class SharePayload:
    title: str
    text: str
    url: str | None = None

    @classmethod
    def from_item(cls, item: Item) -> SharePayload:
        return cls(
            title=item.title or f"Interesting {item.category.value} fact",
            text=item.text,
            url=item.source_url,
        )

    def as_text(self) -> str:
        return "\n\n".join(part for part in (self.title, self.text, self.url) if part)


NativeShare = Callable[[SharePayload], Awaitable[None]]
ClipboardWriter = Callable[[str], Awaitable[None]]


async def share_item(
    item: Item,
    native_share: NativeShare | None = None,
    clipboard: ClipboardWriter | None = None,
) -> str:
    """
    Share an item through whichever capability exists.

    Returns:
        "shared", "copied" or "failed"
    """
    payload = SharePayload.from_item(item)
    if native_share is not None:
        try:
            await native_share(payload)
        except Exception as e:
            # Dismissing the share sheet surfaces as an error too.
            logger.debug(f"Native share did not complete: {e}")
            return "failed"
        return "shared"

    if clipboard is None:
        return "failed"
    try:
        await clipboard(payload.as_text())
    except Exception as e:
        logger.warning(f"Copy failed: {e}")
        return "failed"
    return "copied"
