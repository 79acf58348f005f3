"""
Readable Card Colors.

Generates a saturated random background and picks whichever of pure
white or pure black has the higher WCAG contrast ratio against it.
"""

from __future__ import annotations

import random
from dataclasses import dataclass

RGB = tuple[int, int, int]

WHITE: RGB = (255, 255, 255)
BLACK: RGB = (0, 0, 0)


def hsl_to_rgb(hue: float, saturation: float, lightness: float) -> RGB:
    """
    Convert HSL to an 8-bit RGB triple.

    Args:
        hue: Degrees, [0, 360)
        saturation: Percent, [0, 100]
        lightness: Percent, [0, 100]
    """
    s = saturation / 100
    l = lightness / 100
    a = s * min(l, 1 - l)

    def channel(n: int) -> int:
        k = (n + hue / 30) % 12
        value = l - a * max(-1, min(k - 3, 9 - k, 1))
        return round(255 * value)

    return channel(0), channel(8), channel(4)


def relative_luminance(rgb: RGB) -> float:
    """WCAG 2.x relative luminance of an sRGB color."""

    def linear(v: int) -> float:
        c = v / 255
        return c / 12.92 if c <= 0.03928 else ((c + 0.055) / 1.055) ** 2.4

    r, g, b = (linear(v) for v in rgb)
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def contrast_ratio(a: RGB, b: RGB) -> float:
    """WCAG contrast ratio, always >= 1."""
    l1, l2 = relative_luminance(a), relative_luminance(b)
    hi, lo = max(l1, l2), min(l1, l2)
    return (hi + 0.05) / (lo + 0.05)


@dataclass(frozen=True)
class CardColors:
    """Background and foreground for one card."""

    hue: int
    saturation: int
    lightness: int
    rgb: RGB
    foreground_rgb: RGB

    @property
    def background(self) -> str:
        return f"hsl({self.hue} {self.saturation}% {self.lightness}%)"

    @property
    def background_hex(self) -> str:
        return "#{:02x}{:02x}{:02x}".format(*self.rgb)

    @property
    def foreground(self) -> str:
        return "#fff" if self.foreground_rgb == WHITE else "#000"

    @property
    def foreground_hex(self) -> str:
        return "#{:02x}{:02x}{:02x}".format(*self.foreground_rgb)

    @property
    def contrast(self) -> float:
        return contrast_ratio(self.rgb, self.foreground_rgb)


class ColorContrastGenerator:
    """Random readable color pairs for card styling."""

    HUE_RANGE = (0, 360)
    SATURATION_RANGE = (70, 95)
    LIGHTNESS_RANGE = (48, 58)

    def __init__(self, rng: random.Random | None = None):
        self.rng = rng or random.Random()

    def _sample(self, bounds: tuple[int, int]) -> int:
        low, high = bounds
        return low + int(self.rng.random() * (high - low))

    def generate(self) -> CardColors:
        hue = self._sample(self.HUE_RANGE)
        saturation = self._sample(self.SATURATION_RANGE)
        lightness = self._sample(self.LIGHTNESS_RANGE)
        return self.for_hsl(hue, saturation, lightness)

    @staticmethod
    def for_hsl(hue: int, saturation: int, lightness: int) -> CardColors:
        """Colors for a fixed background; ties go to white."""
        rgb = hsl_to_rgb(hue, saturation, lightness)
        on_white = contrast_ratio(rgb, WHITE)
        on_black = contrast_ratio(rgb, BLACK)
        foreground = WHITE if on_white >= on_black else BLACK
        return CardColors(
            hue=hue,
            saturation=saturation,
            lightness=lightness,
            rgb=rgb,
            foreground_rgb=foreground,
        )
