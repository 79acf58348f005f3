"""Terminal interface for factdeck."""
