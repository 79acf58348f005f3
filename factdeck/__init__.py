"""factdeck: a swipeable deck of short fact cards fed by asynchronous sources."""

__version__ = "1.0.0"
