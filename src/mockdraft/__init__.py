"""Mock draft prediction game: consensus boards, slate scoring and a timed reveal simulator."""

__version__ = "0.1.0"
