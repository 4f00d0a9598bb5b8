"""reelplan - editorial decision pipeline for talking-head reels."""

__version__ = "0.1.0"
