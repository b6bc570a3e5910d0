"""Axis tick labelling, scales and tickers, and rendered-image comparison for plotting."""

__version__ = "0.1.0"
__all__ = ["labelling", "axis", "imagecmp"]