"""tintswitch: 256-color approximation and Basic/GUI appearance switching."""

__version__ = "0.3.0"
