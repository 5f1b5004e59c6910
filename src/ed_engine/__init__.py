"""Line-oriented ed-style command interpreter."""

__all__ = [
    "actions",
    "addressing",
    "buffer",
    "errors",
    "interpreter",
    "modes",
    "runtime",
]

__version__ = "0.1.0"
