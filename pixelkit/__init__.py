"""Colors, vectors, errors, font metrics and text layout for 2D graphics."""

__version__ = "0.1.0"
__all__ = ["color", "vector", "errors", "layout", "fonts"]