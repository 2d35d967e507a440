"""Two-player side-by-side falling-block puzzle game for the terminal."""

__version__ = "0.1.0"
__all__ = ["__version__"]