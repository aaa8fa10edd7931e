"""Split large files into numbered parts and merge them back."""

__version__ = "0.1.0"
