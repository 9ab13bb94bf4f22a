"""Counter-based random number generators: Threefry, AES and a sequential engine."""

__version__ = "0.1.0"

__all__ = ["__version__"]