"""Release packaging for cross-compiled native binaries."""

__version__ = "0.3.0"
