"""Layout-preserving PDF translation through an HTML round trip."""

__version__ = "0.1.0"
