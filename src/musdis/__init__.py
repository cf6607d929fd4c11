"""musdis: music catalog services with Result-based error propagation."""

__version__ = "0.1.0"
