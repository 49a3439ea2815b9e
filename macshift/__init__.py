"""macshift - session modules for link-layer address spoofing."""

__version__ = "0.1.0"
