"""Cloud-Native Network Function simulator."""

__version__ = "1.0.0"
