"""Reading plan service: split a text into evenly sized daily portions."""

__version__ = "0.1.0"
