"""tagtodos - collect tagged markdown todos from a vault."""

__version__ = "0.1.0"
