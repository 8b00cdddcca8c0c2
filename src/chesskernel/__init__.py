"""Chess rules kernel with a PyQt6 board front-end."""

__version__ = "0.1.0"
