"""A Galaga-style arcade shooter for the terminal, with its game logic usable on its own."""

__version__ = "0.1.0"