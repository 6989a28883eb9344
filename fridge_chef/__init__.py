"""Fridge Chef: recipe suggestions from a photo of your fridge."""

__version__ = "0.1.0"
