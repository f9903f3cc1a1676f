"""Caloric target calculation and persistence."""
