"""Templated workout plans."""
