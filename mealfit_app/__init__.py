"""
MealFit App - Nutrition and Training Plan Backend

Computes caloric targets and templated workout plans, persists them to a
hosted Supabase backend, and confirms plan purchases by polling until the
paid plan has been generated.
"""

__version__ = "0.1.0"
__author__ = "MealFit Team"
