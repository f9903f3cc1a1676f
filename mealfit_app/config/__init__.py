"""
Configuration module.

Default parameters, YAML settings loading and validation.
"""
