"""Numerical weather prediction model emulator generating synthetic fields from a YAML configuration."""

__version__ = "0.1.0"

__all__ = ["__version__"]