"""Reference documentation generator for recipe catalogs."""

__version__ = "1.0.0"
