"""Build IFF catalogs, catalog translation files and program sources from catalog data."""

__version__ = "2.18.0"