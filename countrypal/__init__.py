"""
CountryPal package
==================

This package contains the CountryPal event catalog engine.

- The CLI entry point is in `countrypal/cli.py`.
- The core engine (filters, search, ordering, reactive catalog) is in `countrypal/engine.py`.
- Catalog loading is in `countrypal/loader.py`; the built-in sample data in `countrypal/sample_data.py`.
"""

__version__ = '0.3.0'
