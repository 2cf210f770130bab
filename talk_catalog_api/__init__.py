"""
Top‑level package for the Talk Catalog API.

This file makes ``talk_catalog_api`` a Python package so that modules
within ``app`` can be imported using fully qualified names like
``talk_catalog_api.app.main``.

The package provides no public exports; all functionality lives in
submodules under ``app``.
"""

__all__ = []
