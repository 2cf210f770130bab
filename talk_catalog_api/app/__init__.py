"""
Application package initializer.

This package contains the main entrypoint for the API and all of its
submodules.  Accounts and talks each have their own schema and service
module; HTTP routes live in ``api/endpoints`` and are aggregated by
``api/router.py``.
"""

from .main import app  # noqa: F401
