"""
Catalog package for the TIL browser.

This package turns a directory of markdown notes into a cached catalog
and exposes it as a small JSON API. The loader scans the tree, the
cache keeps the result for a fixed time window, the selection helpers
pick or filter entries, and the store answers direct lookups by path.
The router wires these together under ``/api/til``.
"""

from .router import router as catalog_router  # noqa: F401
