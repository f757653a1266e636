"""
Catalog package for the product catalogue API.

This package exposes a single read-only endpoint for browsing a static
product catalogue loaded into memory at start-up. ``store`` loads the
catalogue, ``query`` holds the filter/sort/pagination pipeline and
``router`` wires it to FastAPI. The API supports text and SKU search,
category, brand, price and stock filters, sorting and offset-based
pagination.
"""

from .router import router as catalog_router  # noqa: F401
