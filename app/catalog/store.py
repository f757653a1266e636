"""
In-memory data store for the product catalogue.

``PRODUCTS`` is populated once at import time from the catalogue JSON
file named by the ``CATALOG_FILE`` setting (by default the bundled
``app/data/products.json``). The file must contain a list of product
objects; each entry becomes a frozen ``Product`` instance and the
collection is held in a tuple, so nothing downstream can modify it.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Tuple

from pydantic import ValidationError

from ..config import settings
from .schemas import Product

logger = logging.getLogger(__name__)


def load_catalog(path: Path) -> Tuple[Product, ...]:
    """Load the product catalogue from a JSON file.

    Parameters
    ----------
    path : Path
        Location of the JSON file. The top-level value must be a list.

    Returns
    -------
    Tuple[Product, ...]
        The valid products in file order. A missing or malformed file
        yields an empty catalogue; entries that fail validation are
        skipped. Both cases are logged.
    """
    try:
        with path.open("r", encoding="utf-8") as f:
            raw = json.load(f)
    except (OSError, ValueError) as exc:
        logger.warning("Could not read product catalogue %s: %s", path, exc)
        return ()

    if not isinstance(raw, list):
        logger.warning("Product catalogue %s is not a JSON list; ignoring it", path)
        return ()

    products = []
    for index, entry in enumerate(raw):
        try:
            products.append(Product.model_validate(entry))
        except ValidationError as exc:
            logger.warning("Skipping catalogue entry #%d: %s", index, exc.errors())
    logger.info("Loaded %d products from %s", len(products), path)
    return tuple(products)


PRODUCTS: Tuple[Product, ...] = load_catalog(settings.catalog_file)


def get_catalog() -> Tuple[Product, ...]:
    """FastAPI dependency returning the shared, read-only catalogue."""
    return PRODUCTS
