"""
Filter, sort and paginate the in-memory catalogue.

Every request is a single pass through ``search_products``:

1. ``parse_query`` turns the raw query string values into a
   ``ProductQuery``. Malformed values fall back to defaults instead of
   failing the request.
2. ``filter_products`` keeps the products matching every supplied
   filter and records which filters were applied.
3. ``sort_products`` orders the matches by one of ``SORT_FIELDS``.
4. ``paginate`` slices the sorted list and computes ``PageMeta``.

The catalogue passed in is never modified; each stage returns a new
list.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from .schemas import (
    ErrorDetail,
    PageMeta,
    Product,
    ProductErrorResponse,
    ProductListResponse,
    ProductQuery,
)

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 50
MAX_LIMIT = 200
DEFAULT_SORT = "credit"
SORT_FIELDS = ("credit", "name", "stock", "brand")
NUMERIC_SORT_FIELDS = {"credit", "stock"}

Predicate = Callable[[Product], bool]


def _norm(s: Optional[str]) -> str:
    return (s or "").strip().lower()


def _clean(s: Optional[str]) -> Optional[str]:
    """Strip a raw string, returning ``None`` when nothing is left."""
    if s is None:
        return None
    s = str(s).strip()
    return s or None


def _parse_float(value: Any) -> Optional[float]:
    """Parse ``value`` as a finite float, or return ``None``."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(str(value).strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def _parse_int(value: Any) -> Optional[int]:
    number = _parse_float(value)
    if number is None:
        return None
    return int(number)


def to_number(value: Any) -> float:
    """Numeric value of a product field; missing or unparsable counts as 0."""
    number = _parse_float(value)
    return 0.0 if number is None else number


def effective_price(product: Product) -> float:
    """Price used by the price range filter.

    ``credit`` wins whenever it holds a usable number, otherwise the
    legacy ``price`` field is used, otherwise 0.
    """
    credit = _parse_float(product.credit)
    if credit is not None:
        return credit
    return to_number(product.price)


def parse_query(
    q: Optional[str] = None,
    category: Optional[str] = None,
    brand: Optional[str] = None,
    min_credit: Optional[str] = None,
    max_credit: Optional[str] = None,
    in_stock: Optional[str] = None,
    limit: Optional[str] = "50",
    offset: Optional[str] = "0",
    sort: Optional[str] = "credit",
    order: Optional[str] = "asc",
) -> ProductQuery:
    """Build a ``ProductQuery`` from raw query string values.

    Parameters
    ----------
    q, category, brand : Optional[str]
        Text filters. Surrounding whitespace is removed and blank values
        are treated as absent.
    min_credit, max_credit : Optional[str]
        Price bounds. Values that are not finite numbers are ignored.
    in_stock : Optional[str]
        Only the literal ``"true"`` enables the stock filter.
    limit : Optional[str]
        Page size. Unparsable values and ``0`` become ``DEFAULT_LIMIT``;
        the result is clamped into ``[1, MAX_LIMIT]``.
    offset : Optional[str]
        Start of the page. Unparsable values become 0; negatives are
        clamped to 0.
    sort : Optional[str]
        One of ``SORT_FIELDS``; anything else sorts by ``credit``.
    order : Optional[str]
        ``"desc"`` for descending order, anything else is ascending.

    Returns
    -------
    ProductQuery
        The normalised query. This function never raises for bad input.
    """
    limit_num = _parse_int(limit) or DEFAULT_LIMIT
    limit_num = min(max(limit_num, 1), MAX_LIMIT)
    offset_num = max(_parse_int(offset) or 0, 0)

    return ProductQuery(
        q=_clean(q),
        category=_clean(category),
        brand=_clean(brand),
        min_credit=_parse_float(min_credit),
        max_credit=_parse_float(max_credit),
        in_stock=in_stock == "true",
        limit=limit_num,
        offset=offset_num,
        sort=sort if sort in SORT_FIELDS else DEFAULT_SORT,
        order="desc" if order == "desc" else "asc",
    )


def _build_predicates(query: ProductQuery) -> Tuple[List[Predicate], Dict[str, Any]]:
    """Return one predicate per supplied filter plus the echoed filter values."""
    predicates: List[Predicate] = []
    applied: Dict[str, Any] = {}

    if query.q:
        nq = query.q.lower()
        applied["query"] = query.q
        # Exact SKU match or name containment; no ranking between the two.
        predicates.append(lambda p: _norm(p.sku) == nq or nq in (p.name or "").lower())

    if query.category:
        ncat = query.category.lower()
        applied["category"] = query.category
        predicates.append(lambda p: _norm(p.category) == ncat)

    if query.brand:
        nbrand = query.brand.lower()
        applied["brand"] = query.brand
        predicates.append(lambda p: p.brand is not None and _norm(p.brand) == nbrand)

    if query.min_credit is not None or query.max_credit is not None:
        low = query.min_credit if query.min_credit is not None else 0.0
        high = query.max_credit if query.max_credit is not None else math.inf
        if query.min_credit is not None:
            applied["min_credit"] = query.min_credit
        if query.max_credit is not None:
            applied["max_credit"] = query.max_credit
        predicates.append(lambda p: low <= effective_price(p) <= high)

    if query.in_stock:
        applied["in_stock"] = True
        predicates.append(lambda p: to_number(p.stock) > 0)

    return predicates, applied


def filter_products(
    products: Sequence[Product], query: ProductQuery
) -> Tuple[List[Product], Dict[str, Any]]:
    """Keep the products matching every filter in ``query``.

    Returns the matching products (in catalogue order) and a mapping of
    the filters that were applied to their normalised values.
    """
    predicates, applied = _build_predicates(query)
    matches = [p for p in products if all(pred(p) for pred in predicates)]
    return matches, applied


def _sort_key(field: str) -> Callable[[Product], Any]:
    if field in NUMERIC_SORT_FIELDS:
        return lambda p: to_number(getattr(p, field))
    return lambda p: (getattr(p, field) or "").lower()


def sort_products(
    products: Sequence[Product], field: str = DEFAULT_SORT, order: str = "asc"
) -> List[Product]:
    """Return a sorted copy of ``products``.

    Numeric fields compare as floats and text fields case-insensitively.
    The sort is stable in both directions, so ties keep catalogue order.
    """
    if field not in SORT_FIELDS:
        field = DEFAULT_SORT
    return sorted(products, key=_sort_key(field), reverse=(order == "desc"))


def paginate(
    items: Sequence[Product], limit: int, offset: int
) -> Tuple[List[Product], PageMeta]:
    total = len(items)
    page = list(items[offset:offset + limit])
    has_more = offset + limit < total
    meta = PageMeta(
        total=total,
        returned=len(page),
        limit=limit,
        offset=offset,
        has_more=has_more,
        next_offset=offset + limit if has_more else None,
    )
    return page, meta


def search_products(products: Sequence[Product], query: ProductQuery) -> ProductListResponse:
    """Run the whole pipeline and wrap the page in the success envelope."""
    matches, applied = filter_products(products, query)
    ordered = sort_products(matches, query.sort, query.order)
    page, meta = paginate(ordered, query.limit, query.offset)
    logger.debug(
        "Product query %s matched %d of %d products", applied or "{}", meta.total, len(products)
    )
    return ProductListResponse(
        success=True,
        data=page,
        meta=meta,
        filters_applied=applied or None,
    )


def error_response(exc: BaseException) -> ProductErrorResponse:
    """Error envelope for a failed request: no data and zeroed metadata."""
    return ProductErrorResponse(
        success=False,
        error=ErrorDetail(message="Internal server error", details=str(exc)),
        data=[],
    )
