"""
Pydantic schema definitions for the product catalog.

The ``Product`` model mirrors the records found in the catalogue JSON
file. Records are frozen once loaded and any extra keys present in the
source data are kept. The product route serialises with
``exclude_unset`` so optional fields absent from a record are left out
and clients receive the product exactly as it was supplied. Numeric
fields such as ``credit`` or ``stock`` may arrive
as strings; they are kept as-is here and coerced only when the query
pipeline needs a number.

``ProductListResponse`` and ``ProductErrorResponse`` are the two shapes
of the response envelope returned by ``/api/products``.
"""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from typing_extensions import Literal

Number = Union[int, float, str]

SortField = Literal["credit", "name", "stock", "brand"]
SortOrder = Literal["asc", "desc"]


class Product(BaseModel):
    """A single catalogue entry.

    ``credit`` is the canonical price field; ``price`` is an older
    field name still present in some catalogue exports and is only
    consulted when ``credit`` is missing or unusable.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    sku: str
    name: str
    category: str
    brand: Optional[str] = None
    credit: Optional[Number] = None
    price: Optional[Number] = None
    stock: Optional[Number] = None


class ProductQuery(BaseModel):
    """Typed view of the query string once defaults have been applied."""

    model_config = ConfigDict(frozen=True)

    q: Optional[str] = None
    category: Optional[str] = None
    brand: Optional[str] = None
    min_credit: Optional[float] = None
    max_credit: Optional[float] = None
    in_stock: bool = False
    limit: int = 50
    offset: int = 0
    sort: SortField = "credit"
    order: SortOrder = "asc"


class PageMeta(BaseModel):
    """Pagination metadata for a page of results."""

    total: int
    returned: int
    limit: int
    offset: int
    has_more: bool
    # Offset of the following page; ``None`` on the last page.
    next_offset: Optional[int] = None


class ProductListResponse(BaseModel):
    success: bool = True
    data: List[Product] = Field(default_factory=list)
    meta: PageMeta
    filters_applied: Optional[Dict[str, Any]] = None


class ErrorDetail(BaseModel):
    message: str
    details: str = ""


class ProductErrorResponse(BaseModel):
    success: bool = False
    error: ErrorDetail
    data: List[Product] = Field(default_factory=list)
    meta: PageMeta = Field(
        default_factory=lambda: PageMeta(
            total=0, returned=0, limit=0, offset=0, has_more=False, next_offset=None
        )
    )
