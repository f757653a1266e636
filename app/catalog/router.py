"""
Route definitions for the product catalogue API.

Endpoints under /api:
- GET      /products : search, filter, sort and paginate the catalogue
- OPTIONS  /products : CORS preflight
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Coroutine, Optional, Tuple

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.routing import APIRoute

from .query import error_response, parse_query, search_products
from .schemas import Product, ProductErrorResponse, ProductListResponse
from .store import get_catalog

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


class ErrorEnvelopeRoute(APIRoute):
    """Route class reporting unexpected failures as the error envelope.

    The wrapper covers the whole request: dependency resolution, the
    endpoint itself and response serialisation.
    """

    def get_route_handler(self) -> Callable[[Request], Coroutine[Any, Any, Response]]:
        handler = super().get_route_handler()

        async def envelope_handler(request: Request) -> Response:
            try:
                return await handler(request)
            except (HTTPException, RequestValidationError):
                raise
            except Exception as exc:
                logger.exception("Product query failed: %s %s", request.method, request.url)
                return JSONResponse(
                    status_code=500,
                    content=error_response(exc).model_dump(mode="json"),
                    headers=CORS_HEADERS,
                )

        return envelope_handler


router = APIRouter(prefix="/api", tags=["products"], route_class=ErrorEnvelopeRoute)


@router.options("/products", include_in_schema=False)
def products_preflight() -> Response:
    return Response(status_code=200, headers=CORS_HEADERS)


# Every parameter is taken as a raw string: malformed numbers must fall
# back to defaults in parse_query() rather than produce a 422.
# Fields missing from a catalogue record stay missing in the response.
@router.get(
    "/products",
    response_model=ProductListResponse,
    response_model_exclude_unset=True,
    responses={500: {"model": ProductErrorResponse}},
)
def list_products(
    response: Response,
    q: Optional[str] = Query(default=None, description="Search by name or exact SKU"),
    category: Optional[str] = Query(default=None, description="Filter by category"),
    brand: Optional[str] = Query(default=None, description="Filter by brand"),
    min_credit: Optional[str] = Query(default=None, description="Minimum credit price"),
    max_credit: Optional[str] = Query(default=None, description="Maximum credit price"),
    in_stock: Optional[str] = Query(default=None, description="'true' for products in stock only"),
    limit: Optional[str] = Query(default="50", description="Page size (1-200)"),
    offset: Optional[str] = Query(default="0", description="Pagination offset"),
    sort: Optional[str] = Query(default="credit", description="credit, name, stock or brand"),
    order: Optional[str] = Query(default="asc", description="asc or desc"),
    catalog: Tuple[Product, ...] = Depends(get_catalog),
):
    """
    Returns one page of products matching the supplied filters.

    Any failure while processing the query is reported by
    ``ErrorEnvelopeRoute`` as a 500 with the error envelope.
    """
    query = parse_query(
        q=q,
        category=category,
        brand=brand,
        min_credit=min_credit,
        max_credit=max_credit,
        in_stock=in_stock,
        limit=limit,
        offset=offset,
        sort=sort,
        order=order,
    )
    result = search_products(catalog, query)
    response.headers.update(CORS_HEADERS)
    return result
