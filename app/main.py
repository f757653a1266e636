# app/main.py
from fastapi import Depends, FastAPI

from .catalog import catalog_router
from .catalog.store import get_catalog
from .config import settings


app = FastAPI(
    title="Product Catalog API",
    description=(
        "Read-only search over a static product catalogue: text/SKU search, "
        "category, brand, price and stock filters, sorting and pagination."
    ),
    version="1.0.0",
)

app.include_router(catalog_router)


# 🔹 Health check
@app.get("/")
def health_check(catalog=Depends(get_catalog)):
    return {"status": "ok", "products": len(catalog)}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host=settings.host, port=settings.port)
