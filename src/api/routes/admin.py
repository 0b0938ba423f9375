"""
Admin / observability endpoints
===============================

GET /api/v1/admin/catalog -- current facility / product / variant snapshot
PUT /api/v1/admin/catalog -- replace the snapshot wholesale
GET /api/v1/admin/health  -- simple health check
"""

from fastapi import APIRouter, Depends, Request

from src.api.dependencies import get_catalog
from src.api.middleware import DEFAULT_LIMIT, limiter
from src.api.schemas import CatalogPayload, HealthResponse
from src.infrastructure.catalog import CatalogStore

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get(
    "/catalog",
    response_model=CatalogPayload,
    summary="Show the catalog snapshot used for simulations",
)
@limiter.limit(DEFAULT_LIMIT)
async def get_catalog_snapshot(
    request: Request,
    catalog: CatalogStore = Depends(get_catalog),
):
    return CatalogPayload.from_snapshot(catalog.snapshot)


@router.put(
    "/catalog",
    response_model=CatalogPayload,
    summary="Replace the catalog snapshot",
)
@limiter.limit(DEFAULT_LIMIT)
async def replace_catalog(
    request: Request,
    body: CatalogPayload,
    catalog: CatalogStore = Depends(get_catalog),
):
    snapshot = catalog.replace(
        facilities=[f.to_domain() for f in body.facilities],
        products=body.products,
        variants=[v.to_domain() for v in body.variants],
    )
    return CatalogPayload.from_snapshot(snapshot)


@router.get("/health", response_model=HealthResponse, summary="Health check")
async def health():
    return HealthResponse()
