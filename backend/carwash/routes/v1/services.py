# backend/carwash/routes/v1/services.py
"""
Catalog routes - API v1

Public endpoints; no authentication required.
"""

from typing import List

from fastapi import APIRouter, Depends, Query

from ...api.dependencies import get_catalog_service
from ...core.exceptions import DomainException
from ...errors import handle_domain_exception
from ...schemas.base import CountResponse, PageResponse
from ...schemas.catalog import ServiceResponse
from ...services.catalog_service import CatalogService

router = APIRouter(tags=["services-v1"])


def _to_page(result: dict) -> PageResponse[ServiceResponse]:
    return PageResponse[ServiceResponse](
        items=[ServiceResponse.model_validate(s) for s in result["items"]],
        total=result["total"],
        page=result["page"],
        pages=result["pages"],
    )


@router.get("", response_model=PageResponse[ServiceResponse])
def list_services(
    page: int = Query(1),
    limit: int = Query(10),
    catalog_service: CatalogService = Depends(get_catalog_service),
) -> PageResponse[ServiceResponse]:
    try:
        return _to_page(catalog_service.list_services(page=page, limit=limit))
    except DomainException as e:
        handle_domain_exception(e)


@router.get("/search", response_model=PageResponse[ServiceResponse])
def search_services(
    q: str = Query(..., description="Case-insensitive name fragment"),
    page: int = Query(1),
    limit: int = Query(10),
    catalog_service: CatalogService = Depends(get_catalog_service),
) -> PageResponse[ServiceResponse]:
    try:
        return _to_page(catalog_service.search_services(q, page=page, limit=limit))
    except DomainException as e:
        handle_domain_exception(e)


@router.get("/available", response_model=List[ServiceResponse])
def list_available_services(
    catalog_service: CatalogService = Depends(get_catalog_service),
) -> List[ServiceResponse]:
    """Every active service, cheapest first, without pagination."""
    return [ServiceResponse.model_validate(s) for s in catalog_service.list_available()]


@router.get("/available/count", response_model=CountResponse)
def count_available_services(
    catalog_service: CatalogService = Depends(get_catalog_service),
) -> CountResponse:
    return CountResponse(count=catalog_service.count_available())


@router.get("/{service_id}", response_model=ServiceResponse)
def get_service(
    service_id: str,
    catalog_service: CatalogService = Depends(get_catalog_service),
) -> ServiceResponse:
    try:
        return ServiceResponse.model_validate(catalog_service.get_service(service_id))
    except DomainException as e:
        handle_domain_exception(e)
