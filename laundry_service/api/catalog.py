"""
Catalog endpoints
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from laundry_service.database import get_db
from laundry_service.schemas.catalog import (
    CategoryResponse, ItemResponse, ServiceTypeResponse, ItemPriceResponse
)
from laundry_service.services.catalog_service import CatalogService

router = APIRouter(prefix="/catalog", tags=["catalog"])


def get_catalog_service(db: Session = Depends(get_db)) -> CatalogService:
    """Dependency to get CatalogService instance"""
    return CatalogService(db)


@router.get("/categories", response_model=List[CategoryResponse])
def get_categories(service: CatalogService = Depends(get_catalog_service)):
    return service.get_categories()


@router.get("/items", response_model=List[ItemResponse])
def get_items(
    category: Optional[str] = Query(None, description="Category slug"),
    service: CatalogService = Depends(get_catalog_service)
):
    return service.get_items(category)


@router.get("/service-types", response_model=List[ServiceTypeResponse])
def get_service_types(service: CatalogService = Depends(get_catalog_service)):
    return service.get_service_types()


@router.get("/prices", response_model=List[ItemPriceResponse])
def get_prices(service: CatalogService = Depends(get_catalog_service)):
    return service.get_prices()
