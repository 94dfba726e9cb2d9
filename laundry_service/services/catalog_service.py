"""
Catalog Service - browsing and price management
"""
from typing import List, Optional

from sqlalchemy.orm import Session

from laundry_service.exceptions import NotFound
from laundry_service.repositories.catalog_repository import CatalogRepository
from laundry_service.schemas.catalog import (
    CategoryResponse, ItemResponse, ServiceTypeResponse, ItemPriceResponse
)


class CatalogService:
    """Service layer for the laundry catalog"""

    def __init__(self, db: Session):
        self.repository = CatalogRepository(db)

    def get_categories(self) -> List[CategoryResponse]:
        return [CategoryResponse.model_validate(c) for c in self.repository.get_categories()]

    def get_items(self, category_slug: Optional[str] = None) -> List[ItemResponse]:
        return [ItemResponse.model_validate(i) for i in self.repository.get_items(category_slug)]

    def get_service_types(self) -> List[ServiceTypeResponse]:
        return [ServiceTypeResponse.model_validate(s) for s in self.repository.get_service_types()]

    def get_prices(self) -> List[ItemPriceResponse]:
        """Price list with item and service names"""
        return [
            self._price_response(price, item_name, service_name)
            for price, item_name, service_name in self.repository.get_prices()
        ]

    def update_price(self, price_id: str, price: float) -> ItemPriceResponse:
        item_price = self.repository.update_price(price_id, price)
        if not item_price:
            raise NotFound(f"Price with id={price_id} not found")
        item = self.repository.get_item(item_price.item_id) if item_price.item_id else None
        service_type = (
            self.repository.get_service_type(item_price.service_type_id)
            if item_price.service_type_id else None
        )
        return self._price_response(
            item_price,
            item.name if item else None,
            service_type.name if service_type else None,
        )

    @staticmethod
    def _price_response(price, item_name, service_name) -> ItemPriceResponse:
        return ItemPriceResponse(
            id=price.id,
            item_id=price.item_id,
            service_type_id=price.service_type_id,
            price=price.price,
            item_name=item_name or "Unknown",
            service_name=service_name or "Unknown",
        )
