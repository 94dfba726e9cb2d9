"""
Catalog Repository - Data Access Layer
"""
from typing import List, Optional
from sqlalchemy.orm import Session

from laundry_service.models.catalog import Category, Item, ServiceType, ItemPrice


class CatalogRepository:
    """Repository for catalog lookups and price edits"""
    
    def __init__(self, db: Session):
        self.db = db
    
    def get_categories(self) -> List[Category]:
        return self.db.query(Category).order_by(Category.display_order).all()
    
    def get_items(self, category_slug: Optional[str] = None) -> List[Item]:
        query = self.db.query(Item)
        if category_slug:
            query = query.join(Category, Category.id == Item.category_id).filter(
                Category.slug == category_slug
            )
        return query.order_by(Item.display_order).all()
    
    def get_item(self, item_id: str) -> Optional[Item]:
        return self.db.query(Item).filter(Item.id == item_id).first()
    
    def get_service_types(self) -> List[ServiceType]:
        return self.db.query(ServiceType).order_by(ServiceType.display_order).all()
    
    def get_service_type(self, service_type_id: str) -> Optional[ServiceType]:
        return self.db.query(ServiceType).filter(ServiceType.id == service_type_id).first()
    
    def get_prices(self) -> List[tuple]:
        """Get every price row with its item and service names"""
        return self.db.query(ItemPrice, Item.name, ServiceType.name).outerjoin(
            Item, Item.id == ItemPrice.item_id
        ).outerjoin(
            ServiceType, ServiceType.id == ItemPrice.service_type_id
        ).order_by(ItemPrice.item_id).all()
    
    def get_price(self, item_id: str, service_type_id: str) -> Optional[ItemPrice]:
        return self.db.query(ItemPrice).filter(
            ItemPrice.item_id == item_id,
            ItemPrice.service_type_id == service_type_id
        ).first()
    
    def get_price_by_id(self, price_id: str) -> Optional[ItemPrice]:
        return self.db.query(ItemPrice).filter(ItemPrice.id == price_id).first()
    
    def update_price(self, price_id: str, price: float) -> Optional[ItemPrice]:
        """Update a price row"""
        item_price = self.get_price_by_id(price_id)
        if not item_price:
            return None
        
        item_price.price = price
        self.db.commit()
        self.db.refresh(item_price)
        return item_price
