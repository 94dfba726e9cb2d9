"""
Repositories package
"""
from laundry_service.repositories.order_repository import OrderRepository
from laundry_service.repositories.user_repository import UserRepository, ProfileRepository, RoleRepository
from laundry_service.repositories.catalog_repository import CatalogRepository

__all__ = ["OrderRepository", "UserRepository", "ProfileRepository", "RoleRepository", "CatalogRepository"]
