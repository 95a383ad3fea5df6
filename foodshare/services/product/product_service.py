# foodshare/services/product/product_service.py
"""Product catalog operations"""
import math
from datetime import datetime, timezone
from typing import Optional, List, Tuple
from sqlalchemy.orm import Session
import logging

from foodshare.core.errors import NotFoundError, ValidationError
from foodshare.models.base import as_utc
from foodshare.models.product import Product
from foodshare.schemas.product import ProductCreate, ProductUpdate, ProductResponse, ExpiryStatus
from foodshare.services.store.entity_store import EntityStore

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 24 * 60 * 60


def expiry_info(product: Product, now: datetime) -> Tuple[Optional[int], Optional[ExpiryStatus]]:
    """Whole days left before expiry (rounded up) and the matching display status"""
    if product.expiry_date is None:
        return None, None

    days = math.ceil((as_utc(product.expiry_date) - as_utc(now)).total_seconds() / SECONDS_PER_DAY)
    if days < 0:
        status = ExpiryStatus.EXPIRED
    elif days == 0:
        status = ExpiryStatus.TODAY
    elif days == 1:
        status = ExpiryStatus.TOMORROW
    else:
        status = ExpiryStatus.LATER
    return days, status


def product_to_response(product: Product, now: Optional[datetime] = None) -> ProductResponse:
    days, status = expiry_info(product, now or datetime.now(timezone.utc))
    return ProductResponse(
        id=product.id,
        business_id=product.business_id,
        name=product.name,
        description=product.description,
        category=product.category,
        unit_price=product.unit_price,
        current_stock=product.current_stock,
        expiry_date=product.expiry_date,
        photo_url=product.photo_url,
        created_at=product.created_at,
        days_until_expiry=days,
        expiry_status=status,
    )


class ProductService:
    """Create, update and delete catalog products for a business"""

    @staticmethod
    def list_products(db: Session, business_id: str) -> List[Product]:
        return EntityStore(db, Product).list_by_owner(business_id)

    @staticmethod
    def get_product(db: Session, business_id: str, product_id: str) -> Optional[Product]:
        """Get a product owned by the business"""
        product = EntityStore(db, Product).get(product_id)
        if product is None or product.business_id != business_id:
            return None
        return product

    @staticmethod
    def create_product(db: Session, business_id: str, payload: ProductCreate) -> Product:
        fields = payload.model_dump()
        fields["category"] = payload.category.value
        product = EntityStore(db, Product).create(business_id=business_id, **fields)
        logger.info(f"Created product {product.id} ({product.name}) for business {business_id}")
        return product

    @staticmethod
    def update_product(
            db: Session,
            business_id: str,
            product_id: str,
            updates: ProductUpdate
    ) -> Product:
        if ProductService.get_product(db, business_id, product_id) is None:
            raise NotFoundError("Product not found", product_id=product_id)

        update_data = updates.model_dump(exclude_unset=True)
        for required in ("name", "category", "unit_price", "current_stock"):
            if required in update_data and update_data[required] is None:
                raise ValidationError(f"{required} cannot be cleared")
        if update_data.get("category") is not None:
            update_data["category"] = updates.category.value

        product = EntityStore(db, Product).update(product_id, update_data)
        logger.info(f"Updated product {product_id}: {sorted(update_data)}")
        return product

    @staticmethod
    def delete_product(db: Session, business_id: str, product_id: str) -> bool:
        """Delete a product; donations referencing it are left untouched"""
        if ProductService.get_product(db, business_id, product_id) is None:
            return False
        deleted = EntityStore(db, Product).delete(product_id)
        if deleted:
            logger.info(f"Deleted product {product_id}")
        return deleted
