"""
Product Routes
CRUD for the business catalog plus expiring / low-stock views
"""
from datetime import datetime, timezone
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Path, Response
from sqlalchemy.orm import Session
import logging

from foodshare.api.dependencies import get_business_id
from foodshare.config.database import get_db
from foodshare.core.errors import NotFoundError, ValidationError
from foodshare.schemas.product import ProductCreate, ProductUpdate, ProductResponse
from foodshare.services.dashboard.dashboard_service import DashboardService
from foodshare.services.product.product_service import ProductService, product_to_response

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=List[ProductResponse])
async def list_products(
    business_id: str = Depends(get_business_id),
    db: Session = Depends(get_db)
):
    try:
        now = datetime.now(timezone.utc)
        return [product_to_response(p, now) for p in ProductService.list_products(db, business_id)]
    except Exception as e:
        logger.error(f"Error listing products: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch products")


@router.get("/expiring", response_model=List[ProductResponse])
async def list_expiring_products(
    within_days: Optional[float] = Query(None, ge=0, description="Defaults to EXPIRING_WITHIN_DAYS"),
    business_id: str = Depends(get_business_id),
    db: Session = Depends(get_db)
):
    """Products expiring within the window, soonest first"""
    now = datetime.now(timezone.utc)
    products = DashboardService.expiring_products(db, business_id, now=now, within_days=within_days)
    return [product_to_response(p, now) for p in products]


@router.get("/low-stock", response_model=List[ProductResponse])
async def list_low_stock_products(
    threshold: Optional[int] = Query(None, ge=0, description="Defaults to LOW_STOCK_THRESHOLD"),
    business_id: str = Depends(get_business_id),
    db: Session = Depends(get_db)
):
    now = datetime.now(timezone.utc)
    products = DashboardService.low_stock_products(db, business_id, threshold=threshold)
    return [product_to_response(p, now) for p in products]


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(
    product_id: str = Path(..., description="The product ID"),
    business_id: str = Depends(get_business_id),
    db: Session = Depends(get_db)
):
    product = ProductService.get_product(db, business_id, product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product_to_response(product)


@router.post("", response_model=ProductResponse, status_code=201)
async def create_product(
    payload: ProductCreate,
    business_id: str = Depends(get_business_id),
    db: Session = Depends(get_db)
):
    try:
        product = ProductService.create_product(db, business_id, payload)
        return product_to_response(product)
    except ValidationError:
        raise HTTPException(status_code=400, detail="Invalid product data")
    except Exception as e:
        logger.error(f"Error creating product: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to create product")


@router.patch("/{product_id}", response_model=ProductResponse)
async def update_product(
    updates: ProductUpdate,
    product_id: str = Path(..., description="The product ID"),
    business_id: str = Depends(get_business_id),
    db: Session = Depends(get_db)
):
    try:
        product = ProductService.update_product(db, business_id, product_id, updates)
        return product_to_response(product)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Product not found")
    except ValidationError:
        raise HTTPException(status_code=400, detail="Invalid product data")
    except Exception as e:
        logger.error(f"Error updating product {product_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to update product")


@router.delete("/{product_id}", status_code=204)
async def delete_product(
    product_id: str = Path(..., description="The product ID"),
    business_id: str = Depends(get_business_id),
    db: Session = Depends(get_db)
):
    """Delete a product. Donations referencing it are kept as they are."""
    try:
        deleted = ProductService.delete_product(db, business_id, product_id)
    except Exception as e:
        logger.error(f"Error deleting product {product_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to delete product")

    if not deleted:
        raise HTTPException(status_code=404, detail="Product not found")
    return Response(status_code=204)
