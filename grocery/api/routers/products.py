# grocery/api/routers/products.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from grocery.data.database import get_db
from grocery.domain.errors import NotFoundError
from grocery.domain.schemas import ProductOut
from grocery.services.product_service import ProductService
from grocery.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api/products", tags=["products"])


@router.get("", response_model=List[ProductOut])
def list_products(
    search: str = Query(""),
    sort_by: str | None = Query(None, alias="sortBy"),
    order: str = Query("asc"),
    category: str | None = Query(None),
    db: Session = Depends(get_db),
):
    svc = ProductService(db)
    try:
        return svc.search(search=search, sort_by=sort_by, order=order, category=category)
    except Exception:
        logger.exception("GET /api/products failed")
        raise HTTPException(status_code=500, detail="Failed to fetch products")


@router.get("/{product_id}", response_model=ProductOut)
def get_product(product_id: int, db: Session = Depends(get_db)):
    svc = ProductService(db)
    try:
        return svc.get_product(product_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception:
        logger.exception(f"GET /api/products/{product_id} failed")
        raise HTTPException(status_code=500, detail="Failed to fetch product")
