# grocery/api/routers/orders.py
from typing import List, Literal

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from grocery.api.deps import get_current_user
from grocery.data.database import get_db
from grocery.data.models.user import UserModel
from grocery.domain.errors import NotFoundError
from grocery.domain.schemas import OrderCreate, OrderOut
from grocery.services.order_service import OrderService
from grocery.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api/orders", tags=["orders"])


def get_service(db: Session):
    return OrderService(db)


@router.post("", response_model=OrderOut, status_code=201)
def place_order(
    payload: OrderCreate,
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Zamowienie z koszyka (albo z pozycji od klienta), koszyk czyszczony w tej samej transakcji.
    """
    svc = get_service(db)
    try:
        return svc.place_order(user.id, payload)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        logger.exception("POST /api/orders failed")
        raise HTTPException(status_code=500, detail="Failed to place order")


@router.get("", response_model=List[OrderOut])
def list_orders(
    sort_by: Literal["order_date", "total_amount"] = Query("order_date", alias="sortBy"),
    order: Literal["asc", "desc"] = Query("desc"),
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        return svc.list_orders(user.id, sort_by=sort_by, order=order)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        logger.exception("GET /api/orders failed")
        raise HTTPException(status_code=500, detail="Failed to fetch orders")


@router.get("/{order_id}", response_model=OrderOut)
def get_order(order_id: int, user: UserModel = Depends(get_current_user), db: Session = Depends(get_db)):
    """
    Status moze byc jeszcze PENDING chwile po powrocie z bramki, webhook przychodzi osobno.
    """
    svc = get_service(db)
    try:
        return svc.get_order(user.id, order_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception:
        logger.exception(f"GET /api/orders/{order_id} failed")
        raise HTTPException(status_code=500, detail="Failed to retrieve order")
