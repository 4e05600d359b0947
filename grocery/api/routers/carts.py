#grocery/api/routers/carts.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from grocery.api.deps import get_current_user
from grocery.data.database import get_db
from grocery.data.models.user import UserModel
from grocery.domain.errors import NotFoundError
from grocery.domain.schemas import ItemIn, QuantityIn, CartOut, CartItemOut, DeletedOut
from grocery.services.cart_service import CartService
from grocery.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api/cart", tags=["cart"])


def get_service(db: Session):
    return CartService(db)


@router.get("", response_model=CartOut)
def get_cart(user: UserModel = Depends(get_current_user), db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.get_cart(user.id)
    except Exception:
        logger.exception("GET /api/cart failed")
        raise HTTPException(status_code=500, detail="Failed to fetch cart")


@router.post("", response_model=CartOut)
def add_item(
    payload: ItemIn,
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        return svc.add_product(user.id, payload.product_id, payload.quantity)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception:
        logger.exception("POST /api/cart failed")
        raise HTTPException(status_code=500, detail="Failed to add item to cart")


@router.delete("")
def clear_cart(user: UserModel = Depends(get_current_user), db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        removed = svc.clear_cart(user.id)
    except Exception:
        logger.exception("DELETE /api/cart failed")
        raise HTTPException(status_code=500, detail="Failed to clear cart")
    return {"message": "Cart cleared", "removed": removed}


@router.get("/{item_id}", response_model=CartItemOut)
def get_item(item_id: int, user: UserModel = Depends(get_current_user), db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.get_item(user.id, item_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception:
        logger.exception(f"GET /api/cart/{item_id} failed")
        raise HTTPException(status_code=500, detail="Failed to retrieve cart item")


@router.put("/{item_id}", response_model=CartOut)
def update_item(
    item_id: int,
    payload: QuantityIn,
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        return svc.update_quantity(user.id, item_id, payload.quantity)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception:
        logger.exception(f"PUT /api/cart/{item_id} failed")
        raise HTTPException(status_code=500, detail="Failed to update cart item")


@router.delete("/{item_id}", response_model=DeletedOut)
def remove_item(item_id: int, user: UserModel = Depends(get_current_user), db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.remove_item(user.id, item_id)
    except Exception:
        logger.exception(f"DELETE /api/cart/{item_id} failed")
        raise HTTPException(status_code=500, detail="Failed to delete cart item")
