# grocery/api/routers/checkout.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from grocery.api.deps import get_current_user, get_gateway
from grocery.data.database import get_db
from grocery.data.models.user import UserModel
from grocery.domain.errors import PaymentGatewayError
from grocery.domain.schemas import OrderCreate, CheckoutOut
from grocery.services.checkout_service import CheckoutService
from grocery.services.payment_gateway import StripeGateway
from grocery.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api/checkout", tags=["checkout"])


@router.post("", response_model=CheckoutOut)
def checkout(
    payload: OrderCreate,
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
    gateway: StripeGateway = Depends(get_gateway),
):
    svc = CheckoutService(db, gateway)
    try:
        return svc.start_checkout(user.id, payload)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PaymentGatewayError as e:
        raise HTTPException(status_code=502, detail=str(e))
    except Exception:
        logger.exception("POST /api/checkout failed")
        raise HTTPException(status_code=500, detail="Failed to start checkout")
