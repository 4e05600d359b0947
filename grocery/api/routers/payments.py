# grocery/api/routers/payments.py
from fastapi import APIRouter, Depends, Header, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from grocery.api.deps import get_gateway, get_lock_service
from grocery.data.database import get_db
from grocery.domain.errors import NotFoundError
from grocery.domain.schemas import WebhookOut
from grocery.services.lock_service import LockService
from grocery.services.payment_gateway import StripeGateway
from grocery.services.payment_service import PaymentService
from grocery.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api/stripe", tags=["payments"])


@router.post("/webhook", response_model=WebhookOut)
async def stripe_webhook(
    request: Request,
    stripe_signature: str | None = Header(None, alias="Stripe-Signature"),
    db: Session = Depends(get_db),
    gateway: StripeGateway = Depends(get_gateway),
    lock_service: LockService = Depends(get_lock_service),
):
    """
    Callback bramki. Surowe body jest potrzebne do weryfikacji podpisu.
    Bledy tylko raportujemy, ponowienia robi Stripe.
    """
    payload = await request.body()
    svc = PaymentService(db, gateway, lock_service)
    try:
        return await run_in_threadpool(svc.handle_webhook, payload, stripe_signature)
    except ValueError as e:
        # PaymentSignatureError tez jest ValueError
        raise HTTPException(status_code=400, detail=str(e))
    except NotFoundError as e:
        logger.warning(f"Webhook for unknown order: {e}")
        raise HTTPException(status_code=404, detail=str(e))
    except Exception:
        logger.exception("POST /api/stripe/webhook failed")
        raise HTTPException(status_code=500, detail="Internal Server Error")
