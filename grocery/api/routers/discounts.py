from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from grocery.data.database import get_db
from grocery.domain.schemas import DiscountValidateIn, DiscountValidateOut
from grocery.services.discount_service import DiscountService
from grocery.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api/discount", tags=["discounts"])


@router.post("/validate", response_model=DiscountValidateOut, response_model_exclude_none=True)
def validate_code(payload: DiscountValidateIn, db: Session = Depends(get_db)):
    svc = DiscountService(db)
    try:
        return svc.validate(payload.code)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        logger.exception("POST /api/discount/validate failed")
        raise HTTPException(status_code=500, detail="Failed to validate discount code")
