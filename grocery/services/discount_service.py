# grocery/services/discount_service.py
from datetime import datetime, timezone
from typing import Dict, Any

from sqlalchemy.orm import Session

from grocery.data.models.discount_code import DiscountCodeModel
from grocery.repos.discount_repo import DiscountRepo
from grocery.utils.logging import get_logger

logger = get_logger(__name__)


class DiscountService:
    def __init__(self, db: Session):
        self.repo = DiscountRepo(db)

    def find_valid(self, code: str | None) -> DiscountCodeModel | None:
        """
        Kod bez rozrozniania wielkosci liter, wazny gdy expires_at jest null albo w przyszlosci.
        Nieznany lub wygasly kod -> None, nigdy wyjatek.
        """
        if not code or not code.strip():
            return None

        discount = self.repo.get_valid(code.strip(), datetime.now(timezone.utc))
        if not discount:
            logger.info(f"Discount code {code.strip().upper()!r} is unknown or expired")
        return discount

    def validate(self, code: str | None) -> Dict[str, Any]:
        if not code or not code.strip():
            raise ValueError("No code provided")

        discount = self.find_valid(code)
        if not discount:
            return {"valid": False}

        return {
            "valid": True,
            "amount": discount.percentage,
            "code": discount.code,
        }
