from datetime import datetime

from sqlalchemy import select, func, or_
from sqlalchemy.orm import Session

from grocery.data.models.discount_code import DiscountCodeModel


class DiscountRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_valid(self, code: str, now: datetime) -> DiscountCodeModel | None:
        return self.db.execute(
            select(DiscountCodeModel).where(
                func.upper(DiscountCodeModel.code) == code.upper(),
                or_(
                    DiscountCodeModel.expires_at.is_(None),
                    DiscountCodeModel.expires_at > now,
                ),
            )
        ).scalar_one_or_none()
