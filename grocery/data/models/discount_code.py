from sqlalchemy import Column, Integer, String, DateTime, CheckConstraint

from grocery.data.database import Base


class DiscountCodeModel(Base):
    __tablename__ = "discount_codes"

    id = Column(Integer, primary_key=True)
    code = Column(String(50), nullable=False, unique=True)  # zawsze upper-case
    percentage = Column(Integer, nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        CheckConstraint("percentage >= 0 AND percentage <= 100", name="ck_discount_percentage_range"),
    )
