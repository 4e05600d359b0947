from sqlalchemy import Column, Integer, ForeignKey, String, DateTime, Numeric
from sqlalchemy.orm import relationship
from datetime import datetime, timezone

from grocery.data.database import Base
from grocery.domain.enums import OrderStatus


class OrderModel(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    subtotal_amount = Column(Numeric(10, 2), nullable=False)
    tax_amount = Column(Numeric(10, 2), nullable=False)
    discount_amount = Column(Numeric(10, 2), nullable=False, default=0)
    total_amount = Column(Numeric(10, 2), nullable=False)

    delivery_type = Column(String(20), nullable=False)  # PICKUP, DELIVERY
    status = Column(String(20), nullable=False, default=OrderStatus.PENDING.value)

    shipping_address_id = Column(Integer, ForeignKey("addresses.id", ondelete="SET NULL"), nullable=True)
    discount_code_id = Column(Integer, ForeignKey("discount_codes.id"), nullable=True)
    payment_session_id = Column(String(255), nullable=True, unique=True)

    order_date = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    items = relationship(
        "OrderItemModel",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItemModel.id",
    )
    shipping_address = relationship("AddressModel")
    discount_code = relationship("DiscountCodeModel")
