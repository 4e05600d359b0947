# grocery/repos/order_repo.py
from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.orm import Session, selectinload

from grocery.data.models.order import OrderModel
from grocery.data.models.order_item import OrderItemModel
from grocery.domain.enums import OrderStatus

_DETAILS = (
    selectinload(OrderModel.items),
    selectinload(OrderModel.shipping_address),
    selectinload(OrderModel.discount_code),
)


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    def create_order(self, order: OrderModel) -> OrderModel:
        self.db.add(order)
        self.db.flush()
        return order

    def add_items(self, items: list[OrderItemModel]) -> None:
        self.db.add_all(items)
        self.db.flush()

    def get_order(self, order_id: int) -> OrderModel | None:
        return self.db.get(OrderModel, order_id)

    def get_for_user(self, order_id: int, user_id: int) -> OrderModel | None:
        return self.db.execute(
            select(OrderModel)
            .where(OrderModel.id == order_id, OrderModel.user_id == user_id)
            .options(*_DETAILS)
        ).scalar_one_or_none()

    def list_for_user(self, user_id: int, sort_column, descending: bool = True) -> list[OrderModel]:
        order_by = sort_column.desc() if descending else sort_column.asc()
        return list(
            self.db.execute(
                select(OrderModel)
                .where(OrderModel.user_id == user_id)
                .options(*_DETAILS)
                .order_by(order_by, OrderModel.id.desc() if descending else OrderModel.id.asc())
            ).scalars().all()
        )

    def get_stale_pending(self, cutoff: datetime) -> list[OrderModel]:
        return list(
            self.db.execute(
                select(OrderModel).where(
                    OrderModel.status == OrderStatus.PENDING.value,
                    OrderModel.order_date < cutoff,
                )
            ).scalars().all()
        )

    def transition_status(self, order_id: int, from_status: OrderStatus, to_status: OrderStatus) -> int:
        # np. update orders set status='PROCESSING' where id=1 and status='PENDING'
        result = self.db.execute(
            update(OrderModel)
            .where(OrderModel.id == order_id, OrderModel.status == from_status.value)
            .values(status=to_status.value)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount
