# grocery/repos/address_repo.py
from sqlalchemy import select, update
from sqlalchemy.orm import Session

from grocery.data.models.address import AddressModel
from grocery.data.models.order import OrderModel


class AddressRepo:
    def __init__(self, db: Session):
        self.db = db

    def list_for_user(self, user_id: int) -> list[AddressModel]:
        return list(
            self.db.execute(
                select(AddressModel)
                .where(AddressModel.user_id == user_id)
                .order_by(AddressModel.is_default.desc(), AddressModel.id)
            ).scalars().all()
        )

    def get_for_user(self, address_id: int, user_id: int) -> AddressModel | None:
        return self.db.execute(
            select(AddressModel).where(
                AddressModel.id == address_id,
                AddressModel.user_id == user_id,
            )
        ).scalar_one_or_none()

    def add(self, address: AddressModel) -> AddressModel:
        self.db.add(address)
        self.db.flush()
        return address

    def unset_defaults(self, user_id: int, except_id: int | None = None) -> int:
        stmt = (
            update(AddressModel)
            .where(AddressModel.user_id == user_id, AddressModel.is_default.is_(True))
            .values(is_default=False)
            .execution_options(synchronize_session="fetch")
        )
        if except_id is not None:
            stmt = stmt.where(AddressModel.id != except_id)
        return self.db.execute(stmt).rowcount

    def delete(self, address: AddressModel) -> None:
        # zamowienia zachowuja wiersz, tracą tylko referencje
        self.db.execute(
            update(OrderModel)
            .where(OrderModel.shipping_address_id == address.id)
            .values(shipping_address_id=None)
            .execution_options(synchronize_session="fetch")
        )
        self.db.delete(address)
        self.db.flush()
