# grocery/services/address_service.py
from typing import Dict, Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from grocery.data.models.address import AddressModel
from grocery.data.unit_of_work import unit_of_work
from grocery.domain.errors import ConflictError, NotFoundError
from grocery.domain.schemas import AddressCreate, AddressUpdate
from grocery.repos.address_repo import AddressRepo
from grocery.utils.logging import get_logger

logger = get_logger(__name__)


class AddressService:
    """Ksiazka adresowa. Najwyzej jeden domyslny adres na uzytkownika."""

    def __init__(self, db: Session):
        self.db = db
        self.repo = AddressRepo(db)

    def list_addresses(self, user_id: int) -> list[AddressModel]:
        return self.repo.list_for_user(user_id)

    def create_address(self, user_id: int, payload: AddressCreate) -> AddressModel:
        try:
            with unit_of_work(self.db):
                if payload.is_default:
                    self.repo.unset_defaults(user_id)

                address = self.repo.add(AddressModel(user_id=user_id, **payload.model_dump()))
        except IntegrityError as e:
            # rownolegle zapisany inny domyslny adres
            raise ConflictError("Another default address was saved concurrently") from e

        logger.info(f"Created address {address.id} for user {user_id} (default={address.is_default})")
        return address

    def update_address(self, user_id: int, address_id: int, payload: AddressUpdate) -> AddressModel:
        changes = payload.model_dump(exclude_unset=True)
        if not changes:
            raise ValueError("No fields provided for update")
        # null w polu wymaganym nie moze nadpisac wartosci
        for field in ("street", "city", "state", "zip_code", "is_default"):
            if field in changes and changes[field] is None:
                raise ValueError(f"Field {field} cannot be null")

        try:
            with unit_of_work(self.db):
                address = self.repo.get_for_user(address_id, user_id)
                if not address:
                    raise NotFoundError("Address not found or unauthorized")

                if changes.get("is_default") is True:
                    self.repo.unset_defaults(user_id, except_id=address.id)

                for field, value in changes.items():
                    setattr(address, field, value)
        except IntegrityError as e:
            raise ConflictError("Another default address was saved concurrently") from e

        return address

    def delete_address(self, user_id: int, address_id: int) -> Dict[str, Any]:
        with unit_of_work(self.db):
            address = self.repo.get_for_user(address_id, user_id)
            if not address:
                raise NotFoundError("Address not found or unauthorized")
            self.repo.delete(address)

        logger.info(f"Deleted address {address_id} for user {user_id}")
        return {"message": "Address deleted successfully", "id": address_id}
