# grocery/services/cart_service.py
from typing import Dict, Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from grocery.data.models.cart import CartModel
from grocery.data.models.cart_item import CartItemModel
from grocery.data.unit_of_work import unit_of_work
from grocery.domain.errors import NotFoundError
from grocery.repos.cart_repo import CartRepo
from grocery.repos.product_repo import ProductRepo
from grocery.utils.logging import get_logger

logger = get_logger(__name__)


def _is_positive_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


class CartService:
    """
    Use case'y dla koszyka.
    query (get_cart, get_item) tylko odczyt
    commands (add, update, remove, clear) w jednej transakcji kazda
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = CartRepo(db)
        self.products = ProductRepo(db)

    #query - odczyt
    def get_cart(self, user_id: int) -> Dict[str, Any]:
        cart = self.repo.get_cart_by_user(user_id)

        if not cart:
            # brak koszyka to pusty koszyk, nie blad
            return {"id": None, "user_id": user_id, "items": []}

        return {
            "id": cart.id,
            "user_id": cart.user_id,
            "items": self.repo.get_cart_items(cart.id),
        }

    def get_item(self, user_id: int, item_id: int) -> CartItemModel:
        item = self.repo.get_item_for_user(item_id, user_id)
        if not item:
            raise NotFoundError("Cart item not found or unauthorized")
        return item

    #commands
    def add_product(self, user_id: int, product_id: int, quantity: int) -> Dict[str, Any]:
        if not _is_positive_int(quantity):
            raise ValueError("Invalid product ID or quantity")

        if not self.products.get_product(product_id):
            raise NotFoundError("Product not found")

        try:
            with unit_of_work(self.db):
                self._upsert_item(user_id, product_id, quantity)
        except IntegrityError:
            # rownolegly request wstawil ten sam (cart, product), constraint w bazie wygral
            logger.warning(
                f"Concurrent insert for product {product_id} in cart of user {user_id}, retrying as increment"
            )
            with unit_of_work(self.db):
                self._upsert_item(user_id, product_id, quantity)

        return self.get_cart(user_id)

    def _upsert_item(self, user_id: int, product_id: int, quantity: int) -> CartItemModel:
        cart = self.repo.get_cart_by_user(user_id)
        if not cart:
            cart = self.repo.create_cart(CartModel(user_id=user_id))
            logger.info(f"Created new cart {cart.id} for user {user_id}")

        existing_item = self.repo.get_cart_item(cart.id, product_id)

        if existing_item:
            logger.info(
                f"Product {product_id} already in cart {cart.id}, quantity "
                f"{existing_item.quantity} -> {existing_item.quantity + quantity}"
            )
            existing_item.quantity += quantity
            self.db.flush()
            return existing_item

        logger.info(f"Adding product {product_id} to cart {cart.id}")
        return self.repo.add_cart_item(
            CartItemModel(cart_id=cart.id, product_id=product_id, quantity=quantity)
        )

    def update_quantity(self, user_id: int, item_id: int, quantity: int) -> Dict[str, Any]:
        if isinstance(quantity, bool) or not isinstance(quantity, int):
            raise ValueError("Invalid quantity provided")

        with unit_of_work(self.db):
            item = self.get_item(user_id, item_id)

            if quantity <= 0:
                logger.info(f"Quantity {quantity} for cart item {item_id}, removing it")
                self.repo.delete_item(item)
            else:
                item.quantity = quantity

        return self.get_cart(user_id)

    def remove_item(self, user_id: int, item_id: int) -> Dict[str, Any]:
        with unit_of_work(self.db):
            item = self.repo.get_item_for_user(item_id, user_id)
            if item:
                self.repo.delete_item(item)
                logger.info(f"Removed cart item {item_id} for user {user_id}")
            else:
                logger.info(f"Cart item {item_id} already absent for user {user_id}")

        return {"message": "Cart item deleted successfully", "id": item_id}

    def clear_cart(self, user_id: int) -> int:
        cart = self.repo.get_cart_by_user(user_id)
        if not cart:
            return 0

        with unit_of_work(self.db):
            removed = self.repo.clear_items(cart.id)

        logger.info(f"Cleared {removed} items from cart {cart.id}")
        return removed
