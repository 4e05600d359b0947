# grocery/services/order_service.py
from datetime import datetime, timezone, timedelta

from sqlalchemy.orm import Session

from grocery.data.models.order import OrderModel
from grocery.data.models.order_item import OrderItemModel
from grocery.data.unit_of_work import unit_of_work
from grocery.domain.enums import DeliveryType, OrderStatus
from grocery.domain.errors import NotFoundError
from grocery.domain.schemas import OrderCreate
from grocery.repos.address_repo import AddressRepo
from grocery.repos.cart_repo import CartRepo
from grocery.repos.order_repo import OrderRepo
from grocery.repos.product_repo import ProductRepo
from grocery.services.discount_service import DiscountService
from grocery.services.pricing import calculate_totals
from grocery.utils.logging import get_logger

logger = get_logger(__name__)

SORTABLE_COLUMNS = {
    "order_date": OrderModel.order_date,
    "total_amount": OrderModel.total_amount,
}


class OrderService:
    """
    Serwis odpowiedzialny za domene zamowien.
    Zamowienie powstaje raz, atomowo; potem zmienia sie tylko status.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = OrderRepo(db)
        self.carts = CartRepo(db)
        self.products = ProductRepo(db)
        self.addresses = AddressRepo(db)
        self.discounts = DiscountService(db)

    def place_order(self, user_id: int, payload: OrderCreate) -> OrderModel:
        """
        Use Case: zlozenie zamowienia.
        Wszystko w jednej transakcji, blad na dowolnym kroku = brak zamowienia.
        """
        with unit_of_work(self.db):
            order = self.build_order(user_id, payload)

        logger.info(f"Order {order.id} placed by user {user_id}, total {order.total_amount}")
        return order

    def build_order(self, user_id: int, payload: OrderCreate) -> OrderModel:
        """
        Tworzy zamowienie w biezacej transakcji, bez commita.

        1. walidacja typu dostawy i adresu
        2. pozycje z koszyka albo od klienta, pusta lista -> blad
        3. kod rabatowy + kwoty
        4. Order (PENDING) i OrderItem ze snapshotem ceny
        5. czyszczenie koszyka jesli zrodlem byl koszyk
        """
        delivery_type = DeliveryType(payload.delivery_type)
        shipping_address_id = None

        if delivery_type == DeliveryType.DELIVERY:
            if not payload.shipping_address_id:
                raise ValueError("Missing delivery type or shipping address for delivery order")
            address = self.addresses.get_for_user(payload.shipping_address_id, user_id)
            if not address:
                raise ValueError("Shipping address not found")
            shipping_address_id = address.id

        cart = None
        if payload.items is None:
            cart = self.carts.get_cart_by_user(user_id)
            cart_items = self.carts.get_cart_items(cart.id) if cart else []
            lines = [(item.product, item.quantity) for item in cart_items]
        else:
            lines = self._client_lines(payload)

        if not lines:
            raise ValueError("Cart is empty")

        discount = self.discounts.find_valid(payload.discount_code)
        totals = calculate_totals(
            [(product.price, qty) for product, qty in lines],
            discount.percentage if discount else None,
        )

        order = self.repo.create_order(
            OrderModel(
                user_id=user_id,
                subtotal_amount=totals.subtotal,
                tax_amount=totals.tax,
                discount_amount=totals.discount,
                total_amount=totals.total,
                delivery_type=delivery_type.value,
                status=OrderStatus.PENDING.value,
                shipping_address_id=shipping_address_id,
                discount_code_id=discount.id if discount else None,
            )
        )

        self.repo.add_items(
            [
                OrderItemModel(
                    order_id=order.id,
                    product_id=product.id,
                    quantity=qty,
                    price_at_purchase=product.price,
                )
                for product, qty in lines
            ]
        )
        logger.info(f"Created {len(lines)} order items for order {order.id}")

        if cart is not None:
            self.carts.clear_items(cart.id)
            logger.info(f"Cleared cart {cart.id} for user {user_id}")

        return order

    def _client_lines(self, payload: OrderCreate):
        # ta sama pozycja podana dwa razy -> sumujemy ilosci
        quantities: dict[int, int] = {}
        for item in payload.items:
            quantities[item.product_id] = quantities.get(item.product_id, 0) + item.quantity

        products = self.products.get_products(quantities)
        missing = sorted(set(quantities) - set(products))
        if missing:
            raise ValueError(f"Unknown products: {missing}")

        return [(products[pid], qty) for pid, qty in quantities.items()]

    def list_orders(self, user_id: int, sort_by: str = "order_date", order: str = "desc") -> list[OrderModel]:
        column = SORTABLE_COLUMNS.get(sort_by)
        if column is None:
            raise ValueError(f"Cannot sort orders by {sort_by!r}")
        return self.repo.list_for_user(user_id, column, descending=order != "asc")

    def get_order(self, user_id: int, order_id: int) -> OrderModel:
        order = self.repo.get_for_user(order_id, user_id)
        if not order:
            raise NotFoundError("Order not found or unauthorized")
        return order

    def mark_processing(self, order_id: int) -> OrderModel | None:
        """
        PENDING -> PROCESSING po udanej platnosci.
        Zwraca zamowienie jesli przejscie nastapilo, None gdy status juz byl taki lub dalszy.
        """
        with unit_of_work(self.db):
            # warunkowy update, dwa rownolegle webhooki nie przestawia statusu dwa razy
            rowcount = self.repo.transition_status(
                order_id, OrderStatus.PENDING, OrderStatus.PROCESSING
            )
            order = self.repo.get_order(order_id)
            if not order:
                raise NotFoundError(f"Order {order_id} not found")

        if rowcount == 0:
            if order.status == OrderStatus.CANCELLED.value:
                logger.warning(f"Payment received for cancelled order {order_id}, status left unchanged")
            else:
                logger.info(f"Order {order_id} already {order.status}, nothing to do")
            return None

        logger.info(f"Order {order_id} PENDING -> PROCESSING")
        return order

    def cancel_stale_orders(self, older_than: timedelta) -> int:
        cutoff = datetime.now(timezone.utc) - older_than

        with unit_of_work(self.db):
            cancelled = 0
            for order in self.repo.get_stale_pending(cutoff):
                cancelled += self.repo.transition_status(
                    order.id, OrderStatus.PENDING, OrderStatus.CANCELLED
                )

        logger.info(f"Cancelled {cancelled} pending orders older than {cutoff.isoformat()}")
        return cancelled
