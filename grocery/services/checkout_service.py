# grocery/services/checkout_service.py
from decimal import Decimal
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from grocery.data.models.order import OrderModel
from grocery.data.unit_of_work import unit_of_work
from grocery.domain.schemas import OrderCreate
from grocery.services.order_service import OrderService
from grocery.services.payment_gateway import StripeGateway
from grocery.services.pricing import to_minor_units
from grocery.utils.settings import APP_BASE_URL, CURRENCY
from grocery.utils.logging import get_logger

logger = get_logger(__name__)


class CheckoutService:
    """
    Use Case: checkout przez bramke platnicza.

    Zamowienie PENDING i sesja Stripe w jednej transakcji:
    blad bramki = rollback, brak zamowienia, koszyk nietkniety.
    """

    def __init__(self, db: Session, gateway: StripeGateway):
        self.db = db
        self.gateway = gateway
        self.orders = OrderService(db)

    def start_checkout(self, user_id: int, payload: OrderCreate) -> Dict[str, Any]:
        with unit_of_work(self.db):
            order = self.orders.build_order(user_id, payload)

            discounts = None
            if order.discount_amount and Decimal(order.discount_amount) > 0:
                # kupon na dokladna kwote rabatu, suma w Stripe = total policzony lokalnie
                coupon = self.gateway.create_coupon(
                    amount_off=to_minor_units(order.discount_amount),
                    currency=CURRENCY,
                )
                discounts = [{"coupon": coupon["id"]}]

            session = self.gateway.create_checkout_session(
                line_items=self._line_items(order),
                metadata=self._metadata(order),
                success_url=f"{APP_BASE_URL}/order-success?order_id={order.id}",
                cancel_url=f"{APP_BASE_URL}/cart",
                discounts=discounts,
            )

            order.payment_session_id = session["id"]

        logger.info(f"Checkout session {session['id']} created for order {order.id}")
        return {"url": session["url"], "order_id": order.id}

    @staticmethod
    def _line_items(order: OrderModel) -> List[Dict[str, Any]]:
        line_items = [
            {
                "price_data": {
                    "currency": CURRENCY,
                    "product_data": {"name": item.product.name},
                    "unit_amount": to_minor_units(item.price_at_purchase),
                },
                "quantity": item.quantity,
            }
            for item in order.items
        ]

        tax_minor = to_minor_units(order.tax_amount)
        if tax_minor > 0:
            line_items.append(
                {
                    "price_data": {
                        "currency": CURRENCY,
                        "product_data": {"name": "Sales tax"},
                        "unit_amount": tax_minor,
                    },
                    "quantity": 1,
                }
            )
        return line_items

    @staticmethod
    def _metadata(order: OrderModel) -> Dict[str, str]:
        # Stripe przyjmuje w metadata tylko stringi
        return {
            "order_id": str(order.id),
            "user_id": str(order.user_id),
            "delivery_type": order.delivery_type,
            "shipping_address_id": str(order.shipping_address_id or ""),
        }
