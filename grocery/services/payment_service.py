# grocery/services/payment_service.py
from typing import Any, Dict

from sqlalchemy.orm import Session

from grocery.domain.enums import OrderStatus
from grocery.services.lock_service import LockService
from grocery.services.notification_service import NotificationService
from grocery.services.order_service import OrderService
from grocery.services.payment_gateway import StripeGateway
from grocery.utils.logging import get_logger

logger = get_logger(__name__)

# zdarzenia oznaczajace udana platnosc
PAYMENT_SUCCEEDED_EVENTS = {"charge.succeeded", "checkout.session.completed"}


class PaymentService:
    """
    Obsluga webhooka bramki platniczej.

    1. weryfikacja podpisu (blad -> PaymentSignatureError, brak zmian)
    2. order_id z metadata
    3. rezerwacja id zdarzenia w Redis, powtorka = duplicate
    4. PENDING -> PROCESSING + powiadomienie
    Bez retry po naszej stronie, ponowienia robi bramka.
    """

    def __init__(
        self,
        db: Session,
        gateway: StripeGateway,
        lock_service: LockService,
        notification_service: NotificationService | None = None,
    ):
        self.gateway = gateway
        self.lock_service = lock_service
        self.orders = OrderService(db)
        self.notification_service = notification_service or NotificationService()

    def handle_webhook(self, payload: bytes, signature: str | None) -> Dict[str, Any]:
        event = self.gateway.verify_event(payload, signature)
        event_type = event.get("type")

        if event_type not in PAYMENT_SUCCEEDED_EVENTS:
            logger.info(f"Ignoring webhook event {event_type}")
            return {"received": True, "status": "ignored"}

        obj = (event.get("data") or {}).get("object") or {}
        order_id = self._order_id(obj.get("metadata") or {})
        event_id = event.get("id") or f"{event_type}:{obj.get('id')}"

        if not self.lock_service.claim_event(event_id):
            logger.info(f"Webhook event {event_id} already processed")
            return {"received": True, "status": "duplicate"}

        try:
            order = self.orders.mark_processing(order_id)
        except Exception:
            # zwolnij rezerwacje, ponowienie z bramki sprobuje jeszcze raz
            self.lock_service.release_event(event_id)
            raise

        if order is not None:
            # status juz zapisany, blad brokera nie moze zamienic webhooka w 500
            try:
                self.notification_service.send_order_notification(
                    order.user_id, order.id, OrderStatus.PROCESSING.value
                )
            except Exception as e:
                logger.warning(f"Failed to enqueue notification for order {order.id}: {e}")

        return {"received": True, "status": "processed"}

    @staticmethod
    def _order_id(metadata: Dict[str, Any]) -> int:
        raw = metadata.get("order_id")
        try:
            return int(raw)
        except (TypeError, ValueError):
            logger.warning("Missing order metadata in webhook event")
            raise ValueError("Missing order metadata") from None
