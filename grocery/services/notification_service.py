# grocery/services/notification_service.py
from grocery.celery_worker import celery_app
from grocery.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Powiadomienia o zmianie statusu zamowienia.
    Celery, poza requestem.
    """

    @staticmethod
    def send_order_notification(user_id: int, order_id: int, status: str):
        send_order_notification_task.delay(user_id, order_id, status)


@celery_app.task(name="grocery.services.notification_service.send_order_notification_task")
def send_order_notification_task(user_id: int, order_id: int, status: str):
    """
    W prawdziwym systemie email, tu tylko log.
    """
    logger.info(f"[NOTIFICATION] User {user_id}: Order {order_id} is now {status}")

    return {"user_id": user_id, "order_id": order_id, "status": status, "sent": True}
