# grocery/tasks/expire.py
from datetime import timedelta

from grocery.celery_worker import celery_app
from grocery.data.database import SessionLocal
from grocery.services.order_service import OrderService
from grocery.utils.settings import PENDING_ORDER_TTL_SECONDS
from grocery.utils.logging import get_logger

logger = get_logger(__name__)


@celery_app.task(name="grocery.tasks.expire.expire_pending_orders_task")
def expire_pending_orders_task():
    logger.info("Expire pending orders task started")

    db = SessionLocal()
    try:
        return OrderService(db).cancel_stale_orders(
            timedelta(seconds=PENDING_ORDER_TTL_SECONDS)
        )
    finally:
        db.close()
