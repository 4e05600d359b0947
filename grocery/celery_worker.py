# grocery/celery_worker.py
from celery import Celery

from grocery.utils.settings import (
    CELERY_BROKER_URL,
    CELERY_RESULT_BACKEND,
    CELERY_TASK_ALWAYS_EAGER,
)

celery_app = Celery(
    "grocery",
    broker=CELERY_BROKER_URL,
    backend=CELERY_RESULT_BACKEND,
)

# taski importowane explicite, zeby worker je zarejestrowal
celery_app.conf.imports = (
    "grocery.tasks.expire",
    "grocery.services.notification_service",
)

celery_app.conf.beat_schedule = {
    "expire-pending-orders-every-10-minutes": {
        "task": "grocery.tasks.expire.expire_pending_orders_task",
        "schedule": 600.0,
    },
}

celery_app.conf.timezone = "UTC"
celery_app.conf.task_always_eager = CELERY_TASK_ALWAYS_EAGER
