from datetime import datetime, timedelta, timezone
from decimal import Decimal
from unittest import mock

from tests.base import ApiTestCase
from grocery.data.models import OrderModel
from grocery.services.order_service import OrderService
from grocery.tasks import expire


class ExpirePendingOrdersTestCase(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.user = self.create_user()

    def add_order(self, status="PENDING", age=timedelta(0)) -> OrderModel:
        order = OrderModel(
            user_id=self.user.id,
            subtotal_amount=Decimal("5.00"),
            tax_amount=Decimal("0.41"),
            discount_amount=Decimal("0.00"),
            total_amount=Decimal("5.41"),
            delivery_type="PICKUP",
            status=status,
            order_date=datetime.now(timezone.utc) - age,
        )
        self.db.add(order)
        self.db.commit()
        return order

    def test_only_old_pending_orders_cancelled(self):
        stale = self.add_order(age=timedelta(days=2))
        fresh = self.add_order(age=timedelta(minutes=5))
        paid = self.add_order(status="PROCESSING", age=timedelta(days=2))

        cancelled = OrderService(self.Session()).cancel_stale_orders(timedelta(days=1))

        self.assertEqual(cancelled, 1)
        self.assertEqual(self.order(stale.id).status, "CANCELLED")
        self.assertEqual(self.order(fresh.id).status, "PENDING")
        self.assertEqual(self.order(paid.id).status, "PROCESSING")

    def test_task_uses_configured_ttl(self):
        stale = self.add_order(age=timedelta(days=2))

        with mock.patch.object(expire, "SessionLocal", self.Session):
            result = expire.expire_pending_orders_task.delay()

        self.assertEqual(result.get(), 1)
        self.assertEqual(self.order(stale.id).status, "CANCELLED")
