from decimal import Decimal

from tests.base import ApiTestCase
from grocery.data.models import OrderModel

D = Decimal


class CheckoutApiTestCase(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.user = self.create_user()
        self.apples = self.create_product("Organic Apples", "3.99")
        self.milk = self.create_product("Whole Milk (Gallon)", "4.50", category="Dairy")
        self.add_to_cart(self.user, self.apples, 2)
        self.add_to_cart(self.user, self.milk, 1)

    def checkout(self, **payload):
        payload.setdefault("delivery_type", "PICKUP")
        return self.client.post("/api/checkout", json=payload, headers=self.auth(self.user))

    def test_creates_pending_order_and_session(self):
        resp = self.checkout()

        self.assertEqual(resp.status_code, 200, resp.text)
        body = resp.json()
        self.assertEqual(body["url"], "https://checkout.stripe.test/pay/cs_test_1")

        order = self.order(body["order_id"])
        self.assertEqual(order.status, "PENDING")
        self.assertEqual(order.payment_session_id, "cs_test_1")
        self.assertEqual(self.cart_items(self.user), [])

        session = self.gateway.sessions[0]
        self.assertEqual(session["metadata"]["order_id"], str(order.id))
        self.assertEqual(session["metadata"]["delivery_type"], "PICKUP")
        self.assertEqual(session["metadata"]["shipping_address_id"], "")
        self.assertIsNone(session["discounts"])
        self.assertEqual(session["success_url"], f"http://testserver/order-success?order_id={order.id}")

    def test_line_items_are_in_cents_and_match_total(self):
        self.checkout()
        line_items = self.gateway.sessions[0]["line_items"]

        amounts = sorted(
            (li["price_data"]["product_data"]["name"], li["price_data"]["unit_amount"], li["quantity"])
            for li in line_items
        )
        self.assertEqual(
            amounts,
            [("Organic Apples", 399, 2), ("Sales tax", 103, 1), ("Whole Milk (Gallon)", 450, 1)],
        )
        gross = sum(li["price_data"]["unit_amount"] * li["quantity"] for li in line_items)
        self.assertEqual(gross, 1351)

    def test_discount_creates_one_time_coupon(self):
        self.create_discount("SAVE10", 10)

        resp = self.checkout(discount_code="SAVE10")

        order = self.order(resp.json()["order_id"])
        self.assertEqual(order.discount_amount, D("1.25"))
        self.assertEqual(self.gateway.coupons, [{"id": "coupon_1", "amount_off": 125, "percent_off": None, "currency": "usd"}])
        self.assertEqual(self.gateway.sessions[0]["discounts"], [{"coupon": "coupon_1"}])

        gross = sum(li["price_data"]["unit_amount"] * li["quantity"] for li in self.gateway.sessions[0]["line_items"])
        self.assertEqual(gross - 125, 1226)

    def test_gateway_failure_rolls_back(self):
        self.gateway.fail = True

        resp = self.checkout()

        self.assertEqual(resp.status_code, 502)
        self.assertEqual(self.count(OrderModel), 0)
        self.assertEqual(len(self.cart_items(self.user)), 2)

    def test_validation_errors_are_400(self):
        self.assertEqual(self.checkout(delivery_type="DELIVERY").status_code, 400)
        self.client.delete("/api/cart", headers=self.auth(self.user))
        self.assertEqual(self.checkout().status_code, 400)
        self.assertEqual(self.gateway.sessions, [])

    def test_requires_authentication(self):
        resp = self.client.post("/api/checkout", json={"delivery_type": "PICKUP"})
        self.assertEqual(resp.status_code, 401)
