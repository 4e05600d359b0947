# tests/base.py
import hashlib
import hmac
import json
import time
import unittest
from decimal import Decimal

import fakeredis
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from grocery.api.deps import get_gateway, get_lock_service
from grocery.data.database import get_db, init_db, make_engine
from grocery.data.models import (
    AddressModel,
    CartItemModel,
    CartModel,
    DiscountCodeModel,
    OrderModel,
    ProductModel,
    UserModel,
)
from grocery.domain.errors import PaymentGatewayError
from grocery.main import create_app
from grocery.services.auth import create_token, hash_password
from grocery.services.lock_service import LockService
from grocery.services.payment_gateway import StripeGateway

WEBHOOK_SECRET = "whsec_test_secret"


class FakeGateway(StripeGateway):
    """Bramka bez sieci; weryfikacja podpisu zostaje prawdziwa."""

    def __init__(self):
        super().__init__(api_key="sk_test_dummy", webhook_secret=WEBHOOK_SECRET)
        self.sessions = []
        self.coupons = []
        self.fail = False

    def create_checkout_session(self, line_items, metadata, success_url, cancel_url, discounts=None):
        if self.fail:
            raise PaymentGatewayError("Failed to create checkout session")
        session_id = f"cs_test_{len(self.sessions) + 1}"
        self.sessions.append(
            {
                "id": session_id,
                "line_items": line_items,
                "metadata": metadata,
                "success_url": success_url,
                "cancel_url": cancel_url,
                "discounts": discounts,
            }
        )
        return {"id": session_id, "url": f"https://checkout.stripe.test/pay/{session_id}"}

    def create_coupon(self, amount_off=None, percent_off=None, currency="usd"):
        coupon_id = f"coupon_{len(self.coupons) + 1}"
        self.coupons.append(
            {"id": coupon_id, "amount_off": amount_off, "percent_off": percent_off, "currency": currency}
        )
        return {"id": coupon_id}


def sign_payload(payload: str, secret: str = WEBHOOK_SECRET, timestamp: int | None = None) -> str:
    timestamp = timestamp or int(time.time())
    signature = hmac.new(
        secret.encode("utf-8"), f"{timestamp}.{payload}".encode("utf-8"), hashlib.sha256
    ).hexdigest()
    return f"t={timestamp},v1={signature}"


class ApiTestCase(unittest.TestCase):
    """Aplikacja na sqlite w pamieci, z podmieniona bramka i redisem."""

    def setUp(self):
        self.engine = make_engine("sqlite://")
        init_db(self.engine)
        self.Session = sessionmaker(bind=self.engine, autoflush=False, expire_on_commit=False)
        self.db = self.Session()

        self.gateway = FakeGateway()
        self.redis = fakeredis.FakeRedis(decode_responses=True)

        def override_get_db():
            db = self.Session()
            try:
                yield db
            finally:
                db.close()

        self.app = create_app()
        self.app.dependency_overrides[get_db] = override_get_db
        self.app.dependency_overrides[get_gateway] = lambda: self.gateway
        self.app.dependency_overrides[get_lock_service] = lambda: LockService(client=self.redis)
        self.client = TestClient(self.app)

    def tearDown(self):
        self.db.close()
        self.engine.dispose()

    # ---------- fixtures ----------

    def create_user(self, email="shopper@example.com", password="Sup3r-Secret-Pass") -> UserModel:
        user = UserModel(email=email, password_hash=hash_password(password))
        self.db.add(user)
        self.db.commit()
        return user

    def auth(self, user: UserModel) -> dict:
        return {"Authorization": f"Bearer {create_token(user.id, user.email)}"}

    def create_product(self, name="Organic Apples", price="3.99", in_stock=True, category="Produce") -> ProductModel:
        product = ProductModel(name=name, price=Decimal(price), in_stock=in_stock, category=category)
        self.db.add(product)
        self.db.commit()
        return product

    def create_discount(self, code="SAVE10", percentage=10, expires_at=None) -> DiscountCodeModel:
        discount = DiscountCodeModel(code=code, percentage=percentage, expires_at=expires_at)
        self.db.add(discount)
        self.db.commit()
        return discount

    def create_address(self, user: UserModel, is_default=False, street="1 Main St") -> AddressModel:
        address = AddressModel(
            user_id=user.id,
            street=street,
            city="Austin",
            state="TX",
            zip_code="73301",
            is_default=is_default,
        )
        self.db.add(address)
        self.db.commit()
        return address

    def add_to_cart(self, user: UserModel, product: ProductModel, quantity: int):
        resp = self.client.post(
            "/api/cart",
            json={"product_id": product.id, "quantity": quantity},
            headers=self.auth(user),
        )
        self.assertEqual(resp.status_code, 200, resp.text)
        return resp.json()

    # ---------- odczyt stanu ----------

    def count(self, model) -> int:
        self.db.expire_all()
        return self.db.query(model).count()

    def cart_items(self, user: UserModel) -> list:
        self.db.expire_all()
        return (
            self.db.query(CartItemModel)
            .join(CartModel, CartModel.id == CartItemModel.cart_id)
            .filter(CartModel.user_id == user.id)
            .all()
        )

    def order(self, order_id: int) -> OrderModel:
        self.db.expire_all()
        return self.db.get(OrderModel, order_id)

    def webhook(self, event: dict, signature: str | None = None):
        payload = json.dumps(event)
        return self.client.post(
            "/api/stripe/webhook",
            content=payload,
            headers={
                "Stripe-Signature": signature or sign_payload(payload),
                "Content-Type": "application/json",
            },
        )
