# grocery/data/seed.py
from datetime import datetime, timezone, timedelta
from decimal import Decimal

from grocery.data.database import SessionLocal, init_db
from grocery.data.models import DiscountCodeModel, ProductModel, UserModel
from grocery.data.unit_of_work import unit_of_work
from grocery.services.auth import hash_password
from grocery.utils.logging import get_logger

logger = get_logger(__name__)

PRODUCTS = [
    ("Organic Apples", "3.99", "Produce", True),
    ("Whole Milk (Gallon)", "4.50", "Dairy", True),
    ("Artisan Bread", "2.75", "Bakery", True),
    ("Cage-Free Eggs (Dozen)", "5.20", "Dairy", False),
    ("Avocado (Each)", "1.50", "Produce", True),
    ("Salmon Fillet (LB)", "12.99", "Seafood", True),
    ("Organic Spinach", "3.20", "Produce", True),
]

DISCOUNT_CODES = [
    ("SAVE10", 10, None),
    ("WELCOME20", 20, timedelta(days=30)),
]


def seed():
    init_db()
    db = SessionLocal()
    try:
        # seed tylko na pustej bazie
        if db.query(ProductModel).first():
            logger.info("Database already seeded")
            return

        now = datetime.now(timezone.utc)
        with unit_of_work(db):
            db.add_all(
                ProductModel(name=name, price=Decimal(price), category=category, in_stock=in_stock)
                for name, price, category, in_stock in PRODUCTS
            )
            db.add_all(
                DiscountCodeModel(code=code, percentage=pct, expires_at=now + ttl if ttl else None)
                for code, pct, ttl in DISCOUNT_CODES
            )
            db.add(UserModel(email="user1@example.com", password_hash=hash_password("Password123!")))

        logger.info(f"Seeded {len(PRODUCTS)} products and {len(DISCOUNT_CODES)} discount codes")
    finally:
        db.close()


if __name__ == "__main__":
    seed()
