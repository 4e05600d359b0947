# grocery/repos/product_repo.py
from sqlalchemy import select, func
from sqlalchemy.orm import Session

from grocery.data.models.product import ProductModel


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_product(self, product_id: int) -> ProductModel | None:
        return self.db.get(ProductModel, product_id)

    def get_products(self, product_ids) -> dict[int, ProductModel]:
        ids = set(product_ids)
        if not ids:
            return {}
        rows = self.db.execute(
            select(ProductModel).where(ProductModel.id.in_(ids))
        ).scalars().all()
        return {p.id: p for p in rows}

    def search(
        self,
        search: str = "",
        sort_column=None,
        descending: bool = False,
        category: str | None = None,
    ) -> list[ProductModel]:
        stmt = select(ProductModel)
        if search:
            # % i _ od klienta to zwykle znaki, nie wildcardy
            stmt = stmt.where(ProductModel.name.icontains(search, autoescape=True))
        if category:
            stmt = stmt.where(func.lower(ProductModel.category) == category.lower())
        if sort_column is not None:
            stmt = stmt.order_by(sort_column.desc() if descending else sort_column.asc(), ProductModel.id)
        else:
            stmt = stmt.order_by(ProductModel.id)
        return list(self.db.execute(stmt).scalars().all())
