# grocery/services/product_service.py
from sqlalchemy.orm import Session

from grocery.data.models.product import ProductModel
from grocery.domain.errors import NotFoundError
from grocery.repos.product_repo import ProductRepo


class ProductService:
    def __init__(self, db: Session):
        self.repo = ProductRepo(db)

    def search(
        self,
        search: str = "",
        sort_by: str | None = None,
        order: str = "asc",
        category: str | None = None,
    ) -> list[ProductModel]:
        # sortowanie tylko po cenie albo dostepnosci, inne wartosci -> in_stock
        sort_column = None
        if sort_by:
            sort_column = ProductModel.price if sort_by == "price" else ProductModel.in_stock

        return self.repo.search(
            search=search.strip(),
            sort_column=sort_column,
            descending=order == "desc",
            category=category or None,
        )

    def get_product(self, product_id: int) -> ProductModel:
        product = self.repo.get_product(product_id)
        if not product:
            raise NotFoundError("Product not found")
        return product
