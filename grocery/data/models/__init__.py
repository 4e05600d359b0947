#import wszystkich modeli zeby SQLAlchemy je zarejestrowal w base metadata

from grocery.data.models.user import UserModel
from grocery.data.models.product import ProductModel
from grocery.data.models.cart import CartModel
from grocery.data.models.cart_item import CartItemModel
from grocery.data.models.discount_code import DiscountCodeModel
from grocery.data.models.address import AddressModel
from grocery.data.models.order import OrderModel
from grocery.data.models.order_item import OrderItemModel

__all__ = [
    "UserModel",
    "ProductModel",
    "CartModel",
    "CartItemModel",
    "DiscountCodeModel",
    "AddressModel",
    "OrderModel",
    "OrderItemModel",
]
