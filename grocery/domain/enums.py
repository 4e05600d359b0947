# grocery/domain/enums.py
from enum import Enum


class DeliveryType(str, Enum):
    PICKUP = "PICKUP"
    DELIVERY = "DELIVERY"


class OrderStatus(str, Enum):
    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"
