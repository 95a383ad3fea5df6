# foodshare/models/__init__.py
from .base import Base
from .business import Business
from .product import Product
from .donation import Donation
from .schedule import Schedule, Closure

__all__ = [
    "Base",
    "Business",
    "Product",
    "Donation",
    "Schedule",
    "Closure",
]
