# foodshare/models/product.py
from sqlalchemy import Column, String, Integer, Text, ForeignKey

from foodshare.models.base import Base, UTCDateTime, new_id, utcnow


class Product(Base):
    """Catalog item a business can donate"""
    __tablename__ = "products"

    id = Column(String(64), primary_key=True, default=new_id)
    business_id = Column(String(64), ForeignKey("businesses.id"), nullable=False, index=True)

    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    category = Column(String(50), nullable=False)
    unit_price = Column(String(20), nullable=False)  # decimal string, e.g. "12.80"
    current_stock = Column(Integer, nullable=False, default=0)
    expiry_date = Column(UTCDateTime, nullable=True)
    photo_url = Column(String(500), nullable=True)

    created_at = Column(UTCDateTime, default=utcnow)

    def __repr__(self):
        return f"<Product(id={self.id}, name={self.name})>"
