# foodshare/models/donation.py
from sqlalchemy import Column, String, Integer, Text, JSON, ForeignKey

from foodshare.models.base import Base, UTCDateTime, new_id, utcnow


class Donation(Base):
    """Time-boxed offer of a quantity of a product"""
    __tablename__ = "donations"

    id = Column(String(64), primary_key=True, default=new_id)
    business_id = Column(String(64), ForeignKey("businesses.id"), nullable=False, index=True)
    # Reference only: deleting the product leaves the donation untouched
    product_id = Column(String(64), nullable=False)

    quantity = Column(Integer, nullable=False)
    max_per_person = Column(Integer, nullable=False, default=1)
    description = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default="active")  # active, paused, completed

    available_from = Column(UTCDateTime, nullable=False)
    available_to = Column(UTCDateTime, nullable=False)
    collection_slots = Column(JSON, nullable=False, default=list)

    fiscal_value = Column(String(20), nullable=True)  # decimal string
    fiscal_policy = Column(String(30), nullable=False, default="full_value")

    created_at = Column(UTCDateTime, default=utcnow)

    def __repr__(self):
        return f"<Donation(id={self.id}, product_id={self.product_id}, status={self.status})>"
