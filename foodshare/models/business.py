# foodshare/models/business.py
from sqlalchemy import Column, String, Boolean, Text

from foodshare.models.base import Base, UTCDateTime, new_id, utcnow


class Business(Base):
    __tablename__ = "businesses"

    id = Column(String(64), primary_key=True, default=new_id)
    name = Column(String(200), nullable=False)
    type = Column(String(100), nullable=False)  # Restaurant, Supermarché, Boulangerie, Théâtre...
    description = Column(Text, nullable=True)
    address = Column(String(300), nullable=True)
    photo_url = Column(String(500), nullable=True)
    collection_instructions = Column(Text, nullable=True)
    is_active = Column(Boolean, default=True)

    created_at = Column(UTCDateTime, default=utcnow)

    def __repr__(self):
        return f"<Business(id={self.id}, name={self.name})>"
