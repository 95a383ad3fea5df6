# foodshare/models/schedule.py
from sqlalchemy import Column, String, Integer, Boolean, Date, JSON, ForeignKey, UniqueConstraint

from foodshare.models.base import Base, UTCDateTime, new_id, utcnow


class Schedule(Base):
    """Weekly collection window for one business on one day"""
    __tablename__ = "schedules"
    __table_args__ = (
        UniqueConstraint("business_id", "day_of_week", name="uq_schedule_business_day"),
    )

    id = Column(String(64), primary_key=True, default=new_id)
    business_id = Column(String(64), ForeignKey("businesses.id"), nullable=False, index=True)

    day_of_week = Column(Integer, nullable=False)  # 0=Sunday, 6=Saturday
    is_open = Column(Boolean, nullable=False, default=True)
    time_slots = Column(JSON, nullable=False, default=list)  # [{start_time, end_time, label, type}]
    business_type = Column(String(30), nullable=False)  # restaurant, culture, bien-etre

    def __repr__(self):
        return f"<Schedule(business_id={self.business_id}, day={self.day_of_week})>"


class Closure(Base):
    """Exceptional or emergency closure on a specific date"""
    __tablename__ = "closures"

    id = Column(String(64), primary_key=True, default=new_id)
    business_id = Column(String(64), ForeignKey("businesses.id"), nullable=False, index=True)

    date = Column(Date, nullable=False)
    reason = Column(String(300), nullable=True)  # "Noël", "Panne", etc.
    is_emergency = Column(Boolean, nullable=False, default=False)

    created_at = Column(UTCDateTime, default=utcnow)

    def __repr__(self):
        return f"<Closure(business_id={self.business_id}, date={self.date})>"
