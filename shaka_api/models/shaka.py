# SQLAlchemy models

from sqlalchemy import CheckConstraint, Column, DateTime, Float, Index, Integer, Text
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class Shaka(Base):
    __tablename__ = "shakas"

    id = Column(Integer, primary_key=True, autoincrement=True)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    location_name = Column(Text)
    message = Column(Text, nullable=True)
    user_agent = Column(Text)
    created_at = Column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        CheckConstraint("latitude >= -90 AND latitude <= 90", name="valid_lat"),
        CheckConstraint("longitude >= -180 AND longitude <= 180", name="valid_lng"),
        # Newest-first listing and geo-range lookups
        Index("idx_created_at", "created_at"),
        Index("idx_coordinates", "latitude", "longitude"),
    )
