from datetime import datetime
from sqlalchemy import Column, BigInteger, Integer, String, DateTime, Float
from airalert.db.database import Base


class SavedLocationRecord(Base):
    """User's saved location checked on every alert cycle"""

    __tablename__ = "saved_locations"

    id = Column(BigInteger().with_variant(Integer(), "sqlite"), primary_key=True, autoincrement=True)
    label = Column(String(100), nullable=False)  # User-defined name (e.g. "Home", "Work")
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)

    # Metadata
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<SavedLocationRecord(id={self.id}, label={self.label})>"
