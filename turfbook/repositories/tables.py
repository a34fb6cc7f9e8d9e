"""SQLAlchemy tables for turfs and their reviews."""

from datetime import datetime

from sqlalchemy import JSON, Column, DateTime, Float, Integer, String, Text

from turfbook.database import Base
from turfbook.models.turfs import GeoPoint, Turf, TurfLocation


class TurfRow(Base):
    __tablename__ = "turfs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    turf_id = Column(String, nullable=False, unique=True, index=True)
    name = Column(String, nullable=False)
    address = Column(String, nullable=False, default="")
    city = Column(String, nullable=False, default="", index=True)
    state = Column(String, nullable=False, default="")
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    price_per_hour = Column(Float, nullable=True)
    court_size = Column(String, nullable=True)
    turf_photos = Column(JSON, nullable=False, default=list)
    facilities = Column(JSON, nullable=False, default=list)
    status = Column(String, nullable=False, default="pending", index=True)  # pending, approved, rejected, blocked
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    def to_model(self) -> Turf:
        coordinates = None
        if self.latitude is not None and self.longitude is not None:
            coordinates = GeoPoint(longitude=self.longitude, latitude=self.latitude)
        return Turf(
            turf_id=self.turf_id,
            name=self.name,
            location=TurfLocation(
                address=self.address or "",
                city=self.city or "",
                state=self.state or "",
                coordinates=coordinates,
            ),
            price_per_hour=self.price_per_hour,
            court_size=self.court_size,
            turf_photos=self.turf_photos or [],
            facilities=self.facilities or [],
            status=self.status,
            created_at=self.created_at,
        )


class ReviewRow(Base):
    __tablename__ = "reviews"

    id = Column(Integer, primary_key=True, autoincrement=True)
    turf_id = Column(String, nullable=False, index=True)
    user_id = Column(String, nullable=False)
    rating = Column(Integer, nullable=False)  # 1-5
    comment = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
