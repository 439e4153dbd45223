from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    Enum,
    Numeric,
    UniqueConstraint,
)
from app.database import Base
import enum
from datetime import datetime


class CourtStatus(str, enum.Enum):
    AVAILABLE = "available"
    UNAVAILABLE = "unavailable"


class Court(Base):
    __tablename__ = "courts"
    __table_args__ = (
        UniqueConstraint("court_type", "court_number", name="uq_courts_type_number"),
        {"extend_existing": True},
    )

    id = Column(Integer, primary_key=True, index=True)
    court_type = Column(String, nullable=False)  # e.g., tennis, padel, basketball
    court_number = Column(Integer, nullable=False)
    status = Column(
        Enum(CourtStatus, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=CourtStatus.AVAILABLE,
    )
    price_per_hour = Column(Numeric(10, 2), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
