from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from decimal import Decimal

from app.models.court import CourtStatus


class CourtBase(BaseModel):
    court_type: str = Field(..., min_length=1)
    court_number: int = Field(..., gt=0)
    status: CourtStatus = CourtStatus.AVAILABLE
    price_per_hour: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)


class CourtCreate(CourtBase):
    pass


class CourtUpdate(CourtBase):
    # Reemplazo completo: el estado es obligatorio en un PUT
    status: CourtStatus


class CourtInDB(CourtBase):
    id: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class CourtResponse(CourtInDB):
    pass
