from pydantic import BaseModel, Field, model_validator
import datetime as dt
from typing import Optional


class BookingBase(BaseModel):
    date: dt.date
    time_start: dt.time
    time_end: dt.time
    description: Optional[str] = None

    @model_validator(mode="after")
    def check_time_range(self):
        if self.time_start >= self.time_end:
            raise ValueError("time_start must be earlier than time_end")
        return self


class BookingCreate(BookingBase):
    user_id: int
    court_type: str = Field(..., min_length=1)
    court_number: int = Field(..., gt=0)


class BookingUpdate(BaseModel):
    """
    Actualización parcial. La cancha no se puede cambiar una vez creada la reserva;
    el rango combinado se valida en app/crud/booking.py.
    """

    date: Optional[dt.date] = None
    time_start: Optional[dt.time] = None
    time_end: Optional[dt.time] = None
    description: Optional[str] = None


class BookingInDB(BookingBase):
    id: int
    user_id: int
    court_type: str
    court_number: int
    created_at: Optional[dt.datetime] = None

    class Config:
        from_attributes = True


class Booking(BookingInDB):
    pass


class BookingDeleted(BaseModel):
    success: bool = True
    booking: Booking
