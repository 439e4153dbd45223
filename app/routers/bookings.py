from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List, Optional

from app.database import get_db
from app.crud import booking as crud
from app.schemas.booking import Booking, BookingCreate, BookingUpdate, BookingDeleted
from app.utils.booking_overlap import BookingConflictError

router = APIRouter()


@router.post("", response_model=Booking, status_code=status.HTTP_201_CREATED)
def create_booking(booking: BookingCreate, db: Session = Depends(get_db)):
    try:
        return crud.create_booking(db=db, booking=booking)
    except BookingConflictError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("", response_model=List[Booking])
def read_bookings(user_id: Optional[int] = None, db: Session = Depends(get_db)):
    return crud.get_bookings(db=db, user_id=user_id)


@router.get("/{booking_id}", response_model=Booking)
def read_booking(booking_id: int, db: Session = Depends(get_db)):
    db_booking = crud.get_booking(db=db, booking_id=booking_id)
    if db_booking is None:
        raise HTTPException(status_code=404, detail="Booking not found")
    return db_booking


@router.put("/{booking_id}", response_model=Booking)
def update_booking(
    booking_id: int, booking: BookingUpdate, db: Session = Depends(get_db)
):
    try:
        db_booking = crud.update_booking(db=db, booking_id=booking_id, booking=booking)
    except BookingConflictError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except crud.InvalidTimeRangeError as e:
        raise HTTPException(status_code=422, detail=str(e))
    if db_booking is None:
        raise HTTPException(status_code=404, detail="Booking not found")
    return db_booking


@router.delete("/{booking_id}", response_model=BookingDeleted)
def delete_booking(booking_id: int, db: Session = Depends(get_db)):
    deleted = crud.delete_booking(db=db, booking_id=booking_id)
    if deleted is None:
        raise HTTPException(status_code=404, detail="Booking not found")
    return BookingDeleted(booking=Booking.model_validate(deleted))
