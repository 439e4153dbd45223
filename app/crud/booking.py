from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from app.models.booking import Booking
from app.schemas.booking import BookingCreate, BookingUpdate
from app.utils.booking_overlap import (
    BookingConflictError,
    ensure_no_overlap,
    is_overlap_violation,
)

logger = logging.getLogger(__name__)


class InvalidTimeRangeError(ValueError):
    """El rango resultante no cumple time_start < time_end."""


def get_booking(db: Session, booking_id: int) -> Optional[Booking]:
    return db.query(Booking).filter(Booking.id == booking_id).first()


def get_bookings(db: Session, user_id: Optional[int] = None) -> List[Booking]:
    query = db.query(Booking)

    if user_id is not None:
        query = query.filter(Booking.user_id == user_id)

    return query.order_by(Booking.date.desc(), Booking.time_start).all()


def _commit_or_conflict(db: Session) -> None:
    """
    Confirma la transacción. Si la base rechaza el cambio por solapamiento
    (carrera entre dos requests), se traduce a BookingConflictError.
    """
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        if is_overlap_violation(e):
            logger.warning("Overlap rejected by database guard: %s", e.orig)
            raise BookingConflictError() from e
        raise


def create_booking(db: Session, booking: BookingCreate) -> Booking:
    # 1. Rechazar si ya hay una reserva que se solapa en la misma cancha y fecha
    ensure_no_overlap(
        db,
        booking.court_type,
        booking.court_number,
        booking.date,
        booking.time_start,
        booking.time_end,
    )

    # 2. Insertar; la base vuelve a verificar de forma atómica
    db_booking = Booking(
        user_id=booking.user_id,
        court_type=booking.court_type,
        court_number=booking.court_number,
        date=booking.date,
        time_start=booking.time_start,
        time_end=booking.time_end,
        description=booking.description,
    )
    db.add(db_booking)
    _commit_or_conflict(db)
    db.refresh(db_booking)
    logger.info(
        f"Booking {db_booking.id} created for user {db_booking.user_id} "
        f"({db_booking.court_type} #{db_booking.court_number} {db_booking.date} "
        f"{db_booking.time_start}-{db_booking.time_end})"
    )
    return db_booking


def update_booking(
    db: Session, booking_id: int, booking: BookingUpdate
) -> Optional[Booking]:
    db_booking = get_booking(db, booking_id)
    if not db_booking:
        return None

    update_data = booking.model_dump(exclude_unset=True)
    # Fecha y horas no admiten null; description sí (se puede limpiar)
    for field in ("date", "time_start", "time_end"):
        if update_data.get(field) is None:
            update_data.pop(field, None)

    new_date = update_data.get("date", db_booking.date)
    new_start = update_data.get("time_start", db_booking.time_start)
    new_end = update_data.get("time_end", db_booking.time_end)
    if new_start >= new_end:
        raise InvalidTimeRangeError("time_start must be earlier than time_end")

    # La reserva no debe solaparse con ninguna otra de la misma cancha (excepto ella misma)
    ensure_no_overlap(
        db,
        db_booking.court_type,
        db_booking.court_number,
        new_date,
        new_start,
        new_end,
        exclude_id=db_booking.id,
    )

    for field, value in update_data.items():
        setattr(db_booking, field, value)

    _commit_or_conflict(db)
    db.refresh(db_booking)
    logger.info(f"Booking {booking_id} updated")
    return db_booking


def delete_booking(db: Session, booking_id: int) -> Optional[Booking]:
    """Elimina la reserva y devuelve el registro borrado, o None si no existía."""
    db_booking = get_booking(db, booking_id)
    if not db_booking:
        return None

    db.delete(db_booking)
    db.commit()
    logger.info(f"Booking {booking_id} deleted")
    return db_booking
