"""
Utilidades para detectar solapamientos de reservas sobre una misma cancha.
Los rangos son semiabiertos [inicio, fin): una reserva que termina a las 11:00
no se solapa con otra que empieza a las 11:00.
"""

from datetime import date, time
from typing import List, Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
import logging

from app.models.booking import Booking, OVERLAP_GUARD_NAME

logger = logging.getLogger(__name__)

CONFLICT_MESSAGE = "Court already booked for this time."


class BookingConflictError(ValueError):
    """La cancha ya está reservada en un rango que se solapa con el pedido."""

    def __init__(self, message: str = CONFLICT_MESSAGE):
        super().__init__(message)


def intervals_overlap(start_a: time, end_a: time, start_b: time, end_b: time) -> bool:
    """
    Dos rangos [s1, e1) y [s2, e2) se solapan sii s1 < e2 y s2 < e1.
    """
    return start_a < end_b and start_b < end_a


def find_conflicting_bookings(
    db: Session,
    court_type: str,
    court_number: int,
    booking_date: date,
    time_start: time,
    time_end: time,
    exclude_id: Optional[int] = None,
) -> List[Booking]:
    """
    Obtiene las reservas de la misma cancha y fecha que se solapan con el rango pedido.

    Args:
        db: Sesión de base de datos
        court_type: Tipo de cancha
        court_number: Número de cancha
        booking_date: Fecha de la reserva
        time_start: Hora de inicio
        time_end: Hora de fin
        exclude_id: Reserva a ignorar (la propia reserva al actualizar)

    Returns:
        List[Booking]: Reservas en conflicto, vacía si el rango está libre
    """
    query = (
        db.query(Booking)
        .filter(Booking.court_type == court_type)
        .filter(Booking.court_number == court_number)
        .filter(Booking.date == booking_date)
        .filter(Booking.time_start < time_end)
        .filter(Booking.time_end > time_start)
    )
    if exclude_id is not None:
        query = query.filter(Booking.id != exclude_id)

    return query.all()


def ensure_no_overlap(
    db: Session,
    court_type: str,
    court_number: int,
    booking_date: date,
    time_start: time,
    time_end: time,
    exclude_id: Optional[int] = None,
) -> None:
    conflicts = find_conflicting_bookings(
        db,
        court_type,
        court_number,
        booking_date,
        time_start,
        time_end,
        exclude_id=exclude_id,
    )
    if conflicts:
        logger.info(
            "Overlap rejected | court=%s #%s | date=%s | range=%s-%s | conflicts=%s",
            court_type,
            court_number,
            booking_date,
            time_start,
            time_end,
            [b.id for b in conflicts],
        )
        raise BookingConflictError()


def is_overlap_violation(exc: IntegrityError) -> bool:
    """True si el error viene de la exclusion constraint o del trigger de solapamiento."""
    return OVERLAP_GUARD_NAME in str(exc.orig)
