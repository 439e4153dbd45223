from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from app.models.booking import Booking
from app.models.court import Court
from app.schemas.court import CourtCreate, CourtUpdate

logger = logging.getLogger(__name__)

UNIQUE_CONSTRAINT_NAME = "uq_courts_type_number"


class CourtAlreadyExistsError(ValueError):
    """Ya existe una cancha con el mismo tipo y número."""


def _is_duplicate_court(exc: IntegrityError) -> bool:
    message = str(exc.orig)
    # PostgreSQL reporta el nombre de la constraint, SQLite las columnas
    return UNIQUE_CONSTRAINT_NAME in message or "courts.court_type" in message


def get_court(db: Session, court_id: int) -> Optional[Court]:
    return db.query(Court).filter(Court.id == court_id).first()


def get_courts(db: Session) -> List[Court]:
    return db.query(Court).order_by(Court.court_type, Court.court_number).all()


def create_court(db: Session, court: CourtCreate) -> Court:
    db_court = Court(**court.model_dump())
    db.add(db_court)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        if _is_duplicate_court(e):
            raise CourtAlreadyExistsError(
                f"Court {court.court_type} #{court.court_number} already exists"
            ) from e
        raise
    db.refresh(db_court)
    logger.info(
        f"Court {db_court.id} created ({db_court.court_type} #{db_court.court_number})"
    )
    return db_court


def update_court(db: Session, court_id: int, court: CourtUpdate) -> Optional[Court]:
    db_court = get_court(db, court_id)
    if not db_court:
        return None

    for field, value in court.model_dump().items():
        setattr(db_court, field, value)

    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        if _is_duplicate_court(e):
            raise CourtAlreadyExistsError(
                f"Court {court.court_type} #{court.court_number} already exists"
            ) from e
        raise
    db.refresh(db_court)
    logger.info(f"Court {court_id} updated")
    return db_court


def delete_court(db: Session, court_id: int) -> bool:
    """
    Elimina la cancha si existe. Devuelve False si no había nada que borrar;
    el router responde éxito en ambos casos.

    Las reservas referencian la cancha por (court_type, court_number), por lo que
    no se borran en cascada.
    """
    db_court = get_court(db, court_id)
    if not db_court:
        logger.info(f"Court {court_id} already absent, nothing to delete")
        return False

    remaining_bookings = (
        db.query(Booking)
        .filter(Booking.court_type == db_court.court_type)
        .filter(Booking.court_number == db_court.court_number)
        .count()
    )
    if remaining_bookings:
        logger.warning(
            f"Court {court_id} deleted with {remaining_bookings} bookings still referencing it"
        )

    db.delete(db_court)
    db.commit()
    logger.info(f"Court {court_id} deleted")
    return True
