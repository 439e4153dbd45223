from sqlalchemy import Column, Integer, String, DateTime, Date, Time, Index, DDL, event
from datetime import datetime

from app.database import Base

# Nombre compartido por la exclusion constraint (PostgreSQL) y los triggers (SQLite)
OVERLAP_GUARD_NAME = "bookings_no_overlap"


class Booking(Base):
    __tablename__ = "bookings"
    __table_args__ = (
        Index("ix_bookings_court_date", "court_type", "court_number", "date"),
        {"extend_existing": True},
    )

    id = Column(Integer, primary_key=True, index=True)
    # Usuario externo, no se valida contra ninguna tabla
    user_id = Column(Integer, nullable=False, index=True)
    # Referencia por valor a la cancha (no es foreign key a courts.id)
    court_type = Column(String, nullable=False)
    court_number = Column(Integer, nullable=False)
    date = Column(Date, nullable=False)
    time_start = Column(Time, nullable=False)
    time_end = Column(Time, nullable=False)
    description = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)


# CRÍTICO: la regla de no solapamiento también vive en la base de datos.
# El chequeo previo en app/utils/booking_overlap.py da el error amigable,
# pero dos requests concurrentes pueden pasar ese chequeo a la vez; la base
# rechaza el segundo insert de forma atómica.
POSTGRES_OVERLAP_GUARD = [
    DDL("CREATE EXTENSION IF NOT EXISTS btree_gist"),
    DDL(
        f"ALTER TABLE bookings ADD CONSTRAINT {OVERLAP_GUARD_NAME} "
        "EXCLUDE USING gist ("
        "court_type WITH =, "
        "court_number WITH =, "
        "tsrange(\"date\" + time_start, \"date\" + time_end, '[)') WITH &&"
        ")"
    ),
]

_SQLITE_OVERLAP_CONDITION = (
    "SELECT 1 FROM bookings b "
    "WHERE b.court_type = NEW.court_type "
    "AND b.court_number = NEW.court_number "
    "AND b.\"date\" = NEW.\"date\" "
    "AND b.time_start < NEW.time_end "
    "AND NEW.time_start < b.time_end"
)

SQLITE_OVERLAP_GUARD = [
    DDL(
        f"CREATE TRIGGER {OVERLAP_GUARD_NAME}_insert BEFORE INSERT ON bookings "
        f"FOR EACH ROW WHEN EXISTS ({_SQLITE_OVERLAP_CONDITION}) "
        f"BEGIN SELECT RAISE(ABORT, '{OVERLAP_GUARD_NAME}'); END"
    ),
    DDL(
        f"CREATE TRIGGER {OVERLAP_GUARD_NAME}_update BEFORE UPDATE ON bookings "
        f"FOR EACH ROW WHEN EXISTS ({_SQLITE_OVERLAP_CONDITION} AND b.id != NEW.id) "
        f"BEGIN SELECT RAISE(ABORT, '{OVERLAP_GUARD_NAME}'); END"
    ),
]

for _ddl in POSTGRES_OVERLAP_GUARD:
    event.listen(Booking.__table__, "after_create", _ddl.execute_if(dialect="postgresql"))

for _ddl in SQLITE_OVERLAP_GUARD:
    event.listen(Booking.__table__, "after_create", _ddl.execute_if(dialect="sqlite"))
