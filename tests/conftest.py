"""
Configuración compartida para tests pytest
"""
import os

# La app no debe intentar conectarse a PostgreSQL al importarse
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("AUTO_CREATE_TABLES", "false")

import pytest
from datetime import date, time
from decimal import Decimal
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db

# Importar todos los modelos para registrar las tablas (y los guards de solapamiento)
from app.models.court import Court, CourtStatus
from app.models.booking import Booking


# Base de datos en memoria para tests
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db():
    """Crear base de datos de test y limpiarla después"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def override_get_db(db):
    """Override de get_db para tests"""
    def _get_db():
        try:
            yield db
        finally:
            pass
    return _get_db


@pytest.fixture
def client(override_get_db):
    """Cliente HTTP contra la app con la sesión de test"""
    from app.main import app

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def sample_court(db):
    """Cancha de tenis de prueba"""
    court = Court(
        court_type="tennis",
        court_number=1,
        status=CourtStatus.AVAILABLE,
        price_per_hour=Decimal("20.00"),
    )
    db.add(court)
    db.commit()
    db.refresh(court)
    return court


@pytest.fixture
def sample_booking(db, sample_court):
    """Reserva de 10:00 a 11:00 en la cancha de prueba"""
    booking = Booking(
        user_id=42,
        court_type=sample_court.court_type,
        court_number=sample_court.court_number,
        date=date(2024, 6, 1),
        time_start=time(10, 0),
        time_end=time(11, 0),
        description="Partido de práctica",
    )
    db.add(booking)
    db.commit()
    db.refresh(booking)
    return booking
