from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, Depends
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
import logging
import os
from dotenv import load_dotenv

# Load .env variables
load_dotenv()

# Configure base logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("app")

from app.routers import courts, bookings
from app.database import engine, Base, get_db
from app import models  # noqa: F401  registra las tablas en Base.metadata
import uvicorn


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Create database tables (Alembic es la alternativa en producción)
    if _env_flag("AUTO_CREATE_TABLES", "true"):
        logger.info("Creating database tables if missing...")
        Base.metadata.create_all(bind=engine)
    yield
    engine.dispose()


app = FastAPI(
    title="Court Reservations API",
    description="API for managing sports courts and their bookings",
    version="1.0.0",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",")],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(courts.router, prefix="/api/courts", tags=["courts"])
app.include_router(bookings.router, prefix="/api/bookings", tags=["bookings"])


@app.get("/")
def read_root():
    return {"message": "Court Reservations API is running"}


@app.get("/health")
def health(db: Session = Depends(get_db)):
    db.execute(text("SELECT 1"))
    return {"status": "ok", "database": "ok"}


# Errores de base de datos: se loguea el mensaje original y se responde genérico
@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    logger.exception(
        "Database error | path=%s | method=%s | error=%s",
        request.url.path,
        request.method,
        exc,
    )
    return JSONResponse(status_code=500, content={"detail": "Database error"})


# Global unhandled exception handler
@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(
        "Unhandled error | path=%s | method=%s | client=%s",
        request.url.path,
        request.method,
        request.client.host if request.client else "unknown",
    )
    return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})


if __name__ == "__main__":
    uvicorn.run("app.main:app", host="0.0.0.0", port=int(os.getenv("PORT", "5000")))
