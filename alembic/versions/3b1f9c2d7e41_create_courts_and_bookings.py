"""Create courts and bookings

Revision ID: 3b1f9c2d7e41
Revises:
Create Date: 2026-10-18 10:12:04.518233

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3b1f9c2d7e41"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # Create courts table
    op.create_table(
        "courts",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("court_type", sa.String(), nullable=False),
        sa.Column("court_number", sa.Integer(), nullable=False),
        sa.Column(
            "status",
            sa.Enum("available", "unavailable", name="courtstatus"),
            nullable=False,
        ),
        sa.Column("price_per_hour", sa.Numeric(10, 2), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "court_type", "court_number", name="uq_courts_type_number"
        ),
    )
    op.create_index(op.f("ix_courts_id"), "courts", ["id"], unique=False)

    # Create bookings table
    op.create_table(
        "bookings",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("court_type", sa.String(), nullable=False),
        sa.Column("court_number", sa.Integer(), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("time_start", sa.Time(), nullable=False),
        sa.Column("time_end", sa.Time(), nullable=False),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_bookings_id"), "bookings", ["id"], unique=False)
    op.create_index(
        op.f("ix_bookings_user_id"), "bookings", ["user_id"], unique=False
    )
    op.create_index(
        "ix_bookings_court_date",
        "bookings",
        ["court_type", "court_number", "date"],
        unique=False,
    )

    # Guard de solapamiento: dos reservas de la misma cancha no pueden solaparse.
    # Cierra la carrera entre el chequeo previo y el insert.
    if op.get_bind().dialect.name == "postgresql":
        op.execute("CREATE EXTENSION IF NOT EXISTS btree_gist;")
        op.execute("""
            ALTER TABLE bookings ADD CONSTRAINT bookings_no_overlap
            EXCLUDE USING gist (
                court_type WITH =,
                court_number WITH =,
                tsrange("date" + time_start, "date" + time_end, '[)') WITH &&
            );
        """)
    elif op.get_bind().dialect.name == "sqlite":
        for event, extra in (("insert", ""), ("update", " AND b.id != NEW.id")):
            op.execute(f"""
                CREATE TRIGGER bookings_no_overlap_{event} BEFORE {event.upper()} ON bookings
                FOR EACH ROW WHEN EXISTS (
                    SELECT 1 FROM bookings b
                    WHERE b.court_type = NEW.court_type
                    AND b.court_number = NEW.court_number
                    AND b."date" = NEW."date"
                    AND b.time_start < NEW.time_end
                    AND NEW.time_start < b.time_end{extra}
                )
                BEGIN SELECT RAISE(ABORT, 'bookings_no_overlap'); END
            """)


def downgrade() -> None:
    """Downgrade schema."""
    if op.get_bind().dialect.name == "postgresql":
        op.execute("ALTER TABLE bookings DROP CONSTRAINT IF EXISTS bookings_no_overlap;")
    op.drop_index("ix_bookings_court_date", table_name="bookings")
    op.drop_index(op.f("ix_bookings_user_id"), table_name="bookings")
    op.drop_index(op.f("ix_bookings_id"), table_name="bookings")
    op.drop_table("bookings")
    op.drop_index(op.f("ix_courts_id"), table_name="courts")
    op.drop_table("courts")
    if op.get_bind().dialect.name == "postgresql":
        sa.Enum(name="courtstatus").drop(op.get_bind(), checkfirst=True)
