"""
Tests para la regla de no solapamiento de reservas
"""
import pytest
from datetime import date, time

from app.utils.booking_overlap import (
    BookingConflictError,
    ensure_no_overlap,
    find_conflicting_bookings,
    intervals_overlap,
)


@pytest.mark.parametrize(
    "start_b, end_b, expected",
    [
        (time(10, 30), time(11, 30), True),  # empieza durante la existente
        (time(9, 30), time(10, 30), True),  # termina durante la existente
        (time(9, 0), time(12, 0), True),  # la contiene
        (time(10, 15), time(10, 45), True),  # está contenida
        (time(10, 0), time(11, 0), True),  # idéntica
        (time(11, 0), time(12, 0), False),  # consecutiva después
        (time(9, 0), time(10, 0), False),  # consecutiva antes
        (time(14, 0), time(15, 0), False),  # disjunta
    ],
)
def test_intervals_overlap(start_b, end_b, expected):
    """
    Test: [s1, e1) y [s2, e2) se solapan sii s1 < e2 y s2 < e1
    """
    assert intervals_overlap(time(10, 0), time(11, 0), start_b, end_b) is expected
    # La relación es simétrica
    assert intervals_overlap(start_b, end_b, time(10, 0), time(11, 0)) is expected


def test_find_conflicting_bookings_same_court(db, sample_booking):
    conflicts = find_conflicting_bookings(
        db, "tennis", 1, date(2024, 6, 1), time(10, 30), time(11, 30)
    )
    assert [b.id for b in conflicts] == [sample_booking.id]


def test_find_conflicting_bookings_ignores_other_courts_and_dates(db, sample_booking):
    """
    Test: Solo cuentan las reservas de la misma cancha (tipo + número) y fecha
    """
    assert find_conflicting_bookings(
        db, "tennis", 2, date(2024, 6, 1), time(10, 30), time(11, 30)
    ) == []
    assert find_conflicting_bookings(
        db, "padel", 1, date(2024, 6, 1), time(10, 30), time(11, 30)
    ) == []
    assert find_conflicting_bookings(
        db, "tennis", 1, date(2024, 6, 2), time(10, 30), time(11, 30)
    ) == []


def test_find_conflicting_bookings_back_to_back(db, sample_booking):
    assert find_conflicting_bookings(
        db, "tennis", 1, date(2024, 6, 1), time(11, 0), time(12, 0)
    ) == []


def test_find_conflicting_bookings_excludes_itself(db, sample_booking):
    assert find_conflicting_bookings(
        db,
        "tennis",
        1,
        date(2024, 6, 1),
        time(10, 0),
        time(11, 30),
        exclude_id=sample_booking.id,
    ) == []


def test_ensure_no_overlap_raises(db, sample_booking):
    with pytest.raises(BookingConflictError) as exc_info:
        ensure_no_overlap(db, "tennis", 1, date(2024, 6, 1), time(9, 0), time(10, 1))

    assert "already booked" in str(exc_info.value)


def test_booking_conflict_error_is_value_error():
    assert issubclass(BookingConflictError, ValueError)
