from datetime import date

import pytest

from turismo.application.services.reservation_view import (
    allowed_transitions,
    can_transition,
    filter_by_role,
    filter_by_status,
    reservation_row,
    role_badge,
    role_counts,
    status_badge,
)
from turismo.domain.schemas.auth import UserRead
from turismo.domain.schemas.reservation import ReservationRead, ReservationStatus

CONFIRMED = ReservationStatus.CONFIRMED
CANCELLED = ReservationStatus.CANCELLED


def make(rid: str, status: str, user_id: str = "u1") -> ReservationRead:
    return ReservationRead(
        id=rid,
        user_id=user_id,
        hotel_id="h1",
        check_in=date(2024, 6, 1),
        check_out=date(2024, 6, 4),
        guests=2,
        total_price=45000,
        status=status,
    )


@pytest.mark.parametrize(
    "status,label,severity",
    [
        ("PENDING", "Pendente", "pending"),
        ("CONFIRMED", "Confirmada", "positive"),
        ("CANCELLED", "Cancelada", "negative"),
        ("confirmed", "Confirmada", "positive"),
    ],
)
def test_known_status_badges(status, label, severity):
    badge = status_badge(status)
    assert badge.label == label
    assert badge.severity == severity


def test_unknown_status_renders_literally():
    badge = status_badge("REFUNDED")
    assert badge.label == "REFUNDED"
    assert badge.variant == "outline"
    assert badge.severity == "neutral"


def test_admin_transitions():
    assert allowed_transitions("PENDING", is_admin=True, is_owner=False) == [CONFIRMED, CANCELLED]
    assert allowed_transitions("CONFIRMED", is_admin=True, is_owner=False) == [CANCELLED]
    assert allowed_transitions("CANCELLED", is_admin=True, is_owner=False) == []


def test_owner_transitions():
    assert allowed_transitions("PENDING", is_admin=False, is_owner=True) == [CANCELLED]
    assert allowed_transitions("CONFIRMED", is_admin=False, is_owner=True) == [CANCELLED]
    assert allowed_transitions("CANCELLED", is_admin=False, is_owner=True) == []


def test_stranger_has_no_transitions():
    assert allowed_transitions("PENDING", is_admin=False, is_owner=False) == []


def test_no_op_and_unknown_transitions():
    assert not can_transition("CONFIRMED", "CONFIRMED", is_admin=True, is_owner=True)
    assert not can_transition("CANCELLED", "PENDING", is_admin=True, is_owner=True)
    assert not can_transition("REFUNDED", "CANCELLED", is_admin=True, is_owner=True)
    assert allowed_transitions("REFUNDED", is_admin=True, is_owner=True) == []


def test_filter_cancelled_preserves_order_and_input():
    items = [make("1", "CANCELLED"), make("2", "PENDING"), make("3", "CANCELLED"), make("4", "CONFIRMED")]
    snapshot = list(items)

    result = filter_by_status(items, "CANCELLED")

    assert [r.id for r in result] == ["1", "3"]
    assert items == snapshot


def test_filter_all_is_identity_copy():
    items = [make("1", "PENDING"), make("2", "WEIRD")]
    result = filter_by_status(items, "all")
    assert result == items
    assert result is not items


def test_row_for_admin_view():
    row = reservation_row(make("9", "PENDING", user_id="u2"), is_admin=True, viewer_id="a1")
    assert row.nights == 3
    assert row.total_label == "45 000 Kz"
    assert row.check_in_label == "01/06/2024"
    assert row.badge.label == "Pendente"
    assert row.actions == [CONFIRMED, CANCELLED]


def test_row_for_owner_view():
    row = reservation_row(make("9", "CONFIRMED", user_id="u1"), is_admin=False, viewer_id="u1")
    assert row.actions == [CANCELLED]


def test_roles_helpers():
    users = [
        UserRead(id="1", name="A", email="a@x", role="ADMIN"),
        UserRead(id="2", name="B", email="b@x", role="USER"),
        UserRead(id="3", name="C", email="c@x", role="USER"),
    ]
    assert role_counts(users) == {"total": 3, "admins": 1, "users": 2}
    assert [u.id for u in filter_by_role(users, "USER")] == ["2", "3"]
    assert filter_by_role(users) == users
    assert role_badge("ADMIN").label == "Administrador"
    assert role_badge("GUEST").variant == "outline"
