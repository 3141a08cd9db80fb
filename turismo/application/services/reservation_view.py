"""Reservation and user list presentation: badges, permitted transitions, filters."""

from typing import Iterable, Optional, Sequence

from turismo.application.services.booking_calculator import nights
from turismo.application.services.formatting import format_date, format_price
from turismo.domain.schemas.auth import Role, UserRead
from turismo.domain.schemas.reservation import (
    ReservationRead,
    ReservationRow,
    ReservationStatus,
    StatusBadge,
)

ALL = "all"

STATUS_BADGES = {
    ReservationStatus.PENDING.value: StatusBadge(label="Pendente", severity="pending", variant="secondary"),
    ReservationStatus.CONFIRMED.value: StatusBadge(label="Confirmada", severity="positive", variant="default"),
    ReservationStatus.CANCELLED.value: StatusBadge(label="Cancelada", severity="negative", variant="destructive"),
}

ROLE_BADGES = {
    Role.ADMIN.value: StatusBadge(label="Administrador", severity="positive", variant="default"),
    Role.USER.value: StatusBadge(label="Usuário", severity="neutral", variant="secondary"),
}

# (from, to) -> may the owner do it as well as an admin?
TRANSITIONS = {
    (ReservationStatus.PENDING, ReservationStatus.CONFIRMED): False,
    (ReservationStatus.PENDING, ReservationStatus.CANCELLED): True,
    (ReservationStatus.CONFIRMED, ReservationStatus.CANCELLED): True,
}


def status_badge(status: str) -> StatusBadge:
    """Badge for a stored status. Unknown values render literally with an outline."""
    badge = STATUS_BADGES.get(status.upper())
    if badge is None:
        return StatusBadge(label=status, severity="neutral", variant="outline")
    return badge


def role_badge(role: str) -> StatusBadge:
    badge = ROLE_BADGES.get(role.upper())
    if badge is None:
        return StatusBadge(label=role, severity="neutral", variant="outline")
    return badge


def _parse_status(status: str) -> Optional[ReservationStatus]:
    try:
        return ReservationStatus(status.upper())
    except ValueError:
        return None


def can_transition(current: str, target: str, *, is_admin: bool, is_owner: bool) -> bool:
    source = _parse_status(current)
    destination = _parse_status(target)
    if source is None or destination is None:
        return False
    owner_allowed = TRANSITIONS.get((source, destination))
    if owner_allowed is None:
        return False
    return is_admin or (owner_allowed and is_owner)


def allowed_transitions(current: str, *, is_admin: bool, is_owner: bool) -> list[ReservationStatus]:
    """Targets an actor may move a reservation to. Empty once CANCELLED."""
    return [
        target
        for target in ReservationStatus
        if can_transition(current, target.value, is_admin=is_admin, is_owner=is_owner)
    ]


def filter_by_status(reservations: Sequence[ReservationRead], status: str = ALL) -> list[ReservationRead]:
    """New list of reservations whose status equals `status`; "all" keeps everything."""
    if status == ALL:
        return list(reservations)
    return [r for r in reservations if r.status == status]


def filter_by_role(users: Sequence[UserRead], role: str = ALL) -> list[UserRead]:
    if role == ALL:
        return list(users)
    return [u for u in users if u.role.value == role]


def role_counts(users: Iterable[UserRead]) -> dict:
    users = list(users)
    admins = sum(1 for u in users if u.is_admin)
    return {"total": len(users), "admins": admins, "users": len(users) - admins}


def reservation_row(reservation: ReservationRead, *, is_admin: bool, viewer_id: Optional[str]) -> ReservationRow:
    is_owner = viewer_id is not None and reservation.user_id == viewer_id
    return ReservationRow(
        reservation=reservation,
        nights=nights(reservation.check_in, reservation.check_out),
        check_in_label=format_date(reservation.check_in),
        check_out_label=format_date(reservation.check_out),
        total_label=format_price(reservation.total_price),
        badge=status_badge(reservation.status),
        actions=allowed_transitions(reservation.status, is_admin=is_admin, is_owner=is_owner),
    )
