"""
Ownership predicates evaluated after an endpoint's role-set check passes.

Each predicate branches over every UserRole member; a role added later must
be handled here explicitly instead of silently falling through.
"""

from app.models import Reservation, Restaurant, UserRole
from app.schemas.auth import CurrentUser


class UnknownRoleError(RuntimeError):
    """Raised when a predicate meets a role it has no rule for."""

    def __init__(self, role: object) -> None:
        super().__init__(f"No access rule for role {role!r}")
        self.role = role


def _manages(identity: CurrentUser, restaurant: Restaurant) -> bool:
    return restaurant.restaurant_manager_id == identity.id


def can_view_city(identity: CurrentUser, manages_restaurant_in_city: bool) -> bool:
    """Managers only see cities where they run a restaurant."""
    if identity.role is UserRole.RESTAURANT_MANAGER:
        return manages_restaurant_in_city
    if identity.role in (UserRole.REGISTERED_USER, UserRole.ADMIN):
        return True
    raise UnknownRoleError(identity.role)


def can_view_restaurant(identity: CurrentUser, restaurant: Restaurant) -> bool:
    if identity.role is UserRole.RESTAURANT_MANAGER:
        return _manages(identity, restaurant)
    if identity.role in (UserRole.REGISTERED_USER, UserRole.ADMIN):
        return True
    raise UnknownRoleError(identity.role)


def can_modify_restaurant(identity: CurrentUser, restaurant: Restaurant) -> bool:
    """Owning manager, or an Admin (the role set decides which operations admins reach)."""
    if identity.role is UserRole.RESTAURANT_MANAGER:
        return _manages(identity, restaurant)
    if identity.role is UserRole.ADMIN:
        return True
    if identity.role is UserRole.REGISTERED_USER:
        return False
    raise UnknownRoleError(identity.role)


def can_view_reservation(identity: CurrentUser, reservation: Reservation) -> bool:
    if identity.role is UserRole.RESTAURANT_MANAGER:
        return _manages(identity, reservation.restaurant)
    if identity.role is UserRole.REGISTERED_USER:
        return reservation.reserving_user_id == identity.id
    if identity.role is UserRole.ADMIN:
        return True
    raise UnknownRoleError(identity.role)


def can_manage_reservation(identity: CurrentUser, reservation: Reservation) -> bool:
    """Status changes and deletion belong to the restaurant's manager."""
    if identity.role is UserRole.RESTAURANT_MANAGER:
        return _manages(identity, reservation.restaurant)
    if identity.role is UserRole.ADMIN:
        return True
    if identity.role is UserRole.REGISTERED_USER:
        return False
    raise UnknownRoleError(identity.role)


def can_access_user(identity: CurrentUser, user_id: str) -> bool:
    if identity.role is UserRole.ADMIN:
        return True
    if identity.role in (UserRole.REGISTERED_USER, UserRole.RESTAURANT_MANAGER):
        return identity.id == user_id
    raise UnknownRoleError(identity.role)
