"""Role and ownership checks shared by the services."""

from stayhub.exceptions import NotAuthorizedError
from stayhub.models import Booking, Hotel, Role, User


def is_admin(user: User) -> bool:
    return user.role == Role.ADMIN


def manages_hotel(user: User, hotel: Hotel) -> bool:
    """The hotel's owner and admins manage a hotel."""
    return is_admin(user) or hotel.owner_id == user.id


def ensure_hotel_manager(user: User, hotel: Hotel, action: str) -> None:
    if not manages_hotel(user, hotel):
        raise NotAuthorizedError(f"Not authorized to {action}")


def ensure_catalog_role(user: User) -> None:
    if user.role not in (Role.HOTEL_OWNER, Role.ADMIN):
        raise NotAuthorizedError("Only hotel owners and admins can manage hotels")


def can_view_booking(user: User, booking: Booking) -> bool:
    return booking.customer_id == user.id or manages_hotel(user, booking.hotel)


def ensure_admin(user: User) -> None:
    if not is_admin(user):
        raise NotAuthorizedError("Admin access required")
