"""Admin approvals, user directory and platform analytics."""

from dataclasses import dataclass
from decimal import Decimal
from enum import StrEnum

from sqlalchemy.ext.asyncio import AsyncSession

from stayhub.exceptions import NotFoundError
from stayhub.logging import get_logger
from stayhub.models import BookingStatus, Hotel, Role, User
from stayhub.repositories.booking import count_bookings, sum_paid_revenue
from stayhub.repositories.hotel import count_hotels, get_hotel, list_pending_hotels
from stayhub.repositories.user import (
    UserFilter,
    count_users,
    count_users_by_role,
    get_user,
    list_pending_owners,
    list_users,
)
from stayhub.schemas.pagination import Paginated
from stayhub.services.access import ensure_admin

logger = get_logger(__name__)


class ApprovalTarget(StrEnum):
    HOTEL = "hotel"
    USER = "user"


@dataclass
class PendingApprovals:
    hotels: list[Hotel]
    owners: list[User]


@dataclass
class HotelStats:
    total: int
    approved: int
    pending: int


@dataclass
class UserStats:
    total: int
    customers: int
    owners: int
    admins: int


@dataclass
class BookingStats:
    total: int
    confirmed: int
    completed: int


@dataclass
class PlatformAnalytics:
    hotels: HotelStats
    users: UserStats
    bookings: BookingStats
    revenue: Decimal


async def get_pending_approvals(db: AsyncSession, actor: User) -> PendingApprovals:
    ensure_admin(actor)
    return PendingApprovals(
        hotels=await list_pending_hotels(db),
        owners=await list_pending_owners(db),
    )


async def approve(
    db: AsyncSession, actor: User, target: ApprovalTarget, target_id: int
) -> Hotel | User:
    """Mark a hotel or an account approved. Approving twice is a no-op."""
    ensure_admin(actor)

    entity: Hotel | User | None
    if target == ApprovalTarget.HOTEL:
        entity = await get_hotel(db, target_id)
        if entity is None:
            raise NotFoundError("Hotel", target_id)
    else:
        entity = await get_user(db, target_id)
        if entity is None:
            raise NotFoundError("User", target_id)

    if not entity.is_approved:
        entity.is_approved = True
        await db.flush()
        logger.info("approved", target=target.value, target_id=target_id, admin_id=actor.id)
    return entity


async def get_users(
    db: AsyncSession, actor: User, filters: UserFilter, skip: int, limit: int
) -> Paginated[User]:
    ensure_admin(actor)
    items = await list_users(db, filters, skip, limit)
    total = await count_users(db, filters)
    return Paginated(items=items, total=total, skip=skip, limit=limit)


async def get_platform_analytics(db: AsyncSession, actor: User) -> PlatformAnalytics:
    ensure_admin(actor)

    total_hotels = await count_hotels(db)
    approved_hotels = await count_hotels(db, approved=True)
    by_role = await count_users_by_role(db)

    return PlatformAnalytics(
        hotels=HotelStats(
            total=total_hotels,
            approved=approved_hotels,
            pending=total_hotels - approved_hotels,
        ),
        users=UserStats(
            total=sum(by_role.values()),
            customers=by_role.get(Role.CUSTOMER.value, 0),
            owners=by_role.get(Role.HOTEL_OWNER.value, 0),
            admins=by_role.get(Role.ADMIN.value, 0),
        ),
        bookings=BookingStats(
            total=await count_bookings(db),
            confirmed=await count_bookings(db, status=BookingStatus.CONFIRMED.value),
            completed=await count_bookings(db, status=BookingStatus.CHECKED_OUT.value),
        ),
        revenue=await sum_paid_revenue(db),
    )
