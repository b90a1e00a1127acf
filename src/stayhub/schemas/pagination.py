"""Generic pagination types shared by all list endpoints.

PaginatedResponse[T]: Pydantic model for HTTP responses (serializable).
Paginated[T]: plain dataclass for service-layer returns (not serializable).
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class PaginatedResponse(BaseModel, Generic[T]):
    """Pydantic model for paginated HTTP responses.

    ``from_attributes`` is set so ``model_validate`` can read a ``Paginated``
    dataclass directly::

        HotelListResponse = PaginatedResponse[HotelResponse]
        return HotelListResponse.model_validate(result)

    Use this in **routers** only.
    """

    model_config = {"from_attributes": True}

    items: list[T]
    total: int
    skip: int
    limit: int


@dataclass
class Paginated(Generic[T]):
    """Plain dataclass for paginated results inside the service layer."""

    items: list[T]
    total: int
    skip: int
    limit: int
