"""Domain primitives that enforce validity at creation time."""

import math
from dataclasses import dataclass
from decimal import Decimal
from typing import Self
from uuid import UUID

EARTH_RADIUS_KM = 6371.0


@dataclass(frozen=True)
class EventId:
    """Unique identifier for an Event."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class OrganizerId:
    """Unique identifier for an event organizer."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class UserId:
    """Unique identifier for the user owning an interest profile."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Money:
    """Price representation with validation."""

    amount: Decimal

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValueError("Money amount cannot be negative")

    @property
    def is_zero(self) -> bool:
        return self.amount == 0

    def __str__(self) -> str:
        return f"{self.amount:.2f}"


@dataclass(frozen=True)
class Capacity:
    """Non-negative integer representing capacity."""

    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError("Capacity cannot be negative")


@dataclass(frozen=True)
class Coordinate:
    """A WGS84 latitude/longitude pair."""

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError("Latitude must be between -90 and 90")
        if not -180.0 <= self.longitude <= 180.0:
            raise ValueError("Longitude must be between -180 and 180")

    def distance_to(self, other: "Coordinate") -> float:
        """Great-circle distance in kilometres (haversine)."""
        lat1, lat2 = math.radians(self.latitude), math.radians(other.latitude)
        d_lat = lat2 - lat1
        d_lon = math.radians(other.longitude - self.longitude)
        a = math.sin(d_lat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(d_lon / 2) ** 2
        return 2 * EARTH_RADIUS_KM * math.asin(min(1.0, math.sqrt(a)))


@dataclass(frozen=True)
class Rating:
    """Aggregate rating. An unrated event is Rating(0, 0), never None."""

    mean: float = 0.0
    count: int = 0

    def __post_init__(self) -> None:
        if not 0.0 <= self.mean <= 5.0:
            raise ValueError("Rating mean must be between 0 and 5")
        if self.count < 0:
            raise ValueError("Rating count cannot be negative")

    def with_score(self, score: float) -> Self:
        """Return a new rating with one more score folded into the mean."""
        if not 0.0 <= score <= 5.0:
            raise ValueError("Rating score must be between 0 and 5")
        count = self.count + 1
        mean = min(5.0, (self.mean * self.count + score) / count)
        return type(self)(mean=mean, count=count)
