"""
Geo queries over stored coordinates.

GeoQuery is the single implementation behind the map endpoints: plain
bounding-box filters on latitude/longitude columns, portable across
database backends. Boxes whose min_lng is greater than max_lng cross the
antimeridian and are split into two longitude ranges.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import timedelta
from typing import TYPE_CHECKING

from django.db.models import Q
from django.utils import timezone

from core.exceptions import InvalidArgumentError
from core.validators import is_valid_coordinate
from media.models import MediaObject
from posts.models import Ask

if TYPE_CHECKING:
    from datetime import datetime

    from django.db.models import QuerySet

EARTH_RADIUS_METERS = 6_371_000
ASK_MAP_WINDOW = timedelta(hours=48)


def haversine_meters(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Great-circle distance between two points in meters."""
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lng2 - lng1)
    a = (
        math.sin(d_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    )
    return 2 * EARTH_RADIUS_METERS * math.asin(math.sqrt(a))


@dataclass(frozen=True)
class BoundingBox:
    """Map viewport in WGS84 degrees."""

    min_lat: float
    max_lat: float
    min_lng: float
    max_lng: float

    def __post_init__(self) -> None:
        if not (
            is_valid_coordinate(self.min_lat, self.min_lng)
            and is_valid_coordinate(self.max_lat, self.max_lng)
        ):
            raise InvalidArgumentError("Bounding box is out of range")
        if self.min_lat > self.max_lat:
            raise InvalidArgumentError("min_lat must not exceed max_lat")

    def filter(self, lat_field: str, lng_field: str) -> Q:
        """Q object matching points inside the box."""
        lat_q = Q(**{f"{lat_field}__gte": self.min_lat, f"{lat_field}__lte": self.max_lat})
        if self.min_lng <= self.max_lng:
            lng_q = Q(
                **{f"{lng_field}__gte": self.min_lng, f"{lng_field}__lte": self.max_lng}
            )
        else:
            lng_q = Q(**{f"{lng_field}__gte": self.min_lng}) | Q(
                **{f"{lng_field}__lte": self.max_lng}
            )
        return lat_q & lng_q


class GeoQuery:
    """Bounding-box queries for map views."""

    def record_images_in_bounds(self, bbox: BoundingBox) -> QuerySet[MediaObject]:
        """Located images bound to records inside the box."""
        return (
            MediaObject.objects.filter(
                bbox.filter("lat", "lng"),
                status=MediaObject.Status.COMPLETED,
                record__isnull=False,
            )
            .select_related("record")
            .order_by("-created_at")
        )

    def asks_in_bounds(
        self,
        bbox: BoundingBox,
        now: datetime | None = None,
    ) -> QuerySet[Ask]:
        """Asks centered inside the box created within the last 48 hours."""
        cutoff = (now or timezone.now()) - ASK_MAP_WINDOW
        return Ask.objects.filter(
            bbox.filter("center_lat", "center_lng"),
            created_at__gte=cutoff,
        ).order_by("-created_at")

    def is_within_radius(self, ask: Ask, lat: float, lng: float) -> bool:
        return haversine_meters(ask.center_lat, ask.center_lng, lat, lng) <= ask.radius_meters
