"""
Custom validators for Django models and DRF serializers.

This module provides domain-agnostic validators for geographic
coordinates. Model fields use the Django validators; services use
is_valid_coordinate for plain range checks.

Usage:
    from core.validators import validate_latitude, validate_longitude

    class Ask(models.Model):
        center_lat = models.FloatField(validators=[validate_latitude])
        center_lng = models.FloatField(validators=[validate_longitude])
"""

from __future__ import annotations

import math

from django.core.exceptions import ValidationError


def is_valid_coordinate(lat: float | None, lng: float | None) -> bool:
    """
    Check that a latitude/longitude pair is inside WGS84 bounds.

    Args:
        lat: Latitude in degrees
        lng: Longitude in degrees

    Returns:
        True when both values are finite numbers within range
    """
    if lat is None or lng is None:
        return False
    if isinstance(lat, bool) or isinstance(lng, bool):
        return False
    try:
        lat = float(lat)
        lng = float(lng)
    except (TypeError, ValueError):
        return False
    if not (math.isfinite(lat) and math.isfinite(lng)):
        return False
    return -90 <= lat <= 90 and -180 <= lng <= 180


def validate_latitude(value: float) -> None:
    """Reject latitudes outside [-90, 90]."""
    if value is None or not -90 <= value <= 90:
        raise ValidationError("Latitude must be between -90 and 90.")


def validate_longitude(value: float) -> None:
    """Reject longitudes outside [-180, 180]."""
    if value is None or not -180 <= value <= 180:
        raise ValidationError("Longitude must be between -180 and 180.")
