"""Geofence providers."""
from app.config import Settings, settings as default_settings
from app.domain.value_objects.bounding_box import BoundingBox

ATHENS_BOUNDING_BOX = BoundingBox(37.9, 38.1, 23.6, 23.8)


class StaticBoundingBoxProvider:
    """Always returns the same box."""

    def __init__(self, box: BoundingBox = ATHENS_BOUNDING_BOX):
        self._box = box

    def get_bounding_box(self) -> BoundingBox:
        return self._box


class SettingsBoundingBoxProvider:
    """Reads the geofence from the BOUNDING_BOX_* settings."""

    def __init__(self, settings: Settings = default_settings):
        self._settings = settings

    def get_bounding_box(self) -> BoundingBox:
        return BoundingBox(
            min_lat=self._settings.BOUNDING_BOX_MIN_LAT,
            max_lat=self._settings.BOUNDING_BOX_MAX_LAT,
            min_lon=self._settings.BOUNDING_BOX_MIN_LON,
            max_lon=self._settings.BOUNDING_BOX_MAX_LON,
        )
