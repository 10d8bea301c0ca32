"""Value objects."""
from app.domain.value_objects.bounding_box import BoundingBox
from app.domain.value_objects.coordinates import Coordinates

__all__ = [
    "BoundingBox",
    "Coordinates",
]
