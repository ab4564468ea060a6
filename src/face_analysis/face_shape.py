"""Face proportions and shape label derived from the face rectangle."""
from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from .face_detection import round_half_up
from .schemas import UNKNOWN, FaceDimensions, FaceRegion, FacialFeatures

JAW_FRACTION = 0.8
FOREHEAD_FRACTION = 0.9
CHEEKBONE_FRACTION = 0.95

# Not measured: the skin box carries no jaw or forehead information.
JAW_TO_FOREHEAD_RATIO = 0.89
CHEEKBONE_TO_JAW_RATIO = 1.19

# TODO: derive these from landmarks once a landmark detector replaces the skin scan.
PLACEHOLDER_FEATURES: Mapping[str, str] = MappingProxyType(
    {
        "eye_shape": "almond",
        "eye_distance": "normal",
        "eyebrow_shape": "arched",
        "nose_shape": "straight",
        "lip_shape": "full",
    }
)


def estimate_dimensions(face_region: FaceRegion) -> FaceDimensions:
    width = face_region.width
    height = face_region.height
    return FaceDimensions(
        face_length=height,
        face_width=width,
        jaw_width=round_half_up(width * JAW_FRACTION),
        forehead_width=round_half_up(width * FOREHEAD_FRACTION),
        cheekbone_width=round_half_up(width * CHEEKBONE_FRACTION),
        length_to_width_ratio=height / width,
        jaw_to_forehead_ratio=JAW_TO_FOREHEAD_RATIO,
        cheekbone_to_jaw_ratio=CHEEKBONE_TO_JAW_RATIO,
    )


def classify_face_shape(ratio: float) -> str:
    """Map a length/width ratio onto oblong, round, oval or square."""

    if ratio > 1.5:
        return "oblong"
    if ratio < 1.1:
        return "round"
    if 1.1 <= ratio <= 1.3:
        return "oval"
    if 1.3 < ratio <= 1.5:
        return "square"
    return UNKNOWN


def estimate_features(dimensions: FaceDimensions) -> FacialFeatures:
    return FacialFeatures(
        face_shape=classify_face_shape(dimensions.length_to_width_ratio),
        **PLACEHOLDER_FEATURES,
    )


__all__ = [
    "PLACEHOLDER_FEATURES",
    "classify_face_shape",
    "estimate_dimensions",
    "estimate_features",
]
