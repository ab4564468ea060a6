"""Feature sub-regions of a located face and their averaged colour."""
from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, NamedTuple

import numpy as np

from .face_detection import round_half_up
from .image import ImageBuffer
from .schemas import RGB, FaceRegion

DEFAULT_SAMPLE_STRIDE = 5


class RegionSpec(NamedTuple):
    """Fractional rectangle: offsets and spans relative to a reference box."""

    left: float
    top: float
    width: float
    height: float
    # hair is measured against the whole image rather than the face box
    full_image: bool = False


FEATURE_REGIONS: Mapping[str, RegionSpec] = MappingProxyType(
    {
        "hair": RegionSpec(0.0, 0.0, 1.0, 0.30, full_image=True),
        "skin": RegionSpec(0.20, 0.30, 0.60, 0.40),
        "eyes": RegionSpec(0.25, 0.25, 0.50, 0.20),
        "lips": RegionSpec(0.35, 0.65, 0.30, 0.15),
    }
)


def feature_region(name: str, face_region: FaceRegion, image: ImageBuffer) -> FaceRegion:
    """Return the pixel rectangle sampled for feature ``name``.

    Raises ``KeyError`` for an unknown feature name.
    """

    layout = FEATURE_REGIONS[name]
    if layout.full_image:
        ref = FaceRegion(x=0, y=0, width=image.width, height=image.height)
    else:
        ref = face_region

    x = ref.x + round_half_up(ref.width * layout.left)
    y = ref.y + round_half_up(ref.height * layout.top)
    width = max(1, round_half_up(ref.width * layout.width))
    height = max(1, round_half_up(ref.height * layout.height))

    x = min(x, image.width - 1)
    y = min(y, image.height - 1)
    width = min(width, image.width - x)
    height = min(height, image.height - y)
    return FaceRegion(x=x, y=y, width=width, height=height)


def average_color(image: ImageBuffer, stride: int = DEFAULT_SAMPLE_STRIDE) -> RGB:
    """Per-channel mean over every ``stride``-th pixel, rounded half-up."""

    if stride < 1:
        raise ValueError("stride must be >= 1")

    samples = image.pixels[::stride, ::stride].reshape(-1, 3)
    if samples.shape[0] == 0:
        raise ValueError(f"cannot average an empty region ({image.width}x{image.height})")

    mean = samples.astype(np.float64).mean(axis=0)
    r, g, b = (round_half_up(float(c)) for c in mean)
    return RGB(r=r, g=g, b=b)


def sample_feature(
    name: str,
    face_region: FaceRegion,
    image: ImageBuffer,
    stride: int = DEFAULT_SAMPLE_STRIDE,
) -> RGB:
    rect = feature_region(name, face_region, image)
    return average_color(image.crop(rect), stride)


__all__ = [
    "DEFAULT_SAMPLE_STRIDE",
    "FEATURE_REGIONS",
    "RegionSpec",
    "average_color",
    "feature_region",
    "sample_feature",
]
