"""Approximate face localisation by scanning for skin-coloured pixels."""
from __future__ import annotations

import logging
import math
from typing import Optional, Protocol

import numpy as np

from .image import ImageBuffer
from .schemas import FaceRegion
from .skin import skin_mask

logger = logging.getLogger(__name__)

DEFAULT_SCAN_STRIDE = 10
MIN_SKIN_SAMPLES = 50

# The raw skin box misses hair, ears and shadowed edges.
WIDTH_INFLATION = 1.2
HEIGHT_INFLATION = 1.4


class FaceLocator(Protocol):
    """Strategy returning the face rectangle of an image, or ``None``."""

    def __call__(self, image: ImageBuffer) -> Optional[FaceRegion]:
        ...


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def skin_sample_points(image: ImageBuffer, stride: int = DEFAULT_SCAN_STRIDE) -> np.ndarray:
    """Return ``(x, y)`` coordinates of skin-like pixels on a ``stride`` grid."""

    if stride < 1:
        raise ValueError("stride must be >= 1")

    grid = image.pixels[::stride, ::stride]
    rows, cols = np.nonzero(skin_mask(grid))
    return np.stack([cols * stride, rows * stride], axis=1)


def locate_face(
    image: ImageBuffer,
    stride: int = DEFAULT_SCAN_STRIDE,
    min_samples: int = MIN_SKIN_SAMPLES,
) -> Optional[FaceRegion]:
    """Estimate the face rectangle from the spread of skin-like samples.

    The bounding box of all skin samples is inflated (width x1.2, height
    x1.4) around its centre and clipped to the image. Returns ``None`` when
    fewer than ``min_samples`` skin pixels are found or the box degenerates.
    """

    points = skin_sample_points(image, stride)
    if len(points) < min_samples:
        logger.debug("Only %d skin samples (need %d)", len(points), min_samples)
        return None

    min_x, min_y = points.min(axis=0)
    max_x, max_y = points.max(axis=0)

    face_width = (max_x - min_x) * WIDTH_INFLATION
    face_height = (max_y - min_y) * HEIGHT_INFLATION
    center_x = (min_x + max_x) / 2
    center_y = (min_y + max_y) / 2

    left = round_half_up(center_x - face_width / 2)
    top = round_half_up(center_y - face_height / 2)
    right = left + round_half_up(face_width)
    bottom = top + round_half_up(face_height)

    left, top = max(0, left), max(0, top)
    right, bottom = min(image.width, right), min(image.height, bottom)

    if right <= left or bottom <= top:
        logger.debug("Skin box degenerated to %d..%d x %d..%d", left, right, top, bottom)
        return None

    region = FaceRegion(x=left, y=top, width=right - left, height=bottom - top)
    logger.debug("Located face region %s from %d skin samples", region, len(points))
    return region


__all__ = [
    "DEFAULT_SCAN_STRIDE",
    "MIN_SKIN_SAMPLES",
    "FaceLocator",
    "locate_face",
    "round_half_up",
    "skin_sample_points",
]
