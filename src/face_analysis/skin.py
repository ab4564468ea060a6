"""Rule-based skin colour test used to find the face and to gate samples."""
from __future__ import annotations

from typing import Union

import numpy as np

from .schemas import RGB

RGBLike = Union[RGB, tuple, list]


def _channels(rgb: RGBLike) -> tuple[int, int, int]:
    if isinstance(rgb, RGB):
        return rgb.as_tuple()
    r, g, b = rgb
    return int(r), int(g), int(b)


def is_skin_color(rgb: RGBLike) -> bool:
    """Return True when ``rgb`` falls inside the RGB skin heuristic."""

    r, g, b = _channels(rgb)
    spread = max(r, g, b) - min(r, g, b)
    return (
        r > 95
        and g > 40
        and b > 20
        and spread > 15
        and abs(r - g) > 15
        and r > g
        and r > b
    )


def skin_mask(pixels: np.ndarray) -> np.ndarray:
    """Apply :func:`is_skin_color` to every pixel of an ``(..., 3)`` array."""

    arr = np.asarray(pixels, dtype=np.int16)
    r, g, b = arr[..., 0], arr[..., 1], arr[..., 2]
    spread = arr.max(axis=-1) - arr.min(axis=-1)
    return (
        (r > 95)
        & (g > 40)
        & (b > 20)
        & (spread > 15)
        & (np.abs(r - g) > 15)
        & (r > g)
        & (r > b)
    )


__all__ = ["is_skin_color", "skin_mask"]
