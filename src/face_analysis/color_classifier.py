"""Named colour buckets for hair, skin, eyes and lips."""
from __future__ import annotations

import re
from types import MappingProxyType
from typing import Mapping, NamedTuple, Tuple

from .schemas import RGB, UNKNOWN, ColorSample

Triple = Tuple[int, int, int]


class ColorRange(NamedTuple):
    name: str
    min: Triple
    max: Triple

    def contains(self, rgb: Triple) -> bool:
        return all(lo <= c <= hi for c, lo, hi in zip(rgb, self.min, self.max))


# Ranges overlap; order decides, first match wins.
COLOR_RANGES: Mapping[str, Tuple[ColorRange, ...]] = MappingProxyType(
    {
        "hair": (
            ColorRange("black", (0, 0, 0), (50, 50, 50)),
            ColorRange("brown", (51, 25, 0), (120, 80, 40)),
            ColorRange("blonde", (180, 150, 80), (255, 220, 150)),
            ColorRange("red", (120, 40, 20), (200, 100, 60)),
            ColorRange("gray", (100, 100, 100), (180, 180, 180)),
            ColorRange("white", (200, 200, 200), (255, 255, 255)),
        ),
        "skin": (
            ColorRange("fair", (220, 180, 140), (255, 220, 180)),
            ColorRange("light", (200, 160, 120), (240, 200, 160)),
            ColorRange("medium", (160, 120, 80), (220, 170, 130)),
            ColorRange("olive", (140, 120, 80), (180, 150, 110)),
            ColorRange("tan", (120, 90, 60), (170, 130, 90)),
            ColorRange("dark", (80, 60, 40), (140, 110, 80)),
            ColorRange("deep", (40, 30, 20), (100, 80, 60)),
        ),
        "eyes": (
            ColorRange("blue", (100, 150, 200), (150, 200, 255)),
            ColorRange("green", (80, 120, 80), (120, 180, 120)),
            ColorRange("brown", (60, 40, 20), (120, 80, 50)),
            ColorRange("hazel", (100, 80, 40), (140, 120, 80)),
            ColorRange("gray", (120, 120, 120), (180, 180, 180)),
            ColorRange("amber", (180, 120, 40), (220, 160, 80)),
        ),
        "lips": (
            ColorRange("pink", (200, 120, 140), (255, 180, 200)),
            ColorRange("red", (180, 80, 80), (255, 140, 140)),
            ColorRange("coral", (220, 140, 120), (255, 180, 160)),
            ColorRange("nude", (180, 140, 120), (220, 180, 160)),
            ColorRange("berry", (120, 60, 80), (180, 120, 140)),
        ),
    }
)

# How much each feature's sampled colour is trusted.
SAMPLE_CONFIDENCE: Mapping[str, float] = MappingProxyType(
    {"hair": 0.7, "skin": 0.8, "eyes": 0.6, "lips": 0.6}
)

HEX_PATTERN = re.compile(r"^#([0-9a-fA-F]{6})$")


def classify_color(rgb: RGB, domain: str) -> str:
    """Return the first category of ``domain`` whose box holds ``rgb``."""

    triple = rgb.as_tuple()
    for color_range in COLOR_RANGES[domain]:
        if color_range.contains(triple):
            return color_range.name
    return UNKNOWN


def rgb_to_hex(rgb: RGB) -> str:
    return "#{:02x}{:02x}{:02x}".format(rgb.r, rgb.g, rgb.b)


def hex_to_rgb(value: str) -> RGB:
    match = HEX_PATTERN.match(value)
    if not match:
        raise ValueError(f"not a #rrggbb colour: {value!r}")
    digits = match.group(1)
    r, g, b = (int(digits[i : i + 2], 16) for i in (0, 2, 4))
    return RGB(r=r, g=g, b=b)


def build_sample(rgb: RGB, domain: str) -> ColorSample:
    return ColorSample(
        primary_label=classify_color(rgb, domain),
        hex=rgb_to_hex(rgb),
        rgb=rgb,
        confidence=SAMPLE_CONFIDENCE[domain],
    )


__all__ = [
    "COLOR_RANGES",
    "SAMPLE_CONFIDENCE",
    "ColorRange",
    "build_sample",
    "classify_color",
    "hex_to_rgb",
    "rgb_to_hex",
]
