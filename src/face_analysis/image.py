"""Decoded image access and the Pillow-based decoder that produces it."""
from __future__ import annotations

import logging
from io import BytesIO
from typing import Callable, Tuple

import numpy as np
from PIL import Image, ImageOps, UnidentifiedImageError

from .schemas import RGB, FaceRegion, ImageDimensions, ImageMetadata

logger = logging.getLogger(__name__)

PixelReader = Callable[[int, int], Tuple[int, int, int]]


class ImageBuffer:
    """Read-only view over an ``H x W x 3`` RGB ``uint8`` array."""

    def __init__(self, pixels: np.ndarray) -> None:
        array = np.asarray(pixels)
        if array.ndim != 3 or array.shape[2] != 3:
            raise ValueError("pixels must have shape (H, W, 3)")
        if array.dtype != np.uint8:
            array = np.clip(array, 0, 255).astype(np.uint8)
        view = array.view()
        view.flags.writeable = False
        self._pixels = view

    @classmethod
    def from_reader(cls, width: int, height: int, read_pixel: PixelReader) -> "ImageBuffer":
        """Materialise a buffer from a ``(x, y) -> (r, g, b)`` accessor."""

        array = np.zeros((height, width, 3), dtype=np.uint8)
        for y in range(height):
            for x in range(width):
                array[y, x] = read_pixel(x, y)
        return cls(array)

    @property
    def width(self) -> int:
        return int(self._pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self._pixels.shape[0])

    @property
    def pixels(self) -> np.ndarray:
        return self._pixels

    def pixel(self, x: int, y: int) -> RGB:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} image")
        r, g, b = (int(c) for c in self._pixels[y, x])
        return RGB(r=r, g=g, b=b)

    def crop(self, region: FaceRegion) -> "ImageBuffer":
        if region.right > self.width or region.bottom > self.height:
            raise ValueError(
                f"region {region.x},{region.y} {region.width}x{region.height} "
                f"exceeds {self.width}x{self.height} image"
            )
        return ImageBuffer(self._pixels[region.y : region.bottom, region.x : region.right])

    def __repr__(self) -> str:
        return f"ImageBuffer({self.width}x{self.height})"


def decode_image(
    image_bytes: bytes, file_name: str = "", exif_correction: bool = True
) -> Tuple[ImageBuffer, ImageMetadata]:
    """Decode raw image bytes into an :class:`ImageBuffer` plus file metadata.

    Parameters
    ----------
    image_bytes:
        Raw encoded image payload (e.g. JPEG/PNG).
    file_name:
        Name of the uploaded file, echoed into the metadata.
    exif_correction:
        Whether to apply EXIF orientation transpose before conversion.

    Returns
    -------
    Tuple[ImageBuffer, ImageMetadata]
        RGB pixel buffer and the metadata describing the payload.

    Raises
    ------
    UnidentifiedImageError
        If the payload cannot be parsed as an image.
    """

    with Image.open(BytesIO(image_bytes)) as img:
        image_format = (img.format or "").lower()
        if exif_correction:
            img = ImageOps.exif_transpose(img)
        rgb_image = img.convert("RGB")
        np_rgb = np.asarray(rgb_image)

    buffer = ImageBuffer(np_rgb)
    metadata = ImageMetadata(
        original_file_name=file_name,
        file_size=len(image_bytes),
        image_format=image_format,
        image_dimensions=ImageDimensions(width=buffer.width, height=buffer.height),
    )
    logger.debug("Decoded %s image %dx%d", image_format or "unknown", buffer.width, buffer.height)
    return buffer, metadata


__all__ = ["ImageBuffer", "PixelReader", "decode_image", "UnidentifiedImageError"]
