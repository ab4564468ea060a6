"""Heuristic face colour and proportion analysis."""

from .analyzer import (  # noqa: F401
    ALGORITHM_ID,
    NO_FACE_WARNING,
    FaceAnalyzer,
    analyze_face,
    score_confidence,
)
from .color_classifier import classify_color, hex_to_rgb, rgb_to_hex  # noqa: F401
from .face_detection import locate_face  # noqa: F401
from .face_shape import (  # noqa: F401
    classify_face_shape,
    estimate_dimensions,
    estimate_features,
)
from .image import ImageBuffer, decode_image  # noqa: F401
from .regions import average_color  # noqa: F401
from .schemas import AnalysisResult, FaceRegion, ImageMetadata, RGB  # noqa: F401
from .skin import is_skin_color  # noqa: F401

__all__ = [
    "ALGORITHM_ID",
    "NO_FACE_WARNING",
    "FaceAnalyzer",
    "analyze_face",
    "score_confidence",
    "classify_color",
    "hex_to_rgb",
    "rgb_to_hex",
    "locate_face",
    "classify_face_shape",
    "estimate_dimensions",
    "estimate_features",
    "ImageBuffer",
    "decode_image",
    "average_color",
    "AnalysisResult",
    "FaceRegion",
    "ImageMetadata",
    "RGB",
    "is_skin_color",
]
