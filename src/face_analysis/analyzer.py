"""Face colour and proportion analysis pipeline."""
from __future__ import annotations

import logging
import time
from functools import partial
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from .color_classifier import build_sample
from .face_detection import DEFAULT_SCAN_STRIDE, MIN_SKIN_SAMPLES, FaceLocator, locate_face
from .face_shape import estimate_dimensions, estimate_features
from .image import ImageBuffer
from .regions import DEFAULT_SAMPLE_STRIDE, sample_feature
from .schemas import (
    UNKNOWN,
    AnalysisResult,
    FaceRegion,
    ImageDimensions,
    ImageMetadata,
)

logger = logging.getLogger(__name__)

ALGORITHM_ID = "custom-v1"
NO_FACE_WARNING = "No face detected in image"

# feature region -> attribute on ColorAnalysis
FEATURE_FIELDS: Mapping[str, str] = MappingProxyType(
    {
        "hair": "hair_color",
        "skin": "skin_tone",
        "eyes": "eye_color",
        "lips": "lip_color",
    }
)

CONFIDENCE_WEIGHTS: Mapping[str, float] = MappingProxyType(
    {
        "face_detected": 0.3,
        "skin_tone": 0.2,
        "hair_color": 0.2,
        "face_length": 0.2,
        "face_shape": 0.1,
    }
)


def score_confidence(result: AnalysisResult) -> float:
    """Sum the weights of the signals present in ``result``, capped at 1.0."""

    score = 0.0
    if result.face_detected:
        score += CONFIDENCE_WEIGHTS["face_detected"]
    if result.colors.skin_tone is not None:
        score += CONFIDENCE_WEIGHTS["skin_tone"]
    if result.colors.hair_color is not None:
        score += CONFIDENCE_WEIGHTS["hair_color"]
    dims = result.face_dimensions
    if dims is not None and dims.face_length > 0:
        score += CONFIDENCE_WEIGHTS["face_length"]
    if result.facial_features.face_shape != UNKNOWN:
        score += CONFIDENCE_WEIGHTS["face_shape"]
    return round(min(score, 1.0), 2)


class FaceAnalyzer:
    """Run face colour analysis over a decoded RGB image.

    ``locator`` replaces the skin-scan face locator; any callable taking an
    :class:`ImageBuffer` and returning a :class:`FaceRegion` or ``None``
    will do.
    """

    def __init__(
        self,
        scan_stride: int = DEFAULT_SCAN_STRIDE,
        sample_stride: int = DEFAULT_SAMPLE_STRIDE,
        min_skin_samples: int = MIN_SKIN_SAMPLES,
        locator: Optional[FaceLocator] = None,
    ) -> None:
        if scan_stride < 1 or sample_stride < 1:
            raise ValueError("strides must be >= 1")
        self.scan_stride = scan_stride
        self.sample_stride = sample_stride
        self.min_skin_samples = min_skin_samples
        self.locator: FaceLocator = locator or partial(
            locate_face, stride=scan_stride, min_samples=min_skin_samples
        )

    def analyze(
        self,
        image: ImageBuffer,
        metadata: Optional[ImageMetadata] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> AnalysisResult:
        opts: Dict[str, Any] = dict(options or {})
        trace_id = opts.get("trace_id")
        started = time.perf_counter()

        result = AnalysisResult()
        result.analysis_metadata.algorithm_id = ALGORITHM_ID

        try:
            self._apply_file_metadata(result, image, metadata)
            self._run(image, result, trace_id)
        except Exception as exc:
            logger.exception("Face analysis failed", extra={"trace_id": trace_id})
            result.analysis_metadata.errors.append(str(exc) or type(exc).__name__)

        result.analysis_metadata.confidence = score_confidence(result)
        elapsed = time.perf_counter() - started
        result.analysis_metadata.processing_time_ms = int(round(elapsed * 1000))
        return result

    def _apply_file_metadata(
        self,
        result: AnalysisResult,
        image: ImageBuffer,
        metadata: Optional[ImageMetadata],
    ) -> None:
        if metadata is None:
            metadata = ImageMetadata(
                image_dimensions=ImageDimensions(width=image.width, height=image.height)
            )
        result.original_file_name = metadata.original_file_name
        result.file_size = metadata.file_size
        result.image_format = metadata.image_format
        result.image_dimensions = metadata.image_dimensions

    def _locate(self, image: ImageBuffer, trace_id: Optional[str]) -> Optional[FaceRegion]:
        try:
            return self.locator(image)
        except Exception:
            logger.warning(
                "Face locator failed, treating as no face",
                exc_info=True,
                extra={"trace_id": trace_id},
            )
            return None

    def _run(self, image: ImageBuffer, result: AnalysisResult, trace_id: Optional[str]) -> None:
        region = self._locate(image, trace_id)
        if region is None:
            logger.info("No face detected", extra={"trace_id": trace_id})
            result.analysis_metadata.warnings.append(NO_FACE_WARNING)
            return
        if region.right > image.width or region.bottom > image.height:
            raise ValueError(
                f"face region {region.x},{region.y} {region.width}x{region.height} "
                f"exceeds {image.width}x{image.height} image"
            )

        result.face_detected = True
        result.face_count = 1
        result.face_region = region

        for feature, field in FEATURE_FIELDS.items():
            rgb = sample_feature(feature, region, image, self.sample_stride)
            setattr(result.colors, field, build_sample(rgb, feature))
            logger.debug("Feature %s averaged to %s", feature, rgb)

        dimensions = estimate_dimensions(region)
        result.face_dimensions = dimensions
        result.facial_features = estimate_features(dimensions)


_default_analyzer = FaceAnalyzer()


def analyze_face(
    image: ImageBuffer,
    metadata: Optional[ImageMetadata] = None,
    options: Optional[Dict[str, Any]] = None,
) -> AnalysisResult:
    """Analyse ``image`` with the default strides."""

    return _default_analyzer.analyze(image, metadata=metadata, options=options)


__all__ = [
    "ALGORITHM_ID",
    "NO_FACE_WARNING",
    "FaceAnalyzer",
    "analyze_face",
    "score_confidence",
]
