"""Result models returned by the face analysis pipeline."""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

UNKNOWN = "unknown"


class _Model(BaseModel):
    # snake_case attributes, camelCase on the wire
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)


class RGB(_Model):
    model_config = ConfigDict(frozen=True)

    r: int = Field(ge=0, le=255)
    g: int = Field(ge=0, le=255)
    b: int = Field(ge=0, le=255)

    def as_tuple(self) -> tuple[int, int, int]:
        return self.r, self.g, self.b


class FaceRegion(_Model):
    """Pixel rectangle heuristically estimated to contain the face."""

    model_config = ConfigDict(frozen=True)

    x: int = Field(ge=0)
    y: int = Field(ge=0)
    width: int = Field(ge=1)
    height: int = Field(ge=1)

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height


class ColorSample(_Model):
    primary_label: str
    hex: str = Field(pattern=r"^#[0-9a-f]{6}$")
    rgb: RGB
    confidence: float = Field(ge=0.0, le=1.0)


class ColorAnalysis(_Model):
    hair_color: Optional[ColorSample] = None
    skin_tone: Optional[ColorSample] = None
    eye_color: Optional[ColorSample] = None
    lip_color: Optional[ColorSample] = None


class FaceDimensions(_Model):
    face_length: int
    face_width: int
    jaw_width: int
    forehead_width: int
    cheekbone_width: int
    length_to_width_ratio: float
    jaw_to_forehead_ratio: float
    cheekbone_to_jaw_ratio: float


class FacialFeatures(_Model):
    face_shape: str = UNKNOWN
    eye_shape: str = UNKNOWN
    eye_distance: str = UNKNOWN
    eyebrow_shape: str = UNKNOWN
    nose_shape: str = UNKNOWN
    lip_shape: str = UNKNOWN


class ImageDimensions(_Model):
    width: int = 0
    height: int = 0


class ImageMetadata(_Model):
    """File metadata supplied by the upload side or derived from the buffer."""

    original_file_name: str = ""
    file_size: int = 0
    image_format: str = ""
    image_dimensions: ImageDimensions = Field(default_factory=ImageDimensions)


class AnalysisMetadata(_Model):
    processing_time_ms: int = 0
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    algorithm_id: str = "custom-v1"
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)


class AnalysisResult(_Model):
    original_file_name: str = ""
    file_size: int = 0
    image_format: str = ""
    image_dimensions: ImageDimensions = Field(default_factory=ImageDimensions)
    face_detected: bool = False
    face_count: int = 0
    face_region: Optional[FaceRegion] = None
    colors: ColorAnalysis = Field(default_factory=ColorAnalysis)
    face_dimensions: Optional[FaceDimensions] = None
    facial_features: FacialFeatures = Field(default_factory=FacialFeatures)
    analysis_metadata: AnalysisMetadata = Field(default_factory=AnalysisMetadata)

    def summary(self) -> Dict[str, Any]:
        """Compact view used by listing screens."""

        def label(sample: Optional[ColorSample]) -> str:
            return sample.primary_label if sample else UNKNOWN

        return {
            "faceDetected": self.face_detected,
            "faceShape": self.facial_features.face_shape or UNKNOWN,
            "hairColor": label(self.colors.hair_color),
            "skinTone": label(self.colors.skin_tone),
            "eyeColor": label(self.colors.eye_color),
            "confidence": self.analysis_metadata.confidence,
        }

    def color_palette(self) -> Dict[str, Dict[str, Any]]:
        samples = {
            "hair": self.colors.hair_color,
            "skin": self.colors.skin_tone,
            "eyes": self.colors.eye_color,
            "lips": self.colors.lip_color,
        }
        palette: Dict[str, Dict[str, Any]] = {}
        for name, sample in samples.items():
            palette[name] = {
                "label": sample.primary_label if sample else None,
                "hex": sample.hex if sample else None,
                "rgb": sample.rgb.model_dump() if sample else None,
            }
        return palette


__all__ = [
    "UNKNOWN",
    "RGB",
    "FaceRegion",
    "ColorSample",
    "ColorAnalysis",
    "FaceDimensions",
    "FacialFeatures",
    "ImageDimensions",
    "ImageMetadata",
    "AnalysisMetadata",
    "AnalysisResult",
]
