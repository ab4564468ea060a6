"""FastAPI application exposing the face colour analysis pipeline."""
from __future__ import annotations

import base64
import binascii
import logging
import re
from typing import Any, Dict, Literal, Optional
from uuid import uuid4

import cv2
from fastapi import Body, FastAPI, Header, Query, UploadFile
from fastapi.responses import JSONResponse
from PIL import UnidentifiedImageError
from pydantic import BaseModel, ConfigDict, Field, model_validator
from starlette import status
from starlette.responses import Response

from face_analysis import AnalysisResult, FaceAnalyzer, ImageBuffer, decode_image
from face_analysis.regions import FEATURE_REGIONS, feature_region

logger = logging.getLogger(__name__)
app = FastAPI(title="Face Color Analysis Service", version="1.0.0")

DATA_URL_PATTERN = re.compile(r"^data:image/[^;]+;base64,")

# BGR colours for the debug overlay
REGION_COLORS: Dict[str, tuple] = {
    "face": (0, 255, 0),
    "hair": (255, 0, 0),
    "skin": (0, 200, 255),
    "eyes": (255, 0, 255),
    "lips": (0, 0, 255),
}

analyzer = FaceAnalyzer()


class AnalyzeOptions(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    trace_id: Optional[str] = Field(default=None, alias="traceId")
    exif_correction: bool = Field(default=True, alias="exif_correction")
    debug: Optional[bool] = Field(default=None, alias="debug")

    @model_validator(mode="before")
    @classmethod
    def _compat(cls, values: Any):  # type: ignore[override]
        if not isinstance(values, dict):
            return values
        # older clients send camelCase
        if "trace_id" not in values and "traceId" in values:
            values["trace_id"] = values.pop("traceId")
        if "exif_correction" not in values and "exifCorrection" in values:
            values["exif_correction"] = values.pop("exifCorrection")
        return values


class AnalyzeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    image_base64: str = Field(alias="image_base64")
    file_name: str = Field(default="", alias="fileName")
    options: Optional[AnalyzeOptions] = None

    @model_validator(mode="before")
    @classmethod
    def _compat(cls, values: Any):  # type: ignore[override]
        if not isinstance(values, dict):
            return values
        if "image_base64" not in values and "imageBase64" in values:
            values["image_base64"] = values.pop("imageBase64")
        return values


class AnalyzeResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    status: Literal["ok", "error"]
    code: Optional[str] = None
    traceId: Optional[str] = None
    analysis: Optional[AnalysisResult] = None
    debug_image_base64: Optional[str] = None


def _decode_base64_image(data: str) -> Optional[bytes]:
    if DATA_URL_PATTERN.match(data):
        _, encoded = data.split(",", 1)
    else:
        encoded = data
    try:
        return base64.b64decode(encoded)
    except (ValueError, binascii.Error):
        return None


def _draw_regions(image: ImageBuffer, result: AnalysisResult) -> Optional[str]:
    overlay = cv2.cvtColor(image.pixels.copy(), cv2.COLOR_RGB2BGR)
    region = result.face_region
    if region is not None:
        rects = {"face": region}
        for name in FEATURE_REGIONS:
            rects[name] = feature_region(name, region, image)
        for name, rect in rects.items():
            cv2.rectangle(
                overlay,
                (rect.x, rect.y),
                (rect.right - 1, rect.bottom - 1),
                REGION_COLORS[name],
                thickness=2,
            )
    success, buffer = cv2.imencode(".png", overlay)
    if not success:  # pragma: no cover - OpenCV failure is rare but handled
        return None
    return base64.b64encode(buffer.tobytes()).decode("ascii")


def _error(trace_id: str) -> AnalyzeResponse:
    return AnalyzeResponse(status="error", code="INVALID_IMAGE", traceId=trace_id)


def _run_analysis(
    image_bytes: bytes,
    file_name: str,
    trace_id: str,
    debug: bool,
    exif_correction: bool,
) -> AnalyzeResponse:
    if not image_bytes:
        return _error(trace_id)

    try:
        image, metadata = decode_image(
            image_bytes, file_name=file_name, exif_correction=exif_correction
        )
    except (UnidentifiedImageError, OSError):
        logger.debug("Failed to decode image", exc_info=True)
        return _error(trace_id)

    analysis = analyzer.analyze(image, metadata=metadata, options={"trace_id": trace_id})

    debug_image = _draw_regions(image, analysis) if debug else None
    return AnalyzeResponse(
        status="ok",
        traceId=trace_id,
        analysis=analysis,
        debug_image_base64=debug_image,
    )


def _response_with_trace(payload: AnalyzeResponse, trace_id: str) -> JSONResponse:
    content = payload.model_dump(exclude_none=True, exclude={"analysis"})
    if payload.analysis is not None:
        content["analysis"] = payload.analysis.model_dump(by_alias=True, mode="json")
    response = JSONResponse(content=content, status_code=status.HTTP_200_OK)
    response.headers["X-Trace-Id"] = trace_id
    return response


@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


@app.post("/analyze")
def analyze(
    request: AnalyzeRequest = Body(...),
    x_trace_id: Optional[str] = Header(default=None, alias="X-Trace-Id"),
    debug: bool = Query(default=False),
) -> Response:
    options = request.options
    trace_id = x_trace_id or (options.trace_id if options else None) or str(uuid4())

    effective_debug = debug or (options.debug if options and options.debug is not None else False)
    exif_correction = options.exif_correction if options else True

    image_bytes = _decode_base64_image(request.image_base64)
    if image_bytes is None:
        return _response_with_trace(_error(trace_id), trace_id)

    payload = _run_analysis(
        image_bytes, request.file_name, trace_id, effective_debug, exif_correction
    )
    return _response_with_trace(payload, trace_id)


@app.post("/analyze/file")
def analyze_file(
    file: UploadFile,
    x_trace_id: Optional[str] = Header(default=None, alias="X-Trace-Id"),
    debug: bool = Query(default=False),
    exif_correction: bool = Query(default=True),
) -> Response:
    trace_id = x_trace_id or str(uuid4())

    image_bytes = file.file.read()
    payload = _run_analysis(
        image_bytes, file.filename or "", trace_id, debug, exif_correction
    )
    return _response_with_trace(payload, trace_id)


__all__ = ("app",)
