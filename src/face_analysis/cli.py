"""Command-line helper that prints the analysis of an image file."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from PIL import UnidentifiedImageError

from .analyzer import FaceAnalyzer
from .face_detection import DEFAULT_SCAN_STRIDE
from .image import decode_image
from .regions import DEFAULT_SAMPLE_STRIDE

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="face-analysis",
        description="Print hair/skin/eye/lip colours and face shape of a portrait.",
    )
    parser.add_argument("image", type=Path, help="path to a JPEG/PNG portrait")
    parser.add_argument("--scan-stride", type=int, default=DEFAULT_SCAN_STRIDE)
    parser.add_argument("--sample-stride", type=int, default=DEFAULT_SAMPLE_STRIDE)
    parser.add_argument(
        "--summary", action="store_true", help="print only the summary view"
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    try:
        image, metadata = decode_image(args.image.read_bytes(), file_name=args.image.name)
    except (UnidentifiedImageError, OSError) as exc:
        logger.debug("Failed to decode %s", args.image, exc_info=True)
        print(f"cannot read image {args.image}: {exc}", file=sys.stderr)
        return 1

    analyzer = FaceAnalyzer(scan_stride=args.scan_stride, sample_stride=args.sample_stride)
    result = analyzer.analyze(image, metadata=metadata)

    payload = result.summary() if args.summary else result.model_dump(by_alias=True)
    print(json.dumps(payload, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
