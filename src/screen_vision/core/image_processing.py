#!/usr/bin/env python3
"""
Image Processing for Screen Vision

This module provides the crop, resize and encode stages that turn a raw
monitor capture into the final artifact. The stages always run in the
order capture -> crop -> resize -> encode.

This module is part of the Core Layer and should have no dependencies on
Presentation or Integration layers.

Sample input:
- PIL Image object (3840x2160)
- crop=Rect(100, 100, 1600, 900), max_dimension=800, quality=80, fmt="png"

Expected output:
- CaptureArtifact(format='png', width=800, height=450, ...)
- PNG compression level 2 for quality 80
"""

import io
import math
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from PIL import Image
from loguru import logger

from screen_vision.core.constants import IMAGE_SETTINGS, MIME_TYPES
from screen_vision.core.errors import EncodeError
from screen_vision.core.geometry import Rect


@dataclass
class CaptureArtifact:
    """Encoded capture owned by whoever called the pipeline."""

    data: bytes
    format: str
    width: int
    height: int

    @property
    def mime_type(self) -> str:
        return MIME_TYPES[self.format]

    @property
    def size_bytes(self) -> int:
        return len(self.data)

    def metadata(self) -> Dict[str, Any]:
        return {
            "format": self.format,
            "mime_type": self.mime_type,
            "width": self.width,
            "height": self.height,
            "size_bytes": self.size_bytes,
        }


def crop_image(img: Image.Image, rect: Rect) -> Image.Image:
    """
    Crop an image to a monitor-local rectangle.

    Args:
        img: Full monitor capture
        rect: Non-empty rectangle inside the image

    Returns:
        Image.Image: Cropped image
    """
    logger.debug(f"Cropping {img.width}x{img.height} capture to {rect}")
    return img.crop((rect.x, rect.y, rect.right, rect.bottom))


def scaled_size(width: int, height: int, max_dimension: int) -> Tuple[int, int]:
    """Size after fitting the longer side to ``max_dimension``; never upscales."""
    if width <= max_dimension and height <= max_dimension:
        return width, height
    if width >= height:
        return max_dimension, max(1, round(height * max_dimension / width))
    return max(1, round(width * max_dimension / height)), max_dimension


def resize_if_needed(img: Image.Image, max_dimension: Optional[int] = None) -> Image.Image:
    """
    Resizes an image so its longer side is at most ``max_dimension``.

    Aspect ratio is preserved and small images are returned untouched, so
    applying this twice gives the same result as applying it once.

    Args:
        img: PIL Image object to resize
        max_dimension: Maximum width or height, None or 0 to skip

    Returns:
        PIL.Image: Resized image or original if no resize needed
    """
    if not max_dimension:
        return img

    width, height = img.size
    new_size = scaled_size(width, height, max_dimension)
    if new_size == (width, height):
        return img

    logger.info(f"Resizing image from {width}x{height} to {new_size[0]}x{new_size[1]}")
    return img.resize(new_size, Image.LANCZOS)


def ensure_rgb(img: Image.Image) -> Image.Image:
    """
    Converts image to RGB mode if needed for JPEG compatibility.

    Args:
        img: PIL Image object to convert

    Returns:
        PIL.Image: Image in RGB mode
    """
    if img.mode == 'RGBA':
        # Create a white background image
        background = Image.new('RGB', img.size, (255, 255, 255))
        # Paste the image using the alpha channel as mask
        background.paste(img, mask=img.split()[3])
        return background
    elif img.mode != 'RGB':
        return img.convert('RGB')
    return img


def png_compression_level(quality: int) -> int:
    """
    Map a 1-100 quality to a PNG compression level (0-9).

    Higher quality means less compression effort; the pixels are identical
    either way because PNG is lossless.
    """
    max_level = IMAGE_SETTINGS["MAX_PNG_COMPRESSION"]
    level = math.floor(max_level - quality / 100 * max_level + 0.5)
    return max(0, min(max_level, level))


def encode_image(
    img: Image.Image,
    fmt: str = IMAGE_SETTINGS["DEFAULT_FORMAT"],
    quality: int = IMAGE_SETTINGS["DEFAULT_QUALITY"],
) -> CaptureArtifact:
    """
    Encode an image as PNG or JPEG.

    Args:
        img: PIL Image object to encode
        fmt: "png" or "jpeg"
        quality: JPEG quality, or inverse PNG compression effort (1-100)

    Returns:
        CaptureArtifact: Encoded bytes with format and final dimensions

    Raises:
        EncodeError: If the format is unknown or Pillow fails
    """
    fmt = fmt.lower()
    if fmt == "jpg":
        fmt = "jpeg"
    if fmt not in IMAGE_SETTINGS["FORMATS"]:
        raise EncodeError(f"Unsupported image format: {fmt}")

    buffer = io.BytesIO()
    try:
        if fmt == "jpeg":
            ensure_rgb(img).save(buffer, format="JPEG", quality=quality)
        else:
            level = png_compression_level(quality)
            logger.debug(f"Encoding PNG with compression level {level} (quality={quality})")
            img.save(buffer, format="PNG", compress_level=level)
    except (OSError, ValueError) as e:
        logger.error(f"Image encoding failed: {str(e)}", exc_info=True)
        raise EncodeError(f"Failed to encode image as {fmt}: {str(e)}") from e

    return CaptureArtifact(data=buffer.getvalue(), format=fmt, width=img.width, height=img.height)


def process_image(
    img: Image.Image,
    crop: Optional[Rect] = None,
    resize: Optional[int] = None,
    quality: int = IMAGE_SETTINGS["DEFAULT_QUALITY"],
    fmt: str = IMAGE_SETTINGS["DEFAULT_FORMAT"],
) -> Tuple[CaptureArtifact, Dict[str, Any]]:
    """
    Complete pipeline for a captured monitor image:
    1. Crop to a monitor-local rectangle if given
    2. Resize if a maximum dimension is given
    3. Encode to the requested format

    Args:
        img: Raw monitor capture
        crop: Optional non-empty crop rectangle
        resize: Optional maximum dimension
        quality: Quality 1-100
        fmt: "png" or "jpeg"

    Returns:
        Tuple[CaptureArtifact, Dict[str, Any]]: Artifact and metadata
    """
    original_size = img.size

    if crop is not None:
        img = crop_image(img, crop)

    img = resize_if_needed(img, resize)
    artifact = encode_image(img, fmt, quality)

    metadata = artifact.metadata()
    metadata.update({
        "original_size": list(original_size),
        "cropped": crop is not None,
        "crop": crop.to_dict() if crop is not None else None,
        "quality": quality,
    })
    if fmt.lower() == "png":
        metadata["png_compression_level"] = png_compression_level(quality)

    return artifact, metadata
