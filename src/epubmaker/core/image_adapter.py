"""Fit JPEG pages into a target viewport.

Grayscale scans get a content-aware crop first: a tight crop that removes a
lot of margin usually means a text page, where trimming improves legibility
on small screens. A crop that only shaves a little usually means an
illustration, which is left framed as-is.
"""

import logging
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path

from PIL import Image, ImageChops, ImageOps, UnidentifiedImageError

from epubmaker.errors import ImageAdaptationFailure

log = logging.getLogger(__name__)

JPEG_QUALITY = 80
# Percent of darkest/brightest pixels clipped before looking for content
CROP_CUTOFF = (1, 1)
# Stretched (inverted) level above which a pixel counts as content
CONTENT_THRESHOLD = 32
# Minimum relative reduction of either side for a crop to be kept
MIN_CROP_REDUCTION = 0.15

Box = tuple[int, int, int, int]


@dataclass
class AdaptResult:
    """Outcome of adapting one image."""

    data: bytes
    original_size: tuple[int, int]
    size: tuple[int, int]
    cropped: bool = False
    resized: bool = False


def is_grayscale(image: Image.Image) -> bool:
    """True for single-channel images and RGB images with equal channels."""
    if image.mode in ("1", "L", "LA", "I", "I;16", "F"):
        return True
    rgb = image.convert("RGB")
    r, g, b = rgb.split()
    return (
        ImageChops.difference(r, g).getbbox() is None
        and ImageChops.difference(g, b).getbbox() is None
    )


def content_box(image: Image.Image, cutoff: tuple[int, int] = CROP_CUTOFF) -> Box | None:
    """Bounding box of the non-background content of a light-paper image.

    Returns None if the image holds no content at all.
    """
    inverted = ImageOps.invert(image.convert("L"))
    stretched = ImageOps.autocontrast(inverted, cutoff=cutoff)
    mask = stretched.point(lambda v: 255 if v > CONTENT_THRESHOLD else 0)
    return mask.getbbox()


def should_crop(size: tuple[int, int], box: Box) -> bool:
    """Accept a crop only if it cuts either side by MIN_CROP_REDUCTION."""
    width, height = size
    crop_width = box[2] - box[0]
    crop_height = box[3] - box[1]
    return (
        1 - crop_width / width >= MIN_CROP_REDUCTION
        or 1 - crop_height / height >= MIN_CROP_REDUCTION
    )


def fit_size(size: tuple[int, int], max_width: int, max_height: int) -> tuple[int, int]:
    """Scale size uniformly to fit inside the box, never enlarging.

    The side that limits the scale factor lands exactly on its bound.
    """
    width, height = size
    if width <= max_width and height <= max_height:
        return size
    # Compare max_width / width with max_height / height without floats
    if max_width * height <= max_height * width:
        new_height = max(1, min(max_height, round(height * max_width / width)))
        return max_width, new_height
    new_width = max(1, min(max_width, round(width * max_height / height)))
    return new_width, max_height


class ImageAdapter:
    """Crop and downscale JPEG images to a target viewport."""

    def __init__(self, max_width: int, max_height: int, quality: int = JPEG_QUALITY):
        self.max_width = max_width
        self.max_height = max_height
        self.quality = quality

    def adapt(self, raw: bytes, name: str = "<image>") -> AdaptResult:
        """Decode, optionally crop and resize, then re-encode an image.

        Raises:
            ImageAdaptationFailure: If the image cannot be decoded or encoded
        """
        try:
            image = Image.open(BytesIO(raw))
            image.load()
        except (UnidentifiedImageError, OSError, ValueError) as e:
            raise ImageAdaptationFailure(name, f"decode failed: {e}") from e

        original_size = image.size
        cropped = False

        if is_grayscale(image):
            box = content_box(image)
            if box is not None and should_crop(image.size, box):
                log.debug(f"{name}: cropping {image.size} to {box} (text page)")
                image = image.crop(box)
                cropped = True
            else:
                log.debug(f"{name}: keeping original framing")

        new_size = fit_size(image.size, self.max_width, self.max_height)
        resized = new_size != image.size
        if resized:
            log.debug(f"{name}: resizing {image.size} -> {new_size}")
            image = image.resize(new_size, Image.Resampling.LANCZOS)

        if image.mode not in ("RGB", "L", "CMYK"):
            image = image.convert("RGB")

        buffer = BytesIO()
        try:
            image.save(buffer, format="JPEG", quality=self.quality)
        except (OSError, ValueError) as e:
            raise ImageAdaptationFailure(name, f"encode failed: {e}") from e

        return AdaptResult(
            data=buffer.getvalue(),
            original_size=original_size,
            size=image.size,
            cropped=cropped,
            resized=resized,
        )

    def adapt_file(self, path: Path) -> AdaptResult:
        """Adapt an image file in place."""
        result = self.adapt(path.read_bytes(), name=path.name)
        path.write_bytes(result.data)
        return result
