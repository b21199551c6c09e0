"""Image helpers for tests."""

from io import BytesIO

from PIL import Image, ImageDraw


def make_image(
    size: tuple[int, int],
    mode: str = "L",
    color: str | int = "white",
    box: tuple[int, int, int, int] | None = None,
    box_color: str | int = "black",
) -> Image.Image:
    """Blank image, optionally with a filled rectangle."""
    image = Image.new(mode, size, color)
    if box is not None:
        ImageDraw.Draw(image).rectangle(box, fill=box_color)
    return image


def image_bytes(image: Image.Image, fmt: str = "PNG") -> bytes:
    buffer = BytesIO()
    image.save(buffer, format=fmt)
    return buffer.getvalue()
