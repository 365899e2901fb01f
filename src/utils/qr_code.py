"""QR codes for sharing a game id with other players."""

import io
import logging

import qrcode
from PIL import Image, ImageDraw
from qrcode.constants import ERROR_CORRECT_M
from qrcode.exceptions import DataOverflowError

from src.core.exceptions import QRCodeError

logger = logging.getLogger(__name__)

# pixels per QR module
SCALE = 10
PLACEHOLDER_SIZE = 64


def encode(text: str) -> Image.Image:
    """QR code at error correction level M. Raises QRCodeError when text cannot be encoded."""
    qr = qrcode.QRCode(error_correction=ERROR_CORRECT_M, box_size=SCALE, border=0)
    try:
        qr.add_data(text)
        qr.make(fit=True)
    except (DataOverflowError, ValueError) as exc:
        raise QRCodeError(f"Cannot encode {len(text)} characters as a QR code: {exc}") from exc
    return qr.make_image(fill_color="black", back_color="white").get_image().convert("RGB")


def render(text: str) -> Image.Image:
    """Same as encode(), but falls back to a placeholder image instead of raising."""
    try:
        return encode(text)
    except QRCodeError as exc:
        logger.warning("QR code generation failed, using placeholder: %s", exc)
        return placeholder()


def render_png(text: str) -> bytes:
    buffer = io.BytesIO()
    render(text).save(buffer, format="PNG")
    return buffer.getvalue()


def placeholder() -> Image.Image:
    """A crossed-out circle."""
    size = PLACEHOLDER_SIZE
    image = Image.new("RGB", (size, size), "white")
    draw = ImageDraw.Draw(image)
    margin = size // 8
    draw.ellipse((margin, margin, size - margin, size - margin), outline="black", width=4)
    inset = size // 3
    draw.line((inset, inset, size - inset, size - inset), fill="black", width=4)
    draw.line((inset, size - inset, size - inset, inset), fill="black", width=4)
    return image
