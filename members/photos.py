import io
import logging
import time

from django.core.files.base import ContentFile
from django.core.files.storage import default_storage
from PIL import Image, ImageOps, UnidentifiedImageError

logger = logging.getLogger(__name__)

PHOTO_SIZE = (300, 400)
PHOTO_QUALITY = 95
PHOTO_DIR = "photos"


class PhotoError(ValueError):
    pass


def _center_box(width, height):
    """Largest 3:4 box centred in a ``width`` x ``height`` image."""
    target = PHOTO_SIZE[0] / PHOTO_SIZE[1]
    if width / height > target:
        new_width = int(height * target)
        left = (width - new_width) // 2
        return (left, 0, left + new_width, height)
    new_height = int(width / target)
    top = (height - new_height) // 2
    return (0, top, width, top + new_height)


def process_photo(fileobj, crop=None):
    """Crop and resize an uploaded image into a 300x400 JPEG.

    ``crop`` is an optional ``(x, y, width, height)`` box in source pixels.
    Returns the JPEG bytes.
    """
    try:
        image = Image.open(fileobj)
        image = ImageOps.exif_transpose(image)
    except (UnidentifiedImageError, OSError) as exc:
        raise PhotoError("Arquivo de imagem inválido") from exc

    if crop:
        x, y, w, h = (int(round(float(v))) for v in crop)
        if w <= 0 or h <= 0:
            raise PhotoError("Área de recorte inválida")
        box = (max(x, 0), max(y, 0), min(x + w, image.width), min(y + h, image.height))
        # box lies outside the image once clamped
        if box[2] <= box[0] or box[3] <= box[1]:
            raise PhotoError("Área de recorte inválida")
    else:
        box = _center_box(image.width, image.height)

    image = image.crop(box).convert("RGB").resize(PHOTO_SIZE, Image.LANCZOS)
    out = io.BytesIO()
    image.save(out, format="JPEG", quality=PHOTO_QUALITY)
    return out.getvalue()


def save_photo(fileobj, crop=None):
    """Process and store an upload; returns ``(name, public_url)``."""
    data = process_photo(fileobj, crop)
    name = f"{PHOTO_DIR}/photo-{int(time.time() * 1000)}.jpg"
    stored = default_storage.save(name, ContentFile(data))
    logger.info("Stored photo %s (%d bytes)", stored, len(data))
    return stored, default_storage.url(stored)
