"""Image detection for albumscan."""

from __future__ import annotations

from pathlib import Path

from PIL import Image, UnidentifiedImageError

RAW_EXTENSIONS = {
    ".3fr", ".arw", ".cr2", ".cr3", ".crw", ".dcr", ".dng", ".erf", ".kdc",
    ".mef", ".mos", ".mrw", ".nef", ".nrw", ".orf", ".pef", ".raf", ".raw",
    ".rw2", ".sr2", ".srf", ".srw", ".x3f",
}

# Pillow cannot decode HEIF containers without a plugin
HEIF_EXTENSIONS = {".heic", ".heif"}

TRUSTED_EXTENSIONS = RAW_EXTENSIONS | HEIF_EXTENSIONS

IMAGE_EXTENSIONS = {
    ".bmp", ".gif", ".jpe", ".jpeg", ".jpg", ".png", ".tif", ".tiff", ".webp",
}

SUPPORTED_FORMATS = {"BMP", "GIF", "JPEG", "MPO", "PNG", "TIFF", "WEBP"}


def is_path_image(path: Path) -> bool:
    """Return True if the file at path is a photo we know how to show.

    RAW and HEIF files are trusted by extension. Other candidates must have
    a header Pillow recognises. Unreadable headers count as "not an image".
    """
    suffix = Path(path).suffix.lower()
    if suffix in TRUSTED_EXTENSIONS:
        return True
    if suffix not in IMAGE_EXTENSIONS:
        return False

    try:
        with Image.open(path) as im:
            return im.format in SUPPORTED_FORMATS
    except Image.DecompressionBombError:
        # Header parsed fine, the image is just huge (panoramas, scans)
        return True
    except (OSError, UnidentifiedImageError, ValueError):
        return False
