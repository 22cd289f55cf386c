import io
import logging
import mimetypes
import uuid
from dataclasses import dataclass
from pathlib import Path

from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)

CANONICAL_CONTENT_TYPE = "image/png"
CANONICAL_FORMAT = "PNG"


class InvalidImage(ValueError):
    pass


class FileStoreError(OSError):
    pass


@dataclass(frozen=True)
class NormalizedImage:
    content: bytes
    content_type: str
    extension: str


def extension_for(content_type: str) -> str:
    return mimetypes.guess_extension(content_type) or ".bin"


def normalize_image(content: bytes, content_type: str | None) -> NormalizedImage:
    """Return the upload as PNG, re-encoding anything that is not already PNG."""
    if content_type == CANONICAL_CONTENT_TYPE:
        return NormalizedImage(content, CANONICAL_CONTENT_TYPE, extension_for(CANONICAL_CONTENT_TYPE))

    try:
        with Image.open(io.BytesIO(content)) as img:
            img.load()
            # PNG has no CMYK, and JPEG-style YCbCr/LAB need converting too.
            if img.mode not in ("1", "L", "LA", "P", "RGB", "RGBA", "I", "I;16"):
                img = img.convert("RGBA" if "A" in img.getbands() else "RGB")
            buf = io.BytesIO()
            img.save(buf, format=CANONICAL_FORMAT)
    except (UnidentifiedImageError, OSError, ValueError) as exc:
        raise InvalidImage(f"Cannot decode uploaded image ({content_type})") from exc

    return NormalizedImage(buf.getvalue(), CANONICAL_CONTENT_TYPE, extension_for(CANONICAL_CONTENT_TYPE))


def unique_filename(extension: str) -> str:
    return f"{uuid.uuid4().hex}{extension}"


class ImageStore:
    """Directory-backed store for uploaded images, addressed by public URL."""

    def __init__(self, root: Path, url_prefix: str):
        self.root = root
        self.url_prefix = url_prefix.rstrip("/")

    def exists(self) -> bool:
        return self.root.is_dir()

    def write(self, name: str, content: bytes) -> str:
        if not self.exists():
            raise FileStoreError(f"Upload directory does not exist: {self.root}")
        try:
            (self.root / name).write_bytes(content)
        except OSError as exc:
            raise FileStoreError(f"Could not write {name}: {exc}") from exc
        return f"{self.url_prefix}/{name}"

    def has(self, url: str) -> bool:
        return (self.root / url.rsplit("/", 1)[-1]).is_file()

    def remove(self, url: str):
        name = url.rsplit("/", 1)[-1]
        try:
            (self.root / name).unlink(missing_ok=True)
        except OSError as exc:
            logger.warning("Could not remove uploaded image %s: %s", name, exc)

    def save_image(self, image: NormalizedImage) -> str:
        return self.write(unique_filename(image.extension), image.content)
