import base64
import io
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from PIL import Image, UnidentifiedImageError

from config import ACCEPTED_MIME_PREFIX, MAX_UPLOAD_BYTES
from errors import ImageTooLargeError, InvalidImageError, MissingImageError

log = logging.getLogger("design2code")


@dataclass(frozen=True)
class InlineImage:
    mime_type: str
    data: str  # base64 payload

    @property
    def data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.data}"

    def gemini_part(self) -> dict:
        return {"inline_data": {"mime_type": self.mime_type, "data": self.data}}

    def openai_part(self) -> dict:
        return {"type": "image_url", "image_url": {"url": self.data_url, "detail": "high"}}


def validate_upload(content: bytes, mime_type: str, max_bytes: int = MAX_UPLOAD_BYTES) -> None:
    """Request-boundary check; runs before anything is encoded or sent."""
    if not content:
        raise MissingImageError()
    if not (mime_type or "").startswith(ACCEPTED_MIME_PREFIX):
        raise InvalidImageError(mime_type)
    if len(content) > max_bytes:
        raise ImageTooLargeError(max_bytes)


def encode_image(content: bytes, mime_type: str) -> InlineImage:
    return InlineImage(mime_type=mime_type, data=base64.b64encode(content).decode())


def inspect_image(content: bytes) -> Optional[Tuple[int, int]]:
    """Pixel size of the upload, or None if Pillow can't read it."""
    try:
        with Image.open(io.BytesIO(content)) as img:
            log.info(f"Screenshot decoded: {img.size[0]}x{img.size[1]}px ({img.format})")
            return img.size
    except (UnidentifiedImageError, OSError) as e:
        log.warning(f"Could not decode screenshot: {e}")
        return None
