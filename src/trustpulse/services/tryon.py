"""Virtual try-on, room placement and measurement from a captured photo."""

import base64
import io
import logging
from typing import Callable, Optional

from PIL import Image, ImageOps

from ..core.constants import PromptConstants
from .llm import LLMServiceFactory, to_data_url

logger = logging.getLogger(__name__)

TRY_ON_MODES = ("personal", "space")


def encode_capture(image_bytes: bytes, max_side: int = 1024) -> str:
    """Normalise a captured photo to an upright RGB JPEG and base64-encode it."""
    with Image.open(io.BytesIO(image_bytes)) as pil:
        img = ImageOps.exif_transpose(pil).convert("RGB")
    img.thumbnail((max_side, max_side), Image.LANCZOS)
    buf = io.BytesIO()
    img.save(buf, format="JPEG", quality=90)
    return base64.b64encode(buf.getvalue()).decode("ascii")


def virtual_try_on(image_b64: str, prompt: str, mode: str = "personal", llm=None) -> Optional[str]:
    """Render ``prompt`` onto the photo. Returns a PNG data URL, or None so the
    caller can ask for a retake."""
    if mode not in TRY_ON_MODES:
        raise ValueError(f"mode must be one of {TRY_ON_MODES}, got {mode!r}")
    llm = llm or LLMServiceFactory.create()
    try:
        result = llm.edit_image(image_b64, f"Virtual try-on for: {prompt}. Mode: {mode}.", mime_type="image/jpeg")
    except Exception as e:
        logger.error(f"Virtual try-on failed: {e}")
        return None
    return to_data_url(result)


def estimate_measurement(image_b64: str, target: str, llm=None) -> str:
    llm = llm or LLMServiceFactory.create()
    try:
        text = llm.describe_image(image_b64, f"Estimate dimensions for {target}.", mime_type="image/jpeg")
    except Exception as e:
        logger.error(f"Measurement estimate failed: {e}")
        return PromptConstants.MEASURE_FAILED
    return text or PromptConstants.MEASURE_INCONCLUSIVE


class CameraSession:
    """Exclusive hold on a capture device.

    ``opener`` returns a stream exposing ``read()`` and ``release()`` (the
    shape of ``cv2.VideoCapture``). The stream is released on every exit
    path: after a capture, on cancel, and when the ``with`` block unwinds
    through an exception.
    """

    def __init__(self, opener: Callable[[], object]):
        self._opener = opener
        self._stream = None

    @property
    def active(self) -> bool:
        return self._stream is not None

    def __enter__(self) -> "CameraSession":
        self._stream = self._opener()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()

    def capture(self):
        """Grab one frame and release the device."""
        if self._stream is None:
            raise RuntimeError("Camera session is not active")
        try:
            ok, frame = self._stream.read()
            if not ok:
                raise RuntimeError("Camera returned no frame")
            return frame
        finally:
            self.release()

    def cancel(self) -> None:
        self.release()

    def release(self) -> None:
        stream, self._stream = self._stream, None
        if stream is not None:
            stream.release()
            logger.debug("Camera stream released")
