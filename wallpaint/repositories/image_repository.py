from io import BytesIO
from pathlib import Path
from typing import Union
import logging
import os
import numpy as np
import cv2
from PIL import Image as PILImage
from dotenv import load_dotenv

from ..errors import InvalidChannelCount
from ..models.pixel_buffer import PixelBuffer

logger = logging.getLogger(__name__)

# Load environment variables
load_dotenv()


class ImageRepository:
    """
    Handles file I/O and decoding for PixelBuffer entities.
    Decoded pixels are always RGB or RGBA; grayscale is expanded to RGB.
    """
    def __init__(self):
        raw = os.getenv("VALID_IMAGE_EXTENSIONS", ".png,.jpg,.jpeg,.bmp,.webp")
        self.VALID_EXTS = {ext.strip().lower() for ext in raw.split(",") if ext.strip()}

    @staticmethod
    def create_buffer(pixels: np.ndarray, path: Union[str, Path] = None) -> PixelBuffer:
        if path is None:
            return PixelBuffer(pixels)
        return PixelBuffer(pixels=pixels, path=Path(path))

    @staticmethod
    def _to_rgb(arr: np.ndarray) -> np.ndarray:
        """OpenCV BGR(A)/gray decode → RGB(A)."""
        if arr.ndim == 2:
            return cv2.cvtColor(arr, cv2.COLOR_GRAY2RGB)
        if arr.shape[2] == 4:
            return cv2.cvtColor(arr, cv2.COLOR_BGRA2RGBA)
        if arr.shape[2] == 3:
            return cv2.cvtColor(arr, cv2.COLOR_BGR2RGB)
        raise InvalidChannelCount(f"Unsupported channel count: {arr.shape[2]}")

    def load(self, path: Union[str, Path]) -> PixelBuffer:
        path = Path(path)
        if path.suffix.lower() not in self.VALID_EXTS:
            raise ValueError(f"Unsupported image extension: {path.suffix}")

        arr = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
        if arr is None:
            raise FileNotFoundError(f"Image not found or unreadable: {path}")
        if arr.dtype != np.uint8:
            # 16-bit PNG/TIFF → 8-bit
            arr = (arr / 257).astype(np.uint8)

        buffer = PixelBuffer(pixels=self._to_rgb(arr), path=path)
        logger.info(f"Loaded {path.name}: {buffer.width}x{buffer.height}x{buffer.channels}")
        return buffer

    def decode(self, data: bytes) -> PixelBuffer:
        """Decode an in-memory encoded image (e.g. an upload)."""
        arr = cv2.imdecode(np.frombuffer(data, dtype=np.uint8), cv2.IMREAD_UNCHANGED)
        if arr is None:
            raise ValueError("Could not decode image data")
        if arr.dtype != np.uint8:
            arr = (arr / 257).astype(np.uint8)
        return PixelBuffer(pixels=self._to_rgb(arr))

    @staticmethod
    def save(buffer: PixelBuffer, path: Union[str, Path] = None) -> Path:
        path = Path(path) if path is not None else buffer.path
        if path is None:
            raise ValueError("No output path given and buffer has no source path")
        path.parent.mkdir(parents=True, exist_ok=True)
        pixels = buffer.pixels
        if pixels.shape[2] == 4 and path.suffix.lower() in (".jpg", ".jpeg"):
            # JPEG has no alpha
            pixels = pixels[..., :3]
        PILImage.fromarray(np.ascontiguousarray(pixels)).save(path)
        logger.info(f"Saved {path}")
        return path

    @staticmethod
    def encode_png(pixels: np.ndarray) -> bytes:
        buf = BytesIO()
        PILImage.fromarray(np.ascontiguousarray(pixels)).save(buf, format="PNG")
        return buf.getvalue()
