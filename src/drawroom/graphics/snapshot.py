"""Save rendered wheel frames as images."""

import logging
from io import BytesIO
from pathlib import Path

import numpy as np
from PIL import Image

from drawroom.graphics.primitives import Buffer, render_frame
from drawroom.wheel.renderer import WheelGeometry

logger = logging.getLogger(__name__)


def buffer_to_image(buffer: Buffer) -> Image.Image:
    """Wrap an RGB buffer in a PIL image."""
    return Image.fromarray(np.ascontiguousarray(buffer, dtype=np.uint8))


def save_frame(buffer: Buffer, path: str | Path) -> Path:
    """Write a buffer to disk; format follows the file extension."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    buffer_to_image(buffer).save(path)
    logger.info(f"Frame saved: {path}")
    return path


def frame_png_bytes(geometry: WheelGeometry) -> bytes:
    """Render geometry and return PNG bytes."""
    output = BytesIO()
    buffer_to_image(render_frame(geometry)).save(output, format="PNG")
    return output.getvalue()
