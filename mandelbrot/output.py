from pathlib import Path

import numpy as np
from PIL import Image


class ImageWriteError(OSError):
    """Raised when the rendered image cannot be written to disk."""


def save_image(img: np.ndarray, path) -> Path:
    """
    Write an (H, W, 3) uint8 array as an RGB image.

    The format follows the file suffix (PNG for the default output). Parent
    directories are created as needed.
    """
    out_path = Path(path)
    try:
        out_path.parent.mkdir(parents=True, exist_ok=True)
        Image.fromarray(np.ascontiguousarray(img, dtype=np.uint8)).save(out_path)
    except (OSError, ValueError) as e:
        raise ImageWriteError(f"Failed to save generated image to {out_path}: {e}") from e
    return out_path
