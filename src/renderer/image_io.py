# renderer/image_io.py
import os
import numpy as np
from PIL import Image

def save_png(rgba: np.ndarray, path: str) -> None:
    """
    Write an RGBA8 frame to a PNG file.

    Args:
        rgba: (height, width, 4) uint8 array, top scanline first
        path: Destination file path

    Raises:
        ValueError: If the array does not hold RGBA8 pixels
    """
    rgba = np.asarray(rgba)
    if rgba.dtype != np.uint8 or rgba.ndim != 3 or rgba.shape[2] != 4:
        raise ValueError(f"Expected a (height, width, 4) uint8 array, got {rgba.dtype} {rgba.shape}")
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    Image.fromarray(np.ascontiguousarray(rgba)).save(path, format="PNG")

def load_png(path: str) -> np.ndarray:
    """
    Read a PNG back as a (height, width, 4) uint8 array.

    Raises:
        FileNotFoundError: If the image file doesn't exist
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Image file not found: {path}")
    with Image.open(path) as img:
        if img.mode != 'RGBA':
            img = img.convert('RGBA')
        return np.array(img)
