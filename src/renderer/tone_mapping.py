# renderer/tone_mapping.py
import math
import numpy as np
from numba import njit, prange

@njit
def clamp(value, low, high):
    if value < low:
        return low
    if value > high:
        return high
    return value

@njit(parallel=True)
def gamma_rgba_kernel(linear_image, output_image):
    height = linear_image.shape[0]
    width = linear_image.shape[1]
    for y in prange(height):
        for x in range(width):
            for c in range(3):
                # Gamma 2 approximation, then scale into [0, 255].
                value = math.sqrt(max(linear_image[y, x, c], 0.0))
                output_image[y, x, c] = int(clamp(value, 0.0, 0.999) * 256.0)
            output_image[y, x, 3] = 255

def to_rgba8(linear_image) -> np.ndarray:
    """
    Convert an averaged linear radiance image to 8-bit RGBA.

    Args:
        linear_image: (height, width, 3) array of linear color values

    Returns:
        (height, width, 4) uint8 array with alpha fixed at 255.
    """
    linear_image = np.ascontiguousarray(linear_image, dtype=np.float64)
    if linear_image.ndim != 3 or linear_image.shape[2] != 3:
        raise ValueError(f"Expected a (height, width, 3) image, got shape {linear_image.shape}")
    output = np.empty((linear_image.shape[0], linear_image.shape[1], 4), dtype=np.uint8)
    gamma_rgba_kernel(linear_image, output)
    return output
