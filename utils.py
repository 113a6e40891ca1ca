import numpy as np


def vec(list):
    """Handy shorthand to make a double-precision float array."""
    return np.array(list, dtype=np.float64)

def normalize(v):
    """Return a unit vector in the direction of the vector v."""
    return v / np.linalg.norm(v)


def to_rgb8(img):
    """Quantize a float image with components in [0,1] to 8-bit channels.

    Each channel becomes round(255 * clamp(component, 0, 1)).
    """
    return np.round(255.0 * np.clip(img, 0, 1)).astype(np.uint8)
