# renderer/tone_mapping.py
from typing import Optional
import numpy as np

def to_uint8(image: np.ndarray) -> np.ndarray:
    """
    Maps linear [0, 1] colors to 8-bit channels, clamping out-of-range values.
    """
    return (np.clip(image, 0.0, 1.0) * 255.0 + 0.5).astype(np.uint8)

def reinhard_tone_mapping(image: np.ndarray, exposure: float = 1.0,
                          white_point: Optional[float] = None, gamma: float = 2.2) -> np.ndarray:
    """
    Apply extended Reinhard tone mapping to a linear radiance image. Values at
    white_point (after exposure) map to 1; by default that is the brightest
    value in the image. Returns floats in [0, 1].
    """
    scaled = np.maximum(image, 0.0) * exposure
    if white_point is None:
        white_point = max(float(scaled.max()), 1e-6)
    mapped = scaled * (1.0 + scaled / (white_point * white_point)) / (1.0 + scaled)
    return np.clip(mapped ** (1.0 / gamma), 0.0, 1.0)

def auto_exposure_tone_mapping(image: np.ndarray, gamma: float = 2.2,
                               target_midgray: float = 0.18) -> np.ndarray:
    """
    Compute an exposure value based on the average scene luminance and then
    apply Reinhard tone mapping.
    """
    luminance = 0.2126 * image[:, :, 0] + 0.7152 * image[:, :, 1] + 0.0722 * image[:, :, 2]
    avg_lum = luminance.mean() + 1e-5  # avoid division by zero
    exposure = target_midgray / avg_lum
    return reinhard_tone_mapping(image, exposure=exposure, gamma=gamma)
