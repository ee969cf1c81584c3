# materials/textures.py
import numpy as np
from numba import njit
from core.uv import UV

WHITE = (1.0, 1.0, 1.0)

class Texture:
    """Base class for all textures."""
    def sample(self, uv: UV) -> np.ndarray:
        """Sample the texture at given UV coordinates."""
        raise NotImplementedError("sample() must be implemented by texture subclasses.")

class SolidTexture(Texture):
    """A solid color texture. Untextured surfaces sample white."""
    def __init__(self, color=WHITE):
        self.color = np.array(color[0:3], dtype=np.float64)

    def sample(self, uv: UV) -> np.ndarray:
        return self.color

@njit(cache=True)
def _bilinear(data, u, v):
    height, width = data.shape[0], data.shape[1]
    # Repeat outside [0, 1]; row 0 of the image is the top (v = 1)
    u = u - np.floor(u)
    v = 1.0 - (v - np.floor(v))

    x = u * width
    y = v * height
    x1 = int(np.floor(x)) % width
    y1 = int(np.floor(y)) % height
    x2 = min(x1 + 1, width - 1)
    y2 = min(y1 + 1, height - 1)
    fx = x - np.floor(x)
    fy = y - np.floor(y)

    out = np.empty(3)
    for c in range(3):
        left = data[y1, x1, c] * (1.0 - fy) + data[y2, x1, c] * fy
        right = data[y1, x2, c] * (1.0 - fy) + data[y2, x2, c] * fy
        out[c] = left * (1.0 - fx) + right * fx
    return out

class ImageTexture(Texture):
    """
    An image held as an H x W x 3 float array in [0, 1], sampled bilinearly
    with repeat wrapping.
    """
    def __init__(self, data: np.ndarray, name: str = ""):
        data = np.asarray(data, dtype=np.float64)
        if data.ndim != 3 or data.shape[2] < 3:
            raise ValueError(f"Texture data must be H x W x 3, got shape {data.shape}")
        self.data = np.ascontiguousarray(data[:, :, 0:3])
        self.height, self.width = self.data.shape[0], self.data.shape[1]
        self.name = name

    @classmethod
    def from_array(cls, array: np.ndarray, name: str = "") -> "ImageTexture":
        """Builds a texture from 8-bit or already normalized pixel data."""
        array = np.asarray(array)
        if array.dtype == np.uint8:
            array = array / 255.0
        return cls(array, name)

    def sample(self, uv: UV) -> np.ndarray:
        return _bilinear(self.data, float(uv.u), float(uv.v))

    def __repr__(self) -> str:
        return f"ImageTexture({self.name!r}, {self.width}x{self.height})"
