# materials/texture_loader.py
import logging
import os
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, Mapping, Optional
import numpy as np
from PIL import Image, UnidentifiedImageError
from materials.textures import ImageTexture

logger = logging.getLogger(__name__)

def load_texture(image_path: str, name: str = "") -> ImageTexture:
    """
    Load an image file as a texture, with automatic format conversion.

    Args:
        image_path: Path to the image file
        name: Registry name, used for diagnostics

    Returns:
        ImageTexture object

    Raises:
        FileNotFoundError: If the image file doesn't exist
        ValueError: If the image format is unsupported
    """
    if not os.path.exists(image_path):
        raise FileNotFoundError(f"Texture file not found: {image_path}")

    try:
        with Image.open(image_path) as img:
            if img.mode != 'RGB':
                img = img.convert('RGB')
            data = np.asarray(img, dtype=np.float64) / 255.0
    except (UnidentifiedImageError, OSError) as e:
        raise ValueError(f"Error loading texture {image_path}: {e}") from e

    logger.debug("Loaded texture %s from %s (%dx%d)", name or image_path, image_path,
                 data.shape[1], data.shape[0])
    return ImageTexture(data, name)

def load_textures(paths: Mapping[str, str], max_workers: Optional[int] = None) -> Dict[str, ImageTexture]:
    """
    Decode every name -> path entry concurrently and return only once all of
    them are done. The first failure is re-raised after the pool shuts down.
    """
    if not paths:
        return {}
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        futures = {name: pool.submit(load_texture, path, name) for name, path in paths.items()}
    return {name: future.result() for name, future in futures.items()}
