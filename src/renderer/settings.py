# renderer/settings.py
import math
from dataclasses import dataclass, replace
from typing import Tuple
from core.utils import EPSILON

@dataclass(frozen=True)
class RenderSettings:
    width: int = 400
    height: int = 400
    max_depth: int = 5                  # bounce budget shared by reflection and refraction
    background: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    epsilon: float = EPSILON            # secondary ray origin offset
    fov: float = math.pi / 2
    workers: int = 1                    # render threads; rows are split into bands

    @classmethod
    def for_quality(cls, name: str, width: int, height: int, **overrides) -> "RenderSettings":
        """Scales the requested resolution and picks the depth of a quality preset."""
        if name not in QUALITY_LEVELS:
            raise ValueError(f"Unknown quality level {name!r}; choose from {sorted(QUALITY_LEVELS)}")
        quality = QUALITY_LEVELS[name]
        settings = cls(width=max(1, int(width * quality["scale"])),
                       height=max(1, int(height * quality["scale"])),
                       max_depth=quality["bounces"])
        return replace(settings, **overrides)

QUALITY_LEVELS = {
    "interactive": {"bounces": 2, "scale": 0.5},
    "balanced": {"bounces": 4, "scale": 0.75},
    "high_quality": {"bounces": 6, "scale": 1.0},
}
