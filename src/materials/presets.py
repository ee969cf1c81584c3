# materials/presets.py
from materials.material import Material

class ColorPresets:
    """Common color presets for materials."""

    # Warm colors
    RED = (0.9, 0.2, 0.2)
    ORANGE = (0.9, 0.6, 0.1)
    YELLOW = (0.9, 0.9, 0.1)

    # Cool colors
    BLUE = (0.2, 0.3, 0.9)
    GREEN = (0.2, 0.8, 0.2)
    PURPLE = (0.6, 0.2, 0.8)

    # Neutral colors
    WHITE = (0.9, 0.9, 0.9)
    GRAY = (0.5, 0.5, 0.5)
    BLACK = (0.1, 0.1, 0.1)

class MaterialPresets:
    """Predefined Phong materials."""

    @staticmethod
    def matte(color=ColorPresets.GRAY) -> Material:
        """Diffuse only, with a dim ambient term in the same hue."""
        ambient = tuple(0.2 * c for c in color)
        return Material(ambient=ambient, diffuse=color)

    @staticmethod
    def plastic(color=ColorPresets.RED, shininess: float = 32.0) -> Material:
        ambient = tuple(0.2 * c for c in color)
        return Material(ambient=ambient, diffuse=color, specular=(0.5, 0.5, 0.5),
                        shininess=shininess)

    @staticmethod
    def mirror(tint=(0.05, 0.05, 0.05), reflection: float = 0.9) -> Material:
        return Material(ambient=tint, diffuse=tint, specular=(1.0, 1.0, 1.0),
                        shininess=100.0, absorption=1.0 - reflection,
                        reflection=reflection)

    @staticmethod
    def glass(refractive_index: float = 1.52) -> Material:
        # Common glass; water is 1.33, diamond 2.42
        return Material(ambient=(0.0, 0.0, 0.0), diffuse=(0.05, 0.05, 0.05),
                        specular=(1.0, 1.0, 1.0), shininess=100.0,
                        absorption=0.1, reflection=0.1, transparency=0.8,
                        refractive_index=refractive_index)
