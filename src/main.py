# main.py
"""
Ray trace a JSON scene to an image.

Example:
    python src/main.py scenes/spheres.json -o spheres.png --width 320 --height 240
"""
import argparse
import logging
import math
import sys
from typing import List, Optional
import numpy as np
from camera.camera import Camera
from renderer.image_output import save_image, show_image
from renderer.raytracer import RayTraceSolver
from renderer.settings import QUALITY_LEVELS, RenderSettings
from renderer.tone_mapping import auto_exposure_tone_mapping, reinhard_tone_mapping
from scenegraph.importer import load_scene

logger = logging.getLogger("raytracer")

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

def setup_logging(level: str = "INFO"):
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))
    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

class Application:
    """
    Holds one rendering session: settings, camera, the loaded scene graph and
    the number of frames rendered so far.
    """
    def __init__(self, settings: RenderSettings, camera: Camera):
        self.settings = settings
        self.camera = camera
        self.scenegraph = None
        self.frame_count = 0

    def load(self, scene_path: str):
        logger.info("Loading scene %s", scene_path)
        self.scenegraph = load_scene(scene_path, max_workers=self.settings.workers)

    def render(self, hdr: bool = False) -> np.ndarray:
        """
        Renders one frame. With hdr the image is left unclamped so a tone
        mapper can compress values above 1.
        """
        if self.scenegraph is None:
            raise RuntimeError("No scene loaded")
        logger.info("Rendering %dx%d, bounce budget %d",
                    self.settings.width, self.settings.height, self.settings.max_depth)
        solver = RayTraceSolver(self.scenegraph, self.settings)
        trace = solver.ray_trace_hdr if hdr else solver.ray_trace
        image = trace(self.settings.width, self.settings.height, self.camera.view_matrix())
        self.frame_count += 1
        return image

def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Ray trace a JSON scene graph.")
    parser.add_argument("scene", help="Path to the scene description (JSON)")
    parser.add_argument("-o", "--output", default="render.png",
                        help="Output image path (default: render.png)")
    parser.add_argument("--width", type=int, default=400, help="Image width in pixels")
    parser.add_argument("--height", type=int, default=400, help="Image height in pixels")
    parser.add_argument("--quality", choices=sorted(QUALITY_LEVELS),
                        help="Quality preset; scales the resolution and sets the bounce budget")
    parser.add_argument("--depth", type=int, help="Bounce budget (overrides the preset)")
    parser.add_argument("--camera", type=float, nargs=6, metavar=("EX", "EY", "EZ", "TX", "TY", "TZ"),
                        default=[0.0, 0.0, 10.0, 0.0, 0.0, 0.0],
                        help="Eye position followed by the point looked at")
    parser.add_argument("--fov", type=float, default=90.0, help="Vertical field of view in degrees")
    parser.add_argument("--background", type=float, nargs=3, default=[0.0, 0.0, 0.0],
                        metavar=("R", "G", "B"), help="Background color in [0, 1]")
    parser.add_argument("--workers", type=int, default=1, help="Render threads")
    parser.add_argument("--tone-map", choices=["none", "reinhard", "auto"], default="none",
                        help="Tone mapping applied before saving")
    parser.add_argument("--show", action="store_true", help="Display the result in a window")
    parser.add_argument("--log-level", default="INFO", help="Logging level (default: INFO)")
    return parser.parse_args(argv)

def build_settings(args: argparse.Namespace) -> RenderSettings:
    overrides = {
        "fov": math.radians(args.fov),
        "background": tuple(args.background),
        "workers": args.workers,
    }
    if args.depth is not None:
        overrides["max_depth"] = args.depth
    if args.quality:
        return RenderSettings.for_quality(args.quality, args.width, args.height, **overrides)
    return RenderSettings(width=args.width, height=args.height, **overrides)

def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_level)

    settings = build_settings(args)
    camera = Camera(eye=args.camera[0:3], target=args.camera[3:6], fov=settings.fov)
    app = Application(settings, camera)
    try:
        app.load(args.scene)
        image = app.render(hdr=args.tone_map != "none")
        if args.tone_map == "reinhard":
            image = reinhard_tone_mapping(image)
        elif args.tone_map == "auto":
            image = auto_exposure_tone_mapping(image)

        save_image(image, args.output)
        if args.show:
            show_image(image, title=f"Ray Tracer - {args.scene}")
    except (OSError, ValueError, RuntimeError, ImportError) as e:
        logger.error("%s", e)
        return 1
    return 0

if __name__ == "__main__":
    sys.exit(main())
