# renderer/raytracer.py
import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Union
import numpy as np
from camera.camera import Camera
from core.matrix import normalize, point, vector
from core.ray import Ray
from core.stack import MatrixStack
from core.utils import reflect, refract
from geometry.hittable import HitRecord
from materials.light import Light
from materials.textures import SolidTexture
from renderer.settings import RenderSettings

logger = logging.getLogger(__name__)

# Bands per worker, so a slow band does not leave the other threads idle
BANDS_PER_WORKER = 4

class RayTraceSolver:
    """
    Whitted-style recursive ray tracer over a scene graph.

    Every ray and light lives in camera space: the modelview matrix handed to
    ray_trace() sits at the bottom of the stack that the scene graph
    traversal composes node transforms onto.
    """
    def __init__(self, scenegraph, settings: Optional[RenderSettings] = None):
        self.scenegraph = scenegraph
        self.settings = settings if settings is not None else RenderSettings()
        self.camera = Camera(fov=self.settings.fov)
        self.background = np.array(self.settings.background, dtype=np.float64)
        self._white = SolidTexture()

    def ray_trace(self, width: int, height: int,
                  modelview: Union[np.ndarray, MatrixStack]) -> np.ndarray:
        """
        Renders the scene as seen through modelview. Returns a height x width x 3
        array of RGB values in [0, 1], top row first.
        """
        return np.clip(self.ray_trace_hdr(width, height, modelview), 0.0, 1.0)

    def ray_trace_hdr(self, width: int, height: int,
                      modelview: Union[np.ndarray, MatrixStack]) -> np.ndarray:
        """
        Same as ray_trace() but without clamping, for tone mapping.
        """
        pending = self.scenegraph.pending_textures
        if pending:
            raise RuntimeError(f"Scene textures not loaded yet: {', '.join(sorted(pending))}")

        stack = modelview.copy() if isinstance(modelview, MatrixStack) else MatrixStack(modelview)
        lights = self.scenegraph.find_lights(stack)
        image = np.zeros((height, width, 3), dtype=np.float64)

        start = time.perf_counter()
        workers = max(1, self.settings.workers)
        if workers == 1 or height < 2:
            self._render_rows(image, 0, height, width, height, stack, lights)
        else:
            bands = np.array_split(np.arange(height), min(height, workers * BANDS_PER_WORKER))
            with ThreadPoolExecutor(max_workers=workers) as pool:
                futures = [pool.submit(self._render_rows, image, int(band[0]), int(band[-1]) + 1,
                                       width, height, stack.copy(), lights)
                           for band in bands if len(band)]
                for future in futures:
                    future.result()
        logger.info("Ray traced %dx%d with %d light(s) in %.2fs using %d worker(s)",
                    width, height, len(lights), time.perf_counter() - start, workers)

        # rows were produced bottom-up
        return np.flipud(image)

    def _render_rows(self, image: np.ndarray, y_start: int, y_end: int, width: int, height: int,
                     stack: MatrixStack, lights: List[Light]):
        depth = self.settings.max_depth
        for y in range(y_start, y_end):
            for x in range(width):
                ray = self.camera.primary_ray(x, y, width, height)
                image[y, x] = self.ray_cast(ray, stack, depth, lights)

    def ray_cast(self, ray: Ray, stack: MatrixStack, depth: int,
                 lights: Optional[List[Light]] = None) -> np.ndarray:
        """
        Color seen along ray, or the background color if nothing is hit.
        """
        if lights is None:
            lights = self.scenegraph.find_lights(stack)
        hit = self.scenegraph.ray_intersect(ray, stack)
        if hit is None:
            return self.background.copy()
        return self.shade(ray, hit, stack, depth, lights)

    def shade(self, ray: Ray, hit: HitRecord, stack: MatrixStack, depth: int,
              lights: List[Light]) -> np.ndarray:
        """
        Sum over lights of absorption * local + reflection * reflected +
        transparency * refracted. The recursive terms do not depend on the
        light, so each is traced once and weighted by the light count; with
        no lights only emission remains.
        """
        material = hit.material
        color = material.absorption * self.local_illumination(ray, hit, stack, lights)
        if not lights or depth <= 0:
            return color

        secondary = np.zeros(3)
        if material.reflection > 0.0:
            secondary += material.reflection * self._reflect(ray, hit, stack, depth, lights)
        if material.transparency > 0.0:
            secondary += material.transparency * self._refract(ray, hit, stack, depth, lights)
        return color + len(lights) * secondary

    def local_illumination(self, ray: Ray, hit: HitRecord, stack: MatrixStack,
                           lights: List[Light]) -> np.ndarray:
        """
        Phong shading summed over every light, shadows included, modulated by
        the surface texture. Emission is added after the texture.
        """
        material = hit.material
        p = hit.point[0:3]
        n = hit.normal[0:3]
        view = normalize(-ray.direction[0:3])

        local = np.zeros(3)
        for light in lights:
            if light.is_directional():
                to_light = normalize(-light.position[0:3])
            else:
                to_light = normalize(light.position[0:3] - p)

            if not self._in_spot(light, to_light):
                continue
            local += material.ambient * light.ambient

            n_dot_l = n.dot(to_light)
            if n_dot_l <= 0.0 or self._occluded(light, p, to_light, stack):
                continue
            local += material.diffuse * light.diffuse * n_dot_l
            r = reflect(-to_light, n)
            r_dot_v = max(r.dot(view), 0.0)
            local += material.specular * light.specular * (r_dot_v ** material.shininess)

        texture = self.scenegraph.get_texture(hit.texture_name) or self._white
        return local * texture.sample(hit.uv) + material.emission

    @staticmethod
    def _in_spot(light: Light, to_light: np.ndarray) -> bool:
        spot = normalize(light.spot_direction[0:3])
        return spot.dot(-to_light) > np.cos(light.spot_cutoff)

    def _occluded(self, light: Light, p: np.ndarray, to_light: np.ndarray,
                  stack: MatrixStack) -> bool:
        origin = p + self.settings.epsilon * to_light
        if light.is_directional():
            hit = self.scenegraph.ray_intersect(Ray(point(*origin), vector(*to_light)), stack)
            return hit is not None and hit.time > 0.0
        # unnormalized, so t = 1 lands on the light
        direction = light.position[0:3] - origin
        hit = self.scenegraph.ray_intersect(Ray(point(*origin), vector(*direction)), stack)
        return hit is not None and 0.0 < hit.time < 1.0

    def _spawn(self, origin: np.ndarray, direction: np.ndarray) -> Ray:
        return Ray(point(*(origin + self.settings.epsilon * direction)), vector(*direction))

    def _reflect(self, ray: Ray, hit: HitRecord, stack: MatrixStack, depth: int,
                 lights: List[Light]) -> np.ndarray:
        d = normalize(ray.direction[0:3])
        r = reflect(d, hit.normal[0:3])
        return self.ray_cast(self._spawn(hit.point[0:3], r), stack, depth - 1, lights)

    def _refract(self, ray: Ray, hit: HitRecord, stack: MatrixStack, depth: int,
                 lights: List[Light]) -> np.ndarray:
        """
        Follows a ray through a convex transparent solid: bend at the entry
        face, find the exit face, bend again and continue from there.
        """
        index = hit.material.refractive_index
        d = normalize(ray.direction[0:3])
        p = hit.point[0:3]
        n = hit.normal[0:3]

        if hit.incoming:
            inside = refract(d, n, 1.0 / index)
            if inside is None:
                inside = reflect(d, n)
            inner = self._spawn(p, inside)
            exit_hit = self.scenegraph.ray_intersect(inner, stack)
            if exit_hit is None:
                return self.ray_cast(inner, stack, depth - 1, lights)
            if exit_hit.incoming:
                # something else sits inside the solid
                return self.shade(inner, exit_hit, stack, depth - 1, lights)
            d, p, n = inside, exit_hit.point[0:3], exit_hit.normal[0:3]

        # leaving the solid: the outward normal faces away from the ray
        out = refract(d, -n, index)
        if out is None:
            out = reflect(d, -n)
        return self.ray_cast(self._spawn(p, out), stack, depth - 1, lights)
