# renderer/raytracer.py
import logging
import math
import multiprocessing
import random
import time
from typing import Iterable, List, Optional, Tuple

import numpy as np

from core.ray import Ray
from core.vector import Color
from renderer.tone_mapping import to_rgba8

logger = logging.getLogger(__name__)

# Smallest accepted hit distance; keeps a bounced ray from re-hitting the
# surface it just left.
T_MIN = 0.001
INFINITY = math.inf
MAX_BOUNCES = 50

WHITE = Color(1.0, 1.0, 1.0)
SKY_BLUE = Color(0.5, 0.7, 1.0)


def background_color(ray: Ray) -> Color:
    """
    Vertical sky gradient: white looking straight down, sky blue straight up.
    """
    unit_direction = ray.direction.normalize()
    t = 0.5 * (unit_direction.y + 1.0)
    return WHITE * (1.0 - t) + SKY_BLUE * t


def ray_color(ray: Ray, world, depth: int, rng) -> Color:
    """
    Trace a ray through the world, returning the radiance it carries back.

    Args:
        ray: Ray to trace
        world: Any Hittable, usually a Scene
        depth: Remaining bounce budget; 0 returns black
        rng: Random source handed to the materials
    """
    if depth <= 0:
        return Color(0.0, 0.0, 0.0)

    rec = world.hit(ray, T_MIN, INFINITY)
    if rec is None:
        return background_color(ray)

    result = rec.material.scatter(ray, rec, rng)
    if result is None:
        return Color(0.0, 0.0, 0.0)

    scattered, attenuation = result
    return attenuation * ray_color(scattered, world, depth - 1, rng)


def scanline_rng(seed: int, j: int) -> random.Random:
    """Random stream for one scanline, independent of which process renders it."""
    return random.Random(f"{seed}:{j}")


def render_scanline(camera, world, j: int, width: int, height: int,
                    samples_per_pixel: int, max_depth: int, seed: int) -> List[Tuple[float, float, float]]:
    """
    Render the scanline at vertical image coordinate j (0 is the bottom row).
    Returns one averaged linear color per pixel, left to right.
    """
    rng = scanline_rng(seed, j)
    scale = 1.0 / samples_per_pixel
    row = []
    for i in range(width):
        pixel = Color(0.0, 0.0, 0.0)
        for _ in range(samples_per_pixel):
            s = (i + rng.random()) / (width - 1)
            t = (j + rng.random()) / (height - 1)
            pixel = pixel + ray_color(camera.get_ray(s, t, rng), world, max_depth, rng)
        row.append(tuple(pixel * scale))
    return row


# Per-process state for pool workers, filled once by the initializer.
_worker_state = {}

def _init_worker(camera, world, settings):
    _worker_state["camera"] = camera
    _worker_state["world"] = world
    _worker_state["settings"] = settings

def _render_scanline_task(j: int):
    width, height, samples_per_pixel, max_depth, seed = _worker_state["settings"]
    row = render_scanline(_worker_state["camera"], _worker_state["world"], j,
                          width, height, samples_per_pixel, max_depth, seed)
    return j, row


class Renderer:
    """
    CPU path tracer. Each pixel is the average of samples_per_pixel jittered
    camera rays traced up to max_depth bounces.

    With workers > 1 scanlines are spread over a process pool. Every scanline
    draws from its own seeded stream, so the image depends only on the seed.
    """
    def __init__(self, width: int, height: int, samples_per_pixel: int = 100,
                 max_depth: int = MAX_BOUNCES, seed: Optional[int] = None, workers: int = 1):
        if width < 2 or height < 2:
            raise ValueError(f"Image must be at least 2x2 pixels, got {width}x{height}")
        if samples_per_pixel < 1:
            raise ValueError(f"samples_per_pixel must be at least 1, got {samples_per_pixel}")
        if max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {max_depth}")
        if workers < 1:
            raise ValueError(f"workers must be at least 1, got {workers}")

        self.width = width
        self.height = height
        self.samples_per_pixel = samples_per_pixel
        self.max_depth = max_depth
        self.workers = workers
        if seed is None:
            seed = random.randrange(2 ** 32)
            logger.info("No seed given, using %d", seed)
        self.seed = seed

    def render(self, camera, world) -> np.ndarray:
        """
        Render the world and return a (height, width, 3) float array of
        linear colors, top scanline first.
        """
        logger.info("Rendering %dx%d, %d spp, depth %d, %d worker(s), seed %d",
                    self.width, self.height, self.samples_per_pixel, self.max_depth,
                    self.workers, self.seed)
        start = time.perf_counter()
        image = np.zeros((self.height, self.width, 3), dtype=np.float64)
        scanlines = range(self.height - 1, -1, -1)

        if self.workers == 1:
            self._collect(image, ((j, render_scanline(camera, world, j, self.width, self.height,
                                                      self.samples_per_pixel, self.max_depth, self.seed))
                                  for j in scanlines))
        else:
            settings = (self.width, self.height, self.samples_per_pixel, self.max_depth, self.seed)
            chunksize = max(1, self.height // (self.workers * 4))
            # Forking after numba has started its thread pool deadlocks at exit.
            context = multiprocessing.get_context("spawn")
            with context.Pool(processes=self.workers, initializer=_init_worker,
                              initargs=(camera, world, settings)) as pool:
                self._collect(image, pool.imap_unordered(_render_scanline_task, scanlines, chunksize))

        elapsed = time.perf_counter() - start
        rays = self.width * self.height * self.samples_per_pixel
        logger.info("Rendered in %.2f s (%.0f camera rays/s)", elapsed, rays / max(elapsed, 1e-9))
        return image

    def _collect(self, image: np.ndarray, results: Iterable[Tuple[int, list]]):
        done = 0
        for j, row in results:
            image[self.height - 1 - j] = row
            done += 1
            logger.debug("Scanline %d finished (%d/%d)", j, done, self.height)

    def render_rgba(self, camera, world) -> np.ndarray:
        """Render and gamma-correct into a (height, width, 4) uint8 array."""
        return to_rgba8(self.render(camera, world))

    def render_bytes(self, camera, world) -> bytes:
        """Render into row-major, top-to-bottom RGBA byte quadruples."""
        return self.render_rgba(camera, world).tobytes()

    def __repr__(self) -> str:
        return (f"Renderer({self.width}x{self.height}, spp={self.samples_per_pixel}, "
                f"depth={self.max_depth}, workers={self.workers}, seed={self.seed})")
