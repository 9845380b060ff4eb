# main.py
import argparse
import logging
import math
import os
import random
import sys

import pygame

from core.vector import Color, Point3, Vector3
from core.sampling import random_double, random_vector
from camera.camera import Camera
from geometry.scene import Scene
from geometry.sphere import Sphere
from materials.lambertian import Lambertian
from materials.metal import Metal
from materials.dielectric import Dielectric
from renderer.image_io import save_png
from renderer.raytracer import MAX_BOUNCES, Renderer

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

QUALITY_LEVELS = {
    "preview": {"samples": 4, "bounces": 8},
    "balanced": {"samples": 50, "bounces": 25},
    "final": {"samples": 500, "bounces": MAX_BOUNCES},
}

logger = logging.getLogger("main")


def create_world(rng: random.Random) -> Scene:
    """
    Build the random spheres scene: a huge ground sphere, a grid of small
    randomly placed spheres and three large feature spheres.
    """
    world = Scene()
    world.add(Sphere(Point3(0, -1000, 0), 1000, Lambertian(Color(0.2, 0.2, 0.2))))

    clearing = Point3(4, 0.2, 0)
    for a in range(-11, 12):
        for b in range(-11, 12):
            center = Point3(a + 0.9 * rng.random(), 0.2, b + 0.9 * rng.random())
            if (center - clearing).length() <= 0.9:
                continue
            selector = rng.randrange(5)
            if selector < 3:
                material = Lambertian(random_vector(rng))
            elif selector < 4:
                material = Metal(random_vector(rng, 0.5, 1.0), fuzz=random_double(rng, 0.0, 0.3))
            else:
                material = Dielectric(random_double(rng, 1.1, 1.7),
                                      albedo=random_vector(rng),
                                      fuzz=random_double(rng, 0.0, 0.5))
            world.add(Sphere(center, 0.2, material))

    world.add(Sphere(Point3(0, 1, 0), 1.0, Dielectric(1.5, albedo=random_vector(rng))))
    world.add(Sphere(Point3(-4, 1, 0), 1.0, Lambertian(Color(0.4, 0.2, 0.1))))
    world.add(Sphere(Point3(4, 1, 0), 1.0, Metal(Color(0.7, 0.6, 0.5), fuzz=0.0)))
    return world


def create_camera(aspect_ratio: float) -> Camera:
    return Camera(
        look_from=Point3(13, 2, 3),
        look_at=Point3(0, 0, 0),
        vup=Vector3(0, 1, 0),
        vfov=math.radians(20),
        aspect_ratio=aspect_ratio,
        aperture=0.1,
        focus_dist=10.0
    )


def show_preview(rgba, title: str = "spherecast"):
    """Display the finished frame until the window is closed or Esc is pressed."""
    height, width = rgba.shape[0], rgba.shape[1]
    pygame.init()
    try:
        screen = pygame.display.set_mode((width, height))
        pygame.display.set_caption(title)
        # surfarray is indexed [x, y]
        surface = pygame.surfarray.make_surface(rgba[:, :, :3].swapaxes(0, 1))
        screen.blit(surface, (0, 0))
        pygame.display.flip()
        clock = pygame.time.Clock()
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    running = False
            clock.tick(30)
    finally:
        pygame.quit()


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Render the random spheres scene with a CPU path tracer.")
    parser.add_argument("--width", type=int, default=400, help="Image width in pixels")
    parser.add_argument("--aspect-ratio", type=float, default=3.0 / 2.0, help="Image width / height")
    parser.add_argument("--quality", choices=sorted(QUALITY_LEVELS), default="balanced",
                        help="Samples and bounce preset")
    parser.add_argument("--samples", type=int, default=None, help="Samples per pixel (overrides --quality)")
    parser.add_argument("--depth", type=int, default=None, help="Max bounces (overrides --quality)")
    parser.add_argument("--seed", type=int, default=None, help="Seed for scene and sampling")
    parser.add_argument("--workers", type=int, default=int(os.getenv("SPHERECAST_WORKERS", "1")),
                        help="Worker processes")
    parser.add_argument("--output", default="image.png", help="PNG file to write")
    parser.add_argument("--preview", action="store_true", help="Show the image in a window when done")
    parser.add_argument("--log-level", default=os.getenv("LOG_LEVEL", "INFO"),
                        help="DEBUG, INFO, WARNING, ERROR")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO), format=LOG_FORMAT)

    quality = QUALITY_LEVELS[args.quality]
    samples = args.samples if args.samples is not None else quality["samples"]
    depth = args.depth if args.depth is not None else quality["bounces"]
    seed = args.seed if args.seed is not None else random.randrange(2 ** 32)

    try:
        if not args.aspect_ratio > 0:
            raise ValueError(f"aspect_ratio must be positive, got {args.aspect_ratio}")
        height = int(args.width / args.aspect_ratio)
        world = create_world(random.Random(seed))
        camera = create_camera(args.aspect_ratio)
        renderer = Renderer(args.width, height, samples_per_pixel=samples, max_depth=depth,
                            seed=seed, workers=args.workers)
    except ValueError as e:
        logger.error("Invalid render settings: %s", e)
        return 2

    print("\n=== Rendering ===")
    print(f"Resolution: {args.width}x{height}")
    print(f"Quality settings: {args.quality}")
    print(f"Samples per pixel: {samples}")
    print(f"Max bounces: {depth}")
    print(f"Spheres: {len(world)}")
    print(f"Seed: {seed}")

    rgba = renderer.render_rgba(camera, world)

    try:
        save_png(rgba, args.output)
    except OSError as e:
        logger.error("Could not write %s: %s", args.output, e)
        return 1
    print(f"Saved {args.output}")

    if args.preview:
        show_preview(rgba, title=args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
