# camera/camera.py
import math
from core.vector import Vector3
from core.ray import Ray
from core.sampling import random_in_unit_disk

class Camera:
    """
    Thin-lens camera. The basis and viewport are fixed at construction.

    Args:
        look_from: Eye position
        look_at: Point the camera aims at
        vup: World up direction, must not be parallel to the view direction
        vfov: Vertical field of view in radians
        aspect_ratio: Viewport width / height
        aperture: Lens diameter, 0 for a pinhole camera
        focus_dist: Distance to the plane in perfect focus
    """
    def __init__(self, look_from: Vector3, look_at: Vector3, vup: Vector3,
                 vfov: float, aspect_ratio: float, aperture: float = 0.0,
                 focus_dist: float = 10.0):
        if not 0.0 < vfov < math.pi:
            raise ValueError(f"vfov must be in (0, pi) radians, got {vfov}")
        if not aspect_ratio > 0:
            raise ValueError(f"aspect_ratio must be positive, got {aspect_ratio}")
        if not aperture >= 0:
            raise ValueError(f"aperture must be non-negative, got {aperture}")
        if not focus_dist > 0:
            raise ValueError(f"focus_dist must be positive, got {focus_dist}")

        view = look_from - look_at
        if view.near_zero():
            raise ValueError("look_from and look_at must be distinct points")
        side = vup.cross(view)
        if side.near_zero():
            raise ValueError("vup must not be parallel to the viewing direction")

        self.origin = look_from
        self.vfov = vfov
        self.aspect_ratio = aspect_ratio
        self.aperture = aperture
        self.focus_dist = focus_dist
        self.lens_radius = aperture / 2.0

        # Orthonormal basis: w points backwards, u right, v up.
        self.w = view.normalize()
        self.u = side.normalize()
        self.v = self.w.cross(self.u)

        viewport_height = 2.0 * math.tan(vfov / 2)
        viewport_width = aspect_ratio * viewport_height

        # Scale by focus distance
        self.horizontal = self.u * viewport_width * focus_dist
        self.vertical = self.v * viewport_height * focus_dist

        self.lower_left_corner = (self.origin -
                                  self.horizontal * 0.5 -
                                  self.vertical * 0.5 -
                                  self.w * focus_dist)

    def get_ray(self, s: float, t: float, rng) -> Ray:
        """Generates a ray through viewport coordinates (s, t) in [0, 1]."""
        if self.lens_radius <= 0:
            direction = (self.lower_left_corner +
                         self.horizontal * s +
                         self.vertical * t -
                         self.origin)
            return Ray(self.origin, direction)

        # Generate random point on lens
        rd = random_in_unit_disk(rng) * self.lens_radius
        offset = self.u * rd.x + self.v * rd.y

        ray_origin = self.origin + offset
        ray_direction = (self.lower_left_corner +
                         self.horizontal * s +
                         self.vertical * t -
                         ray_origin)

        return Ray(ray_origin, ray_direction)
