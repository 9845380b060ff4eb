# materials/lambertian.py
from typing import Tuple
from core.ray import Ray
from core.vector import Vector3
from core.sampling import random_in_hemisphere
from geometry.hittable import HitRecord
from materials.material import Material

class Lambertian(Material):
    """
    Diffuse material. Scatters into the hemisphere around the surface normal
    and never absorbs.
    """

    def __init__(self, albedo: Vector3):
        self.albedo = albedo

    def scatter(self, ray_in: Ray, rec: HitRecord, rng) -> Tuple[Ray, Vector3]:
        scatter_direction = random_in_hemisphere(rng, rec.normal)

        # If scatter_direction is degenerate (very small), just use the normal.
        if scatter_direction.near_zero():
            scatter_direction = rec.normal

        return Ray(rec.p, scatter_direction), self.albedo

    def __repr__(self) -> str:
        return f"Lambertian({self.albedo!r})"
