# materials/metal.py
from typing import Optional, Tuple
from core.ray import Ray
from core.vector import Vector3
from geometry.hittable import HitRecord
from materials.material import Material, check_fuzz, fuzzed

class Metal(Material):
    """
    Metal material with reflective properties. fuzz roughens the reflection.
    """
    def __init__(self, albedo: Vector3, fuzz: float = 0.0):
        self.albedo = albedo
        self.fuzz = check_fuzz(fuzz)

    def scatter(self, ray_in: Ray, rec: HitRecord, rng) -> Optional[Tuple[Ray, Vector3]]:
        reflected = ray_in.direction.normalize().reflect(rec.normal)
        scattered = Ray(rec.p, fuzzed(reflected, rec.normal, self.fuzz, rng))

        if scattered.direction.dot(rec.normal) > 0:
            return scattered, self.albedo

        return None  # Fuzz pushed the ray below the surface

    def __repr__(self) -> str:
        return f"Metal({self.albedo!r}, fuzz={self.fuzz})"
