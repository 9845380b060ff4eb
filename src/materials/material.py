# materials/material.py
from typing import Optional, Tuple
from core.ray import Ray
from core.vector import Vector3
from core.sampling import random_in_hemisphere
from geometry.hittable import HitRecord

class Material:
    """
    Abstract material class. Subclasses must implement scatter().
    Materials only hold fixed parameters, so one instance can be shared by
    many spheres and read by many rays at once.
    """
    def scatter(self, ray_in: Ray, rec: HitRecord, rng) -> Optional[Tuple[Ray, Vector3]]:
        """
        Computes the scattered ray and attenuation.
        Returns a tuple (scattered_ray, attenuation) or None if the ray is absorbed.
        """
        raise NotImplementedError("scatter() must be implemented by subclasses.")

def fuzzed(direction: Vector3, normal: Vector3, fuzz: float, rng) -> Vector3:
    """
    Perturbs direction by fuzz times a random offset in the normal's hemisphere.
    """
    if fuzz <= 0.0:
        return direction
    return direction + random_in_hemisphere(rng, normal) * fuzz

def check_fuzz(fuzz: float) -> float:
    if not fuzz >= 0.0:
        raise ValueError(f"fuzz must be non-negative, got {fuzz}")
    return float(fuzz)
