# materials/dielectric.py
import math
from typing import Tuple
from core.ray import Ray
from core.vector import Color, Vector3
from geometry.hittable import HitRecord
from materials.material import Material, check_fuzz, fuzzed

class Dielectric(Material):
    """
    Refractive material (glass, water...). Chooses between reflection and
    refraction with Schlick's approximation and tints by albedo.
    """
    def __init__(self, ref_idx: float, albedo: Vector3 = None, fuzz: float = 0.0):
        if not ref_idx > 0:
            raise ValueError(f"Refraction index must be positive, got {ref_idx}")
        self.ref_idx = ref_idx
        self.albedo = albedo if albedo is not None else Color(1.0, 1.0, 1.0)
        self.fuzz = check_fuzz(fuzz)

    def scatter(self, ray_in: Ray, rec: HitRecord, rng) -> Tuple[Ray, Vector3]:
        # Determine if we're entering or exiting the material
        ni_over_nt = 1.0 / self.ref_idx if rec.front_face else self.ref_idx

        unit_direction = ray_in.direction.normalize()
        cos_theta = min(-unit_direction.dot(rec.normal), 1.0)
        sin_theta = math.sqrt(max(0.0, 1.0 - cos_theta * cos_theta))

        cannot_refract = ni_over_nt * sin_theta > 1.0
        # Matching indices mean there is no interface to reflect off.
        if cannot_refract or (ni_over_nt != 1.0 and schlick(cos_theta, ni_over_nt) > rng.random()):
            direction = unit_direction.reflect(rec.normal)
        else:
            direction = unit_direction.refract(rec.normal, ni_over_nt)

        return Ray(rec.p, fuzzed(direction, rec.normal, self.fuzz, rng)), self.albedo

    def __repr__(self) -> str:
        return f"Dielectric({self.ref_idx}, albedo={self.albedo!r}, fuzz={self.fuzz})"

def schlick(cos_theta: float, ref_idx: float) -> float:
    """
    Schlick's approximation of the Fresnel reflectance.
    """
    r0 = (1.0 - ref_idx) / (1.0 + ref_idx)
    r0 = r0 * r0
    return r0 + (1.0 - r0) * math.pow((1.0 - cos_theta), 5)
