# core/sampling.py
from core.vector import Vector3

# Every generator takes the random source explicitly (a random.Random or
# anything exposing random() and uniform()), so renders can be reproduced and
# each worker can own its stream.

def random_double(rng, low: float = 0.0, high: float = 1.0) -> float:
    """
    Returns a float uniformly distributed in [low, high).
    """
    return low + (high - low) * rng.random()

def random_vector(rng, low: float = 0.0, high: float = 1.0) -> Vector3:
    return Vector3(random_double(rng, low, high),
                   random_double(rng, low, high),
                   random_double(rng, low, high))

def random_in_unit_sphere(rng) -> Vector3:
    """
    Returns a random point inside the unit sphere (rejection sampling).
    """
    while True:
        p = Vector3(rng.uniform(-1, 1),
                    rng.uniform(-1, 1),
                    rng.uniform(-1, 1))
        if p.length_squared() < 1.0:
            return p

def random_in_unit_disk(rng) -> Vector3:
    """
    Returns a random point inside the unit disk in the z=0 plane.
    """
    while True:
        p = Vector3(rng.uniform(-1, 1), rng.uniform(-1, 1), 0.0)
        if p.length_squared() < 1.0:
            return p

def random_in_hemisphere(rng, normal: Vector3) -> Vector3:
    """
    Returns a random point in the unit ball on the same side as normal.
    """
    p = random_in_unit_sphere(rng)
    if p.dot(normal) > 0.0:
        return p
    return -p
