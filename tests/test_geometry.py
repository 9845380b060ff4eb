"""Tests for sphere intersection and nearest-hit scene queries."""

import math

import pytest

from core.ray import Ray
from core.vector import Color, Point3, Vector3
from geometry.hittable import HitRecord
from geometry.scene import Scene
from geometry.sphere import Sphere
from materials.metal import Metal
from renderer.raytracer import T_MIN


def test_ray_at():
    ray = Ray(Point3(1, 2, 3), Vector3(0, 0, -2))
    assert ray.at(0) == Point3(1, 2, 3)
    assert ray.at(1.5) == Point3(1, 2, 0)


def test_set_face_normal_flips_for_back_face():
    rec = HitRecord()
    outward = Vector3(0, 0, 1)
    rec.set_face_normal(Ray(Point3(0, 0, 0), Vector3(0, 0, -1)), outward)
    assert rec.front_face
    assert rec.normal == outward
    rec.set_face_normal(Ray(Point3(0, 0, 0), Vector3(0, 0, 1)), outward)
    assert not rec.front_face
    assert rec.normal == Vector3(0, 0, -1)


def test_sphere_entry_hit(grey):
    sphere = Sphere(Point3(0, 0, -5), 1.0, grey)
    rec = sphere.hit(Ray(Point3(0, 0, 0), Vector3(0, 0, -1)), T_MIN, math.inf)
    assert rec is not None
    assert rec.t == pytest.approx(4.0)
    assert rec.front_face
    assert tuple(rec.normal) == pytest.approx((0, 0, 1))
    assert tuple(rec.p) == pytest.approx((0, 0, -4))
    assert rec.material is grey


def test_sphere_hit_with_unnormalized_direction(grey):
    sphere = Sphere(Point3(0, 0, -5), 1.0, grey)
    rec = sphere.hit(Ray(Point3(0, 0, 0), Vector3(0, 0, -2)), T_MIN, math.inf)
    assert rec.t == pytest.approx(2.0)


def test_sphere_hit_from_inside(grey):
    sphere = Sphere(Point3(0, 0, 0), 2.0, grey)
    rec = sphere.hit(Ray(Point3(0.5, 0, 0), Vector3(1, 0, 0)), T_MIN, math.inf)
    assert rec is not None
    assert rec.t == pytest.approx(1.5)
    assert not rec.front_face
    # Outward normal at (2, 0, 0) is +x, the reported one faces the ray.
    assert tuple(rec.normal) == pytest.approx((-1, 0, 0))


def test_sphere_miss(grey):
    sphere = Sphere(Point3(0, 0, -5), 1.0, grey)
    assert sphere.hit(Ray(Point3(0, 0, 0), Vector3(0, 1, 0)), T_MIN, math.inf) is None
    assert sphere.hit(Ray(Point3(0, 2, 0), Vector3(0, 0, -1)), T_MIN, math.inf) is None


def test_sphere_behind_ray_is_not_hit(grey):
    sphere = Sphere(Point3(0, 0, 5), 1.0, grey)
    assert sphere.hit(Ray(Point3(0, 0, 0), Vector3(0, 0, -1)), T_MIN, math.inf) is None


def test_sphere_respects_t_max(grey):
    sphere = Sphere(Point3(0, 0, -5), 1.0, grey)
    assert sphere.hit(Ray(Point3(0, 0, 0), Vector3(0, 0, -1)), T_MIN, 3.9) is None
    # Between the roots only the far one is within range.
    rec = sphere.hit(Ray(Point3(0, 0, 0), Vector3(0, 0, -1)), 4.5, math.inf)
    assert rec.t == pytest.approx(6.0)
    assert not rec.front_face


def test_ray_leaving_surface_does_not_rehit_it(grey):
    sphere = Sphere(Point3(0, 0, 0), 1.0, grey)
    # Starts on the surface heading outwards: only root is t == 0.
    ray = Ray(Point3(0, 0, 1), Vector3(0, 0, 1))
    assert sphere.hit(ray, T_MIN, math.inf) is None
    # Heading inwards it meets the far side, not the starting point.
    rec = sphere.hit(Ray(Point3(0, 0, 1), Vector3(0, 0, -1)), T_MIN, math.inf)
    assert rec.t == pytest.approx(2.0)


@pytest.mark.parametrize("radius", [0, -1.0, float("nan")])
def test_sphere_rejects_bad_radius(grey, radius):
    with pytest.raises(ValueError):
        Sphere(Point3(0, 0, 0), radius, grey)


def test_spheres_can_share_a_material(grey):
    a = Sphere(Point3(0, 0, -5), 1.0, grey)
    b = Sphere(Point3(3, 0, -5), 1.0, grey)
    assert a.material is b.material


def test_scene_returns_nearest_hit_regardless_of_order(grey):
    mirror = Metal(Color(0.9, 0.9, 0.9))
    far = Sphere(Point3(0, 0, -10), 1.0, grey)
    near = Sphere(Point3(0, 0, -5), 1.0, mirror)
    ray = Ray(Point3(0, 0, 0), Vector3(0, 0, -1))
    for objects in ([far, near], [near, far]):
        rec = Scene(objects).hit(ray, T_MIN, math.inf)
        assert rec.t == pytest.approx(4.0)
        assert rec.material is mirror


def test_scene_respects_caller_bounds(grey):
    scene = Scene([Sphere(Point3(0, 0, -5), 1.0, grey)])
    assert scene.hit(Ray(Point3(0, 0, 0), Vector3(0, 0, -1)), T_MIN, 2.0) is None


def test_empty_scene_has_no_hit():
    scene = Scene()
    assert len(scene) == 0
    assert scene.hit(Ray(Point3(0, 0, 0), Vector3(0, 0, -1)), T_MIN, math.inf) is None


def test_scene_add_keeps_insertion_order(grey):
    scene = Scene()
    spheres = [Sphere(Point3(i, 0, 0), 0.5, grey) for i in range(3)]
    for s in spheres:
        scene.add(s)
    assert list(scene) == spheres
    scene.clear()
    assert len(scene) == 0
