import contextlib
import io
import os
import tempfile
import unittest
import numpy as np
from PIL import Image
from ray import *
from geometry import Sphere, Hit, no_hit
from materials import Material
from utils import normalize, vec, to_drawing_color, to_drawing_image
import cli
from ExampleSceneDef import OrthoFriendlyExample

def assert_direction_matches(v, w):
    np.testing.assert_almost_equal(normalize(v), normalize(w))


def quietly(func, *args, **kwargs):
    out = io.StringIO()
    with contextlib.redirect_stdout(out):
        result = func(*args, **kwargs)
    return result, out.getvalue()


class TestVectorAlgebra(unittest.TestCase):

    def test_normalize_unit_length(self):
        for v in (vec([3, 4, 0]), vec([-1e-3, 2e-3, 5e-4]), vec([1e6, -2e6, 3e6]), vec([0, 0, -7])):
            self.assertAlmostEqual(np.linalg.norm(normalize(v)), 1.0)
        np.testing.assert_almost_equal(normalize(vec([3, 4, 0])), vec([0.6, 0.8, 0]))

    def test_normalize_zero_vector_is_nan(self):
        with np.errstate(all='raise'):
            n = normalize(vec([0, 0, 0]))
        self.assertTrue(np.all(np.isnan(n)))

    def test_dot_symmetric_and_bilinear(self):
        u = vec([1, -2, 3])
        v = vec([0.5, 4, -1])
        w = vec([2, 2, 7])
        self.assertEqual(np.dot(u, v), np.dot(v, u))
        self.assertAlmostEqual(np.dot(2.5 * u + w, v), 2.5 * np.dot(u, v) + np.dot(w, v))

    def test_cross_with_self_is_zero(self):
        v = vec([1.5, -2, 9])
        np.testing.assert_array_equal(np.cross(v, v), vec([0, 0, 0]))


class TestDrawingColor(unittest.TestCase):

    def test_clamp_and_floor(self):
        self.assertEqual(to_drawing_color(vec([1.5, 0.5, -0.2])), (255, 127, 0))
        self.assertEqual(to_drawing_color(vec([np.nan, 1.0, 0.0])), (0, 255, 0))

    def test_image(self):
        img = np.full((2, 3, 3), 2.0)
        img[0, 0] = [0.25, -1, 1]
        out = to_drawing_image(img)
        self.assertEqual(out.dtype, np.uint8)
        self.assertEqual(out.shape, (2, 3, 3))
        np.testing.assert_array_equal(out[0, 0], [63, 0, 255])
        np.testing.assert_array_equal(out[1, 2], [255, 255, 255])


class TestSphereIntersect(unittest.TestCase):

    def confirm_hit(self, sphere, ray):
        # make sure hit is self-consistent, then return it
        hit = sphere.intersect(ray)
        self.assertLess(hit.t, np.inf)
        np.testing.assert_almost_equal(ray.origin + hit.t * ray.direction, hit.point)
        np.testing.assert_almost_equal(normalize(hit.point - sphere.center), hit.normal)
        self.assertAlmostEqual(np.linalg.norm(hit.point - sphere.center), sphere.radius)
        self.assertIs(hit.sphere, sphere)
        return hit

    def test_unitsphere_hits(self):
        unit_sphere = Sphere(np.array([0,0,0]), 1.0, None)
        # dead center hit
        hit = self.confirm_hit(unit_sphere, Ray(vec([2.0,0.0,0.0]), vec([-1.0,0.0,0.0])))
        self.assertAlmostEqual(hit.t, 1.0)
        # dead center with non-unit direction
        hit = self.confirm_hit(unit_sphere, Ray(vec([3.0,0.0,0.0]), vec([-2.0,0.0,0.0])))
        self.assertAlmostEqual(hit.t, 1.0)
        # off center hit
        hit = self.confirm_hit(unit_sphere, Ray(vec([1.0,0.5,0.0]), vec([-1.0,0.0,0.0])))
        self.assertAlmostEqual(hit.t, 1 - np.sin(np.pi/3))
        # center hit from off axis
        hit = self.confirm_hit(unit_sphere, Ray(vec([2.0,3.0,4.0]), vec([-2.0,-3.0,-4.0])))
        self.assertAlmostEqual(hit.t, 1 - 1 / np.sqrt(29))

    def test_down_the_z_axis(self):
        unit_sphere = Sphere(vec([0,0,0]), 1.0, None)
        hit = self.confirm_hit(unit_sphere, Ray(vec([0,0,5]), vec([0,0,-1])))
        self.assertEqual(hit.t, 4.0)
        np.testing.assert_array_equal(hit.point, vec([0,0,1]))

    def test_unitsphere_misses(self):
        unit_sphere = Sphere(vec([0,0,0]), 1.0, None)
        # on axis miss
        hit = unit_sphere.intersect(Ray(vec([2.0,3.0,0.0]), vec([-1.0,0.0,0.0])))
        self.assertIs(hit, no_hit)
        self.assertEqual(hit.t, np.inf)

    def test_tangent_ray_hits_once(self):
        unit_sphere = Sphere(vec([0,0,0]), 1.0, None)
        hit = self.confirm_hit(unit_sphere, Ray(vec([1,0,5]), vec([0,0,-1])))
        self.assertEqual(hit.t, 5.0)
        np.testing.assert_array_equal(hit.point, vec([1,0,0]))

    def test_nonunit_hits(self):
        # all the same as the first case, but scaled by 3 and shifted by (-1, -5, -7)
        sphere = Sphere(vec([-1,-5,-7]), 3.0, None)
        hit = self.confirm_hit(sphere, Ray(vec([5.0,-5.0,-7.0]), vec([-3.0,0.0,0.0])))
        self.assertAlmostEqual(hit.t, 1.0)
        hit = self.confirm_hit(sphere, Ray(vec([8.0,-5.0,-7.0]), vec([-6.0,0.0,0.0])))
        self.assertAlmostEqual(hit.t, 1.0)
        hit = self.confirm_hit(sphere, Ray(vec([2.0,-3.5,-7.0]), vec([-3.0,0.0,0.0])))
        self.assertAlmostEqual(hit.t, 1 - np.sin(np.pi/3))

    def test_sphere_behind_origin_still_hits(self):
        unit_sphere = Sphere(vec([0,0,0]), 1.0, None)
        # roots are -4 and -6; the unbounded ray keeps the smaller one
        hit = self.confirm_hit(unit_sphere, Ray(vec([0,0,-5]), vec([0,0,-1])))
        self.assertAlmostEqual(hit.t, -6.0)
        np.testing.assert_almost_equal(hit.point, vec([0,0,1]))
        # a ray that starts at t=0 does not see it
        hit = unit_sphere.intersect(Ray(vec([0,0,-5]), vec([0,0,-1]), start=0.))
        self.assertIs(hit, no_hit)

    def test_origin_inside_sphere(self):
        unit_sphere = Sphere(vec([0,0,0]), 1.0, None)
        hit = self.confirm_hit(unit_sphere, Ray(vec([0,0,0]), vec([0,0,-1])))
        self.assertAlmostEqual(hit.t, -1.0)
        hit = self.confirm_hit(unit_sphere, Ray(vec([0,0,0]), vec([0,0,-1]), start=0.))
        self.assertAlmostEqual(hit.t, 1.0)
        np.testing.assert_almost_equal(hit.point, vec([0,0,-1]))

    def test_nan_direction_misses(self):
        unit_sphere = Sphere(vec([0,0,-3]), 1.0, None)
        hit = unit_sphere.intersect(Ray(vec([0,0,0]), normalize(vec([0,0,0]))))
        self.assertIs(hit, no_hit)


class TestSceneIntersect(unittest.TestCase):

    def make_scene(self, centers):
        scene = Scene()
        for c in centers:
            scene.add_sphere(vec(c), 1.0, vec([1,1,1]), 1.0, 0.0, 1.0)
        return scene

    def test_nearest_is_independent_of_order(self):
        ray = Ray(vec([0,0,0]), vec([0,0,-1]))
        for centers in ([[0,0,-3], [0,0,-6]], [[0,0,-6], [0,0,-3]]):
            scene = self.make_scene(centers)
            hit = scene.intersect(ray)
            np.testing.assert_array_equal(hit.sphere.center, vec([0,0,-3]))
            self.assertAlmostEqual(hit.t, 2.0)
            np.testing.assert_almost_equal(hit.point, vec([0,0,-2]))

    def test_overlapping_spheres(self):
        ray = Ray(vec([0,0,0]), vec([0,0,-1]))
        for centers in ([[0,0,-3], [0,0,-3.5]], [[0,0,-3.5], [0,0,-3]]):
            hit = self.make_scene(centers).intersect(ray)
            np.testing.assert_array_equal(hit.sphere.center, vec([0,0,-3]))

    def test_tie_keeps_first(self):
        scene = self.make_scene([[0,0,-3], [0,0,-3]])
        hit = scene.intersect(Ray(vec([0,0,0]), vec([0,0,-1])))
        self.assertIs(hit.sphere, scene.surfs[0])

    def test_empty_scene(self):
        self.assertIs(Scene().intersect(Ray(vec([0,0,0]), vec([0,0,-1]))), no_hit)

    def test_sphere_behind_eye_wins_unless_bounded(self):
        scene = self.make_scene([[0,0,-3], [0,0,5]])
        hit = scene.intersect(Ray(vec([0,0,0]), vec([0,0,-1])))
        np.testing.assert_array_equal(hit.sphere.center, vec([0,0,5]))
        self.assertAlmostEqual(hit.t, -6.0)
        hit = scene.intersect(Ray(vec([0,0,0]), vec([0,0,-1]), start=0.))
        np.testing.assert_array_equal(hit.sphere.center, vec([0,0,-3]))


class TestCamera(unittest.TestCase):

    def test_default_camera(self):
        # A camera located at the origin facing the -z direction
        cam = Camera()
        fov = np.pi / 2
        # Center ray is straight down the axis
        ray = cam.generate_ray((0.5, 0.5), fov)
        np.testing.assert_almost_equal(ray.origin, vec([0,0,0]))
        assert_direction_matches(ray.direction, vec([0,0,-1]))
        # FOV is 90 degrees, so corner rays are centered in octants
        ray = cam.generate_ray((0, 0), fov)
        assert_direction_matches(ray.direction, vec([-1, 1,-1]))
        ray = cam.generate_ray((1, 0), fov)
        assert_direction_matches(ray.direction, vec([ 1, 1,-1]))
        ray = cam.generate_ray((0, 1), fov)
        assert_direction_matches(ray.direction, vec([-1,-1,-1]))

    def test_fov(self):
        # A camera with a different fov: the image plane moves away
        fov = 60 * np.pi / 180
        cam = Camera()
        ray = cam.generate_ray((0.5, 0.5), fov)
        assert_direction_matches(ray.direction, vec([0,0,-1]))
        ray = cam.generate_ray((0, 0), fov)
        assert_direction_matches(ray.direction, vec([-1, 1, -np.sqrt(3)]))

    def test_square_frame(self):
        # A camera with a frame where up is the z axis
        cam = Camera(eye=vec([1,2,2]), target=vec([1,4,2]), up=vec([0,0,1]))
        # Center ray is straight down the y axis
        ray = cam.generate_ray((0.5, 0.5), np.pi / 2)
        np.testing.assert_almost_equal(ray.origin, vec([1,2,2]))
        assert_direction_matches(ray.direction, vec([0,1,0]))
        # corners are like default camera but (x,y) is (x, z)
        ray = cam.generate_ray((0, 0), np.pi / 2)
        assert_direction_matches(ray.direction, vec([-1, 1, 1]))
        ray = cam.generate_ray((1, 0), np.pi / 2)
        assert_direction_matches(ray.direction, vec([ 1, 1, 1]))

    def test_arbitrary_frame(self):
        # A camera that lines up with nothing in particular
        eye = vec([3,4,5])
        target = vec([6,7,8])
        up = vec([1,2,3])
        cam = Camera(eye=eye, target=target, up=up)
        # Center ray points towards target
        ray = cam.generate_ray((0.5, 0.5), 47 * np.pi / 180)
        np.testing.assert_array_equal(ray.origin, eye)
        assert_direction_matches(ray.direction, target - eye)
        self.assertAlmostEqual(np.linalg.norm(ray.direction), 1.0)

    def test_up_vector_not_orthogonalized(self):
        # up tilted towards the viewer: the top edge of the image looks straight up
        cam = Camera(up=vec([0,1,1]))
        ray = cam.generate_ray((0.5, 0), np.pi / 2)
        np.testing.assert_almost_equal(ray.direction, vec([0,1,0]))

    def test_tracer_pixels(self):
        tracer = RayTracer(4, 2)
        ray = tracer.eye_ray(2, 1)
        assert_direction_matches(ray.direction, vec([0,0,-1]))
        ray = tracer.eye_ray(0, 0)
        assert_direction_matches(ray.direction, vec([-1, 1,-1]))
        ray = tracer.eye_ray(3, 1)
        assert_direction_matches(ray.direction, vec([0.5, 0,-1]))
        self.assertEqual(ray.start, -np.inf)

    def test_tracer_near(self):
        tracer = RayTracer(4, 4, near=0.)
        self.assertEqual(tracer.eye_ray(1, 1).start, 0.)


class TestPointLight(unittest.TestCase):

    def shading_test(self, n, v, l, color, material):
        # shade a hit at the origin with normal n, seen along v, lit from direction l
        p = vec([0,0,0])
        sphere = Sphere(p - n, 1.0, material)
        ray = Ray(p - 2.3 * v, v)
        hit = Hit(2.3, p, n, sphere)
        light = PointLight(p + 1.7 * normalize(l), color)
        return light.illuminate(ray, hit)

    def test_diffuse(self):
        # light directly overhead, unit color
        np.testing.assert_allclose(
            self.shading_test(
                vec([0,1,0]), normalize(vec([1,-1,0])),
                vec([0,1,0]), vec([1,1,1]),
                Material(vec([0.2,0.4,0.6]), k_s=0.)
            ),
            vec([0.2,0.4,0.6])
        )
        # light at 60 degrees
        np.testing.assert_allclose(
            self.shading_test(
                vec([0,1,0]), normalize(vec([1,-1,0])),
                vec([0,1,np.sqrt(3)]), vec([1,1,1]),
                Material(vec([0.2,0.4,0.6]), k_s=0.)
            ),
            0.5 * vec([0.2,0.4,0.6])
        )

    def test_light_behind_surface_subtracts(self):
        np.testing.assert_allclose(
            self.shading_test(
                vec([0,1,0]), normalize(vec([1,-1,0])),
                vec([0,-1,0]), vec([1,1,1]),
                Material(vec([0.2,0.4,0.6]), k_s=0.)
            ),
            -vec([0.2,0.4,0.6])
        )

    def test_specular_mirror_direction(self):
        # light sits exactly along the mirror direction of the view ray
        np.testing.assert_allclose(
            self.shading_test(
                vec([0,1,0]), normalize(vec([1,-1,0])),
                vec([1,1,0]), vec([1,0.5,0.25]),
                Material(vec([0,0,0]), k_s=0.5, p=30)
            ),
            vec([0.5,0.25,0.125])
        )

    def test_specular_clamped(self):
        np.testing.assert_allclose(
            self.shading_test(
                vec([0,1,0]), normalize(vec([1,-1,0])),
                vec([-1,0,0]), vec([1,1,1]),
                Material(vec([0,0,0]), k_s=1.0, p=1)
            ),
            vec([0,0,0])
        )


class TestShade(unittest.TestCase):

    def test_miss_returns_background(self):
        scene = Scene()
        scene.set_background(vec([0.1,0.2,0.3]))
        scene.add_sphere(vec([0,5,-3]), 1.0, vec([1,0,0]), 1.0, 0.0, 1.0)
        c = trace_ray(Ray(vec([0,0,0]), vec([0,0,-1])), scene)
        np.testing.assert_array_equal(c, vec([0.1,0.2,0.3]))

    def test_ambient_only(self):
        tracer = RayTracer(10, 10)
        tracer.set_ambient(0.2, 0.2, 0.2)
        tracer.add_sphere(0, 0, -3, 1, 1, 0, 0, 1, 0, 1)
        np.testing.assert_array_equal(tracer.compute_pixel(5, 5), vec([0.2, 0, 0]))

    def test_light_along_normal(self):
        tracer = RayTracer(10, 10)
        tracer.set_ambient(0, 0, 0)
        tracer.add_light(1, 1, 1, 0, 0, 10)
        tracer.add_sphere(0, 0, -3, 1, 0.3, 0.6, 0.9, 1, 0, 20)
        np.testing.assert_allclose(tracer.compute_pixel(5, 5), vec([0.3, 0.6, 0.9]))

    def test_lights_accumulate(self):
        tracer = RayTracer(10, 10)
        tracer.set_ambient(0.5, 0.5, 0.5)
        tracer.add_light(1, 1, 1, 0, 0, 10)
        tracer.add_light(1, 0, 0, 0, 0, 10)
        tracer.add_sphere(0, 0, -3, 1, 0.2, 0.4, 0.6, 0.5, 0, 20)
        ambient = 0.5 * 0.5 * vec([0.2, 0.4, 0.6])
        lit = vec([0.2, 0.4, 0.6]) * vec([2, 1, 1])
        np.testing.assert_allclose(tracer.compute_pixel(5, 5), ambient + lit)

    def test_default_background_after_reset(self):
        tracer = RayTracer(6, 4)
        tracer.set_background(0, 0, 0)
        tracer.add_light(1, 1, 1, 0, 0, 10)
        tracer.add_sphere(0, 0, -3, 1, 0.2, 0.4, 0.6, 0.5, 0, 20)
        tracer.reset_scene()
        for i, j in ((0, 0), (3, 2), (5, 3)):
            np.testing.assert_array_equal(tracer.compute_pixel(i, j), vec([1, 1, 1]))

    def test_zero_direction_gives_background(self):
        scene = Scene()
        scene.add_sphere(vec([0,0,0]), 1.0, vec([1,0,0]), 1.0, 0.0, 1.0)
        c = trace_ray(Ray(vec([0,0,0]), normalize(vec([0,0,0]))), scene)
        np.testing.assert_array_equal(c, vec([1, 1, 1]))

    def test_miss_color_is_not_the_scene_background(self):
        tracer = RayTracer(4, 4)
        c = tracer.compute_pixel(0, 0)
        c *= 0.5
        np.testing.assert_array_equal(tracer.scene.bg_color, vec([1, 1, 1]))
        np.testing.assert_array_equal(tracer.compute_pixel(1, 1), vec([1, 1, 1]))


class TestScene(unittest.TestCase):

    def test_defaults(self):
        scene = Scene()
        self.assertEqual(scene.lights, [])
        self.assertEqual(scene.surfs, [])
        np.testing.assert_array_equal(scene.ambient, vec([1,1,1]))
        np.testing.assert_array_equal(scene.bg_color, vec([1,1,1]))
        self.assertEqual(scene.fov, np.pi / 2)
        np.testing.assert_array_equal(scene.camera.eye, vec([0,0,0]))
        np.testing.assert_array_equal(scene.camera.target, vec([0,0,-1]))
        np.testing.assert_array_equal(scene.camera.up, vec([0,1,0]))

    def test_reset_empties_lists_in_place(self):
        tracer = RayTracer(4, 4)
        lights = tracer.scene.lights
        surfs = tracer.scene.surfs
        tracer.add_light(1, 1, 1, 0, 0, 0)
        tracer.add_sphere(0, 0, -3, 1, 1, 1, 1, 1, 0, 1)
        tracer.set_ambient(0.1, 0.1, 0.1)
        tracer.set_background(0, 0, 0)
        tracer.set_fov(30)
        tracer.set_eye(1, 1, 1, 2, 2, 2, 0, 0, 1)
        tracer.reset_scene()
        self.assertIs(tracer.scene.lights, lights)
        self.assertIs(tracer.scene.surfs, surfs)
        self.assertEqual(len(lights), 0)
        self.assertEqual(len(surfs), 0)
        np.testing.assert_array_equal(tracer.scene.ambient, vec([1,1,1]))
        np.testing.assert_array_equal(tracer.scene.bg_color, vec([1,1,1]))
        self.assertEqual(tracer.scene.fov, np.pi / 2)
        np.testing.assert_array_equal(tracer.scene.camera.eye, vec([0,0,0]))
        np.testing.assert_array_equal(tracer.scene.camera.target, vec([0,0,-1]))
        np.testing.assert_array_equal(tracer.scene.camera.up, vec([0,1,0]))

    def test_fov_in_degrees(self):
        tracer = RayTracer(4, 4)
        tracer.set_fov(90)
        self.assertAlmostEqual(tracer.scene.fov, np.pi / 2)
        tracer.set_fov(60)
        self.assertAlmostEqual(tracer.scene.fov, np.pi / 3)

    def test_set_eye_uses_each_vector(self):
        tracer = RayTracer(4, 4)
        tracer.set_eye(1, 2, 3, 4, 5, 6, 7, 8, 9)
        np.testing.assert_array_equal(tracer.scene.camera.eye, vec([1,2,3]))
        np.testing.assert_array_equal(tracer.scene.camera.target, vec([4,5,6]))
        np.testing.assert_array_equal(tracer.scene.camera.up, vec([7,8,9]))
        ray = tracer.eye_ray(0, 0)
        np.testing.assert_array_equal(ray.origin, vec([1,2,3]))

    def test_add_sphere_and_lights(self):
        tracer = RayTracer(4, 4)
        tracer.add_sphere(1, 2, 3, 0.5, 0.1, 0.2, 0.3, 0.4, 0.6, 50)
        tracer.add_light(1, 0, 0, 0, 1, 0)
        tracer.add_light(1, 0, 0, 0, 1, 0)
        tracer.add_light(0, 0, 1, 5, 5, 5)
        sphere = tracer.scene.surfs[0]
        np.testing.assert_array_equal(sphere.center, vec([1,2,3]))
        self.assertEqual(sphere.radius, 0.5)
        np.testing.assert_array_equal(sphere.material.k_d, vec([0.1,0.2,0.3]))
        self.assertEqual(sphere.material.k_a, 0.4)
        self.assertEqual(sphere.material.k_s, 0.6)
        self.assertEqual(sphere.material.p, 50)
        self.assertEqual(len(tracer.scene.lights), 3)
        np.testing.assert_array_equal(tracer.scene.lights[2].color, vec([0,0,1]))
        np.testing.assert_array_equal(tracer.scene.lights[2].position, vec([5,5,5]))

    def test_tracers_do_not_share_scenes(self):
        a = RayTracer(4, 4)
        b = RayTracer(4, 4)
        a.add_sphere(0, 0, -3, 1, 1, 1, 1, 1, 0, 1)
        a.set_fov(10)
        self.assertEqual(b.scene.surfs, [])
        self.assertEqual(b.scene.fov, np.pi / 2)

    def test_setters_keep_their_own_vectors(self):
        scene = Scene()
        ambient, background = vec([0.1, 0.2, 0.3]), vec([0.4, 0.5, 0.6])
        color, position = vec([1, 1, 1]), vec([0, 0, 10])
        center, diffuse = vec([0, 0, -3]), vec([1, 0, 0])
        eye, target, up = vec([0, 0, 5]), vec([0, 0, 0]), vec([0, 1, 0])
        scene.set_ambient(ambient)
        scene.set_background(background)
        scene.add_light(color, position)
        scene.add_sphere(center, 1.0, diffuse, 0.5, 0.0, 1.0)
        scene.set_eye(eye, target, up)
        for v in (ambient, background, color, position, center, diffuse, eye, target, up):
            v[:] = 7.0
        np.testing.assert_array_equal(scene.ambient, vec([0.1, 0.2, 0.3]))
        np.testing.assert_array_equal(scene.bg_color, vec([0.4, 0.5, 0.6]))
        np.testing.assert_array_equal(scene.lights[0].color, vec([1, 1, 1]))
        np.testing.assert_array_equal(scene.lights[0].position, vec([0, 0, 10]))
        np.testing.assert_array_equal(scene.surfs[0].center, vec([0, 0, -3]))
        np.testing.assert_array_equal(scene.surfs[0].material.k_d, vec([1, 0, 0]))
        np.testing.assert_array_equal(scene.camera.eye, vec([0, 0, 5]))
        np.testing.assert_array_equal(scene.camera.target, vec([0, 0, 0]))
        np.testing.assert_array_equal(scene.camera.up, vec([0, 1, 0]))


class TestRender(unittest.TestCase):

    def upper_left_tracer(self):
        tracer = RayTracer(4, 4)
        tracer.set_background(0, 0, 0)
        tracer.add_sphere(-2, 2, -2, 0.5, 0, 1, 0, 1, 0, 1)
        return tracer

    def test_raster_order(self):
        tracer = self.upper_left_tracer()
        np.testing.assert_array_equal(tracer.compute_pixel(0, 0), vec([0, 1, 0]))
        np.testing.assert_array_equal(tracer.compute_pixel(3, 3), vec([0, 0, 0]))

    def test_render_rows(self):
        rows = list(self.upper_left_tracer().render_rows())
        self.assertEqual([j for j, _ in rows], [0, 1, 2, 3])
        self.assertEqual(rows[0][1].shape, (4, 3))
        np.testing.assert_array_equal(rows[0][1][0], vec([0, 1, 0]))

    def test_render_image(self):
        image, output = quietly(render_image, self.upper_left_tracer())
        self.assertEqual(image.shape, (4, 4, 3))
        np.testing.assert_array_equal(image[0, 0], vec([0, 1, 0]))
        np.testing.assert_array_equal(image[3, 3], vec([0, 0, 0]))
        self.assertIn("rendering row 4/4...", output)
        self.assertIn("Finished rendering scene", output)

    def test_example_scene(self):
        im, _ = quietly(OrthoFriendlyExample(width=8, height=8).render)
        self.assertEqual(im.size, (8, 8))
        self.assertEqual(im.getpixel((4, 4)), (63, 63, 63))
        self.assertEqual(im.getpixel((0, 0)), (0, 0, 0))


SCENE_TEXT = """\
# test scene
reset_scene
set_ambient 0.2 0.2 0.2
set_background 0 0 0

set_fov 60
set_eye 0 0 1  0 0 -1  0 1 0
add_light 1 1 1  0 5 0
add_sphere 0 0 -3 1  1 0 0  1 0.5 20
"""


class TestCli(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)

    def write(self, name, text):
        path = os.path.join(self.tmp.name, name)
        with open(path, 'w') as f:
            f.write(text)
        return path

    def test_load_matches_direct_calls(self):
        loaded = cli.load_scene_file(self.write("a.scene", SCENE_TEXT), RayTracer(5, 5))
        direct = RayTracer(5, 5)
        direct.set_ambient(0.2, 0.2, 0.2)
        direct.set_background(0, 0, 0)
        direct.set_fov(60)
        direct.set_eye(0, 0, 1, 0, 0, -1, 0, 1, 0)
        direct.add_light(1, 1, 1, 0, 5, 0)
        direct.add_sphere(0, 0, -3, 1, 1, 0, 0, 1, 0.5, 20)
        self.assertEqual(len(loaded.scene.surfs), 1)
        self.assertEqual(len(loaded.scene.lights), 1)
        for i, j in ((0, 0), (2, 2), (4, 1)):
            np.testing.assert_allclose(loaded.compute_pixel(i, j), direct.compute_pixel(i, j))

    def test_unknown_command(self):
        path = self.write("bad.scene", "reset_scene\nadd_cube 0 0 0 1\n")
        with self.assertRaisesRegex(ValueError, "bad.scene:2: unknown command: add_cube"):
            cli.load_scene_file(path, RayTracer(2, 2))

    def test_wrong_arity(self):
        path = self.write("bad.scene", "set_ambient 1 1\n")
        with self.assertRaisesRegex(ValueError, "set_ambient takes 3 arguments, got 2"):
            cli.load_scene_file(path, RayTracer(2, 2))

    def test_main_writes_image(self):
        scene = self.write("a.scene", SCENE_TEXT)
        out = os.path.join(self.tmp.name, "out.png")
        _, output = quietly(cli.main, [scene, out, "--width", "6", "--height", "4"])
        self.assertIn("Image saved to", output)
        with Image.open(out) as im:
            self.assertEqual(im.size, (6, 4))

    def test_main_missing_scene(self):
        out = os.path.join(self.tmp.name, "out.png")
        with contextlib.redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit):
                cli.main([os.path.join(self.tmp.name, "nope.scene"), out])


if __name__ == '__main__':
    unittest.main()
