import numpy as np
from materials import Material
from geometry import Sphere, no_hit
from utils import vec, normalize, white, black

"""
Core implementation of the ray tracer.
"""

DEG2RAD = np.pi / 180
DEFAULT_FOV = np.pi / 2


class Ray:

    def __init__(self, origin, direction, start=-np.inf, end=np.inf):
        """Create a ray with the given origin and direction.

        Hits are only accepted for start < t < end. The default interval is
        unbounded, so surfaces behind the origin still count.
        """
        self.origin = np.array(origin, np.float64)
        self.direction = np.array(direction, np.float64)
        self.start = start
        self.end = end

class Camera:

    def __init__(self, eye=None, target=None, up=None):
        """Create a camera pose; anything not given keeps its default."""
        self.reset()
        if eye is not None:
            self.eye = eye
        if target is not None:
            self.target = target
        if up is not None:
            self.up = up

    def reset(self):
        """Look down -z from the origin with +y up."""
        self.eye = vec([0, 0, 0])
        self.target = vec([0, 0, -1])
        self.up = vec([0, 1, 0])

    def generate_ray(self, img_point, fov, start=-np.inf):
        """Compute the ray corresponding to a point in the image.

        img_point is (x, y) in [0, 1] with (0, 0) at the upper left, and fov
        is the full viewing angle in radians. The right vector is cross(up, w)
        and is not renormalized, and the configured up vector is used as is,
        so an up vector that is not perpendicular to the view direction skews
        the image.
        """
        w = normalize(self.eye - self.target)
        u = np.cross(self.up, w)
        d = 1.0 / np.tan(fov / 2.0)

        alpha = img_point[0] * 2.0 - 1.0
        beta = 1.0 - img_point[1] * 2.0

        direction = (-d * w) + (alpha * u) + (beta * self.up)

        return Ray(self.eye, normalize(direction), start=start)


class PointLight:
    def __init__(self, position, color):
        """Create a point light at given position and with given color"""
        self.position = position
        self.color = color

    def illuminate(self, ray, hit):
        """Compute the diffuse and specular shading at a hit due to this light.

        There is no shadow test and no distance falloff. The diffuse cosine is
        used signed, so a light behind the surface darkens it; only the
        specular cosine is clamped at zero.
        """
        material = hit.sphere.material
        normal = hit.normal

        light_vec = normalize(self.position - hit.point)
        reflect_vec = normalize(ray.direction - 2 * np.dot(ray.direction, normal) * normal)

        diffuse = np.dot(normal, light_vec) * material.k_d
        specular = (np.maximum(np.dot(reflect_vec, light_vec), 0.0) ** material.p) * material.k_s * white()

        return (diffuse + specular) * self.color


class Scene:

    def __init__(self):
        """Create an empty scene in its reset state."""
        self.lights = []
        self.surfs = []
        self.camera = Camera()
        self.reset()

    def reset(self):
        """Drop all lights and spheres and restore the default settings.

        The light and sphere lists are emptied in place.
        """
        self.lights.clear()
        self.surfs.clear()
        self.ambient = white()
        self.bg_color = white()
        self.fov = DEFAULT_FOV
        self.camera.reset()

    def add_light(self, color, position):
        self.lights.append(PointLight(vec(position), vec(color)))

    def set_ambient(self, color):
        self.ambient = vec(color)

    def set_background(self, color):
        self.bg_color = vec(color)

    def set_fov(self, degrees):
        self.fov = degrees * DEG2RAD

    def set_eye(self, eye, target, up):
        self.camera.eye = vec(eye)
        self.camera.target = vec(target)
        self.camera.up = vec(up)

    def add_sphere(self, center, radius, diffuse, k_a, k_s, p):
        self.surfs.append(Sphere(vec(center), radius, Material(vec(diffuse), k_a=k_a, k_s=k_s, p=p)))

    def intersect(self, ray):
        """Computes the first (smallest t) intersection between a ray and the scene.

        Every sphere is tested; on equal t the earlier sphere is kept.
        """
        closest_hit = no_hit
        for surf in self.surfs:
            hit = surf.intersect(ray)
            if hit.t < closest_hit.t:
                closest_hit = hit
        return closest_hit


def shade(ray, hit, scene):
    """Phong color of a hit: ambient plus every light, or the background on a miss."""
    if hit.t == np.inf:
        return scene.bg_color.copy()

    mat = hit.sphere.material
    ambient = mat.k_a * scene.ambient * mat.k_d

    light_term = black()
    for light in scene.lights:
        light_term += light.illuminate(ray, hit)

    return ambient + light_term

def trace_ray(ray, scene):
    return shade(ray, scene.intersect(ray), scene)


class RayTracer:

    def __init__(self, screen_width, screen_height, near=None):
        """Create a tracer with its own scene.

        Parameters:
          screen_width, screen_height : int -- number of pixels to trace
          near : float -- if given, eye rays only accept hits with t > near;
            by default they accept hits at any t, including behind the eye
        """
        self.screen_width = screen_width
        self.screen_height = screen_height
        self.near = near
        self.scene = Scene()

    # clear out all scene contents
    def reset_scene(self):
        self.scene.reset()

    def add_light(self, r, g, b, x, y, z):
        self.scene.add_light(vec([r, g, b]), vec([x, y, z]))

    def set_ambient(self, r, g, b):
        self.scene.set_ambient(vec([r, g, b]))

    def set_background(self, r, g, b):
        self.scene.set_background(vec([r, g, b]))

    def set_fov(self, theta):
        """Set the field of view, in degrees."""
        self.scene.set_fov(theta)

    def set_eye(self, x1, y1, z1, x2, y2, z2, x3, y3, z3):
        """Set the camera's position (x1,y1,z1), look-at point (x2,y2,z2) and up vector (x3,y3,z3)."""
        self.scene.set_eye(vec([x1, y1, z1]), vec([x2, y2, z2]), vec([x3, y3, z3]))

    def add_sphere(self, x, y, z, radius, dr, dg, db, k_ambient, k_specular, specular_pow):
        self.scene.add_sphere(vec([x, y, z]), radius, vec([dr, dg, db]),
                              k_ambient, k_specular, specular_pow)

    def eye_ray(self, i, j):
        """Create the eye ray through pixel (i, j)."""
        start = -np.inf if self.near is None else self.near
        img_point = (i / self.screen_width, j / self.screen_height)
        return self.scene.camera.generate_ray(img_point, self.scene.fov, start=start)

    def compute_pixel(self, i, j):
        """Unclamped color seen through pixel (i, j)."""
        return trace_ray(self.eye_ray(i, j), self.scene)

    def render_rows(self):
        """Yield (j, row) for each pixel row from the top, row being (screen_width, 3)."""
        for j in range(self.screen_height):
            row = np.zeros((self.screen_width, 3), np.float64)
            for i in range(self.screen_width):
                row[i] = self.compute_pixel(i, j)
            yield j, row


def render_image(tracer):
    """
    render a ray traced image.
    """
    ny = tracer.screen_height
    nx = tracer.screen_width

    output_image = np.zeros((ny, nx, 3), np.float64)

    for j, row in tracer.render_rows():
        print(f"rendering row {j+1}/{ny}...")
        output_image[j] = row

    print("Finished rendering scene")
    return output_image
