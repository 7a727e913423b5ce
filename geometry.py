import numpy as np
from utils import normalize

class Hit:
    def __init__(self, t, point=None, normal=None, sphere=None):
        """Create a Hit with the given data.

        Parameters:
          t : float -- the t value of the intersection along the ray
          point : (3,) -- the 3D point where the intersection happens
          normal : (3,) -- the unit normal pointing from the sphere's center through point
          sphere : Sphere -- the sphere that was hit
        """
        self.t = t
        self.point = point
        self.normal = normal
        self.sphere = sphere

# Value to represent absence of an intersection
no_hit = Hit(np.inf)


class Sphere:

    def __init__(self, center, radius, material):
        """Create a sphere with the given center and radius.

        Parameters:
          center : (3,) -- a 3D point specifying the sphere's center
          radius : float -- a Python float specifying the sphere's radius
          material : Material -- the material of the surface
        """
        self.center = center
        self.radius = radius
        self.material = material

    def intersect(self, ray):
        """Computes the first (smallest t) intersection between a ray and this sphere.

        Only roots strictly inside (ray.start, ray.end) count. With the default
        unbounded interval the smaller root always wins, even when it is negative.

        Parameters:
          ray : Ray -- the ray to intersect with the sphere
        Return:
          Hit -- the hit data
        """
        sphere_vec = ray.origin - self.center
        a = np.dot(ray.direction, ray.direction)
        b = 2 * np.dot(ray.direction, sphere_vec)
        c = np.dot(sphere_vec, sphere_vec) - self.radius * self.radius
        discriminant = b * b - 4 * a * c
        if discriminant < 0:
            return no_hit
        else:
            disc_sqrt = np.sqrt(discriminant)
            minus = (-b - disc_sqrt) / (2 * a)
            plus = (-b + disc_sqrt) / (2 * a)
            hit = None
            if ray.start < minus and minus < ray.end:
                hit = minus
            elif ray.start < plus and plus < ray.end:
                hit = plus
            if hit is not None:
                point = ray.origin + hit * ray.direction
                normal = normalize(point - self.center)
                return Hit(hit, point, normal, self)
        return no_hit
