from enum import Enum

import numpy as np
from utils import vec

"""
Scene objects and the closed-form ray intersection routines.
"""


class Kind(Enum):
    CAMERA = "camera"
    SPHERE = "sphere"
    PLANE = "plane"


class Camera:
    kind = Kind.CAMERA

    def __init__(self, width, height):
        """Create a camera looking down +z from the origin.

        Parameters:
          width : float -- width of the view plane, one unit in front of the eye
          height : float -- height of the view plane
        """
        self.width = width
        self.height = height

    def __repr__(self):
        return f"Camera(width={self.width}, height={self.height})"


class Sphere:
    kind = Kind.SPHERE

    def __init__(self, center, radius, color):
        """Create a sphere with the given center and radius.

        Parameters:
          center : (3,) -- a 3D point specifying the sphere's center
          radius : float -- a Python float specifying the sphere's radius
          color : (3,) -- flat RGB color, components in [0,1]
        """
        self.center = vec(center)
        self.radius = radius
        self.color = vec(color)

    def __repr__(self):
        return f"Sphere(center={self.center.tolist()}, radius={self.radius}, color={self.color.tolist()})"


class Plane:
    kind = Kind.PLANE

    def __init__(self, point, normal, color):
        """Create an infinite plane through a point.

        Parameters:
          point : (3,) -- any point lying on the plane
          normal : (3,) -- the unit normal of the plane
          color : (3,) -- flat RGB color, components in [0,1]
        """
        self.point = vec(point)
        self.normal = vec(normal)
        self.color = vec(color)

    def __repr__(self):
        return f"Plane(point={self.point.tolist()}, normal={self.normal.tolist()}, color={self.color.tolist()})"


# Ray parameter meaning "no forward intersection". Only t > 0 counts as a hit.
NO_HIT = 0.0


def sphere_intersection(origin, direction, center, radius):
    """Computes the nearest forward intersection between a ray and a sphere.

    Parameters:
      origin : (3,) -- ray origin
      direction : (3,) -- ray direction
      center : (3,) -- sphere center
      radius : float -- sphere radius
    Return:
      float -- the smallest strictly positive root, or NO_HIT
    """
    sphere_vec = origin - center
    a = np.dot(direction, direction)
    b = 2 * np.dot(direction, sphere_vec)
    c = np.dot(sphere_vec, sphere_vec) - radius * radius
    discriminant = b * b - 4 * a * c
    if discriminant < 0:
        return NO_HIT

    disc_sqrt = np.sqrt(discriminant)
    minus = (-b - disc_sqrt) / (2 * a)
    plus = (-b + disc_sqrt) / (2 * a)
    roots = [t for t in (minus, plus) if t > 0]
    if not roots:
        return NO_HIT
    return float(min(roots))


def plane_intersection(origin, direction, point, normal):
    """Computes the intersection between a ray and a plane, if it is in front of the origin.

    A ray parallel to the plane gives a non-finite t, which is reported as NO_HIT.
    """
    with np.errstate(divide='ignore', invalid='ignore'):
        t = np.dot(normal, point - origin) / np.dot(normal, direction)
    if not np.isfinite(t) or t <= 0:
        return NO_HIT
    return float(t)
