import logging

import numpy as np
from geometry import Kind, NO_HIT, sphere_intersection, plane_intersection
from utils import vec, normalize

"""
Core implementation of the ray caster.
"""

logger = logging.getLogger(__name__)

# Color of pixels whose ray hits nothing.
BACKGROUND = vec([0, 0, 0])


class RenderError(Exception):
    """The object list handed to the renderer breaks the loader's guarantees."""


class Ray:

    def __init__(self, origin, direction):
        """Create a ray with the given origin and direction.
        """
        self.origin = np.array(origin, np.float64)
        self.direction = np.array(direction, np.float64)


def pixel_direction(camera, nx, ny, x, y):
    """Compute the unit direction through the center of pixel (x, y).

    The view plane sits one unit in front of the origin along +z and spans
    camera.width by camera.height; pixel (0, 0) is at its (-x, -y) corner.
    """
    px = -camera.width / 2 + (camera.width / nx) * (x + 0.5)
    py = -camera.height / 2 + (camera.height / ny) * (y + 0.5)
    return normalize(vec([px, py, 1.0]))


def generate_ray(camera, nx, ny, x, y):
    return Ray(vec([0, 0, 0]), pixel_direction(camera, nx, ny, x, y))


def camera_first(objects):
    """Return the objects reordered so the single camera comes first.

    The order of the other objects is kept, since it decides ties between equal hits.
    """
    cameras = [obj for obj in objects if obj.kind is Kind.CAMERA]
    if len(cameras) != 1:
        raise RenderError(f"expected exactly one camera, found {len(cameras)}")
    return cameras + [obj for obj in objects if obj.kind is not Kind.CAMERA]


def intersect(ray, obj):
    """Ray parameter of the nearest forward hit of `ray` on `obj`, or NO_HIT."""
    if obj.kind is Kind.SPHERE:
        return sphere_intersection(ray.origin, ray.direction, obj.center, obj.radius)
    elif obj.kind is Kind.PLANE:
        return plane_intersection(ray.origin, ray.direction, obj.point, obj.normal)
    raise RenderError(f"cannot intersect an object of kind {obj.kind}")


def trace(ray, objects):
    """Find the nearest object hit by the ray.

    Parameters:
      ray : Ray -- the ray to cast
      objects : list -- the objects to test, in scan order
    Return:
      (float, object) -- the hit distance and object, or (NO_HIT, None)
    """
    best_t = np.inf
    best = None
    for obj in objects:
        t = intersect(ray, obj)
        # strict comparison: on a tie the earlier object keeps the pixel
        if t > 0 and t < best_t:
            best_t = t
            best = obj
    if best is None:
        return NO_HIT, None
    return best_t, best


def render_image(objects, nx, ny):
    """Cast one ray per pixel and record the color of the nearest surface.

    Parameters:
      objects : list -- validated scene objects, containing exactly one camera
      nx, ny : int -- output resolution
    Return:
      (ny, nx, 3) array -- row y holds the pixels generated for view-plane row y,
        bottom of the view plane first
    """
    objects = camera_first(objects)
    camera = objects[0]
    surfaces = objects[1:]

    logger.info("rendering %d objects at %dx%d", len(surfaces), nx, ny)
    output_image = np.tile(BACKGROUND, (ny, nx, 1))

    for y in range(ny):
        logger.debug("rendering row %d/%d", y + 1, ny)
        for x in range(nx):
            ray = generate_ray(camera, nx, ny, x, y)
            t, hit = trace(ray, surfaces)
            if hit is not None:
                output_image[y, x] = hit.color

    return output_image
