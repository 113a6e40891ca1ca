import ray
from ImLite import Image
from geometry import Camera, Sphere, Plane
from utils import vec


class ExampleSceneDef(object):
    def __init__(self, objects):
        self.objects = objects

    def render(self, output_path=None, output_shape=None):
        """Render the scene; output_shape is [height, width] and defaults to 128x128.

        Returns the Image when no output_path is given, otherwise writes it there.
        """
        if output_shape is None:
            output_shape = [128, 128]
        pix = ray.render_image(self.objects, output_shape[1], output_shape[0])
        im = Image.from_render_buffer(pix)
        if output_path is None:
            return im
        im.writeToFile(output_path)


def RedSphereBluePlaneExample(plane_height=0.0):
    """A red sphere resting above a blue ground plane, seen by a narrow camera."""
    return ExampleSceneDef(objects=[
        Camera(0.5, 0.5),
        Sphere(vec([0, 2, 5]), 2.0, vec([1, 0, 0])),
        Plane(vec([0, plane_height, 0]), vec([0, 1, 0]), vec([0, 0, 1])),
    ])


def TwoSpheresExample():
    """Two overlapping spheres, the nearer green one partly hiding the white one."""
    return ExampleSceneDef(objects=[
        Sphere(vec([0, 0, 10]), 3.0, vec([1, 1, 1])),
        Sphere(vec([0.5, 0, 6]), 1.0, vec([0, 1, 0])),
        Camera(1.0, 1.0),
    ])
