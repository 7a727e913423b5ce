from PIL import Image
import ray
from utils import to_drawing_image, save_image

class ExampleSceneDef(object):
    def __init__(self, tracer):
        self.tracer = tracer

    def render(self, output_path=None):
        pix = ray.render_image(self.tracer)
        if output_path is None:
            return Image.fromarray(to_drawing_image(pix))
        save_image(pix, output_path)


def TwoSpheresExample(width=128, height=128):
    tracer = ray.RayTracer(width, height)
    tracer.reset_scene()
    tracer.set_background(0.2, 0.3, 0.5)
    tracer.set_ambient(0.3, 0.3, 0.3)
    tracer.set_fov(25)
    tracer.set_eye(3, 1.7, 5, 0, 0, 0, 0, 1, 0)
    tracer.add_light(0.8, 0.8, 0.8, 12, 10, 5)
    tracer.add_sphere(0, 0, 0, 0.5, 0.7, 0.7, 0.4, 0.5, 0.6, 30)
    tracer.add_sphere(0, -40, 0, 39.5, 0.2, 0.2, 0.2, 1.0, 0.0, 1)
    return ExampleSceneDef(tracer)


def ThreeSpheresExample(width=128, height=128):
    tracer = ray.RayTracer(width, height)
    tracer.reset_scene()
    tracer.set_background(0.2, 0.3, 0.5)
    tracer.set_ambient(0.2, 0.2, 0.2)
    tracer.set_fov(24)
    tracer.set_eye(3, 1.2, 5, 0, -0.4, 0, 0, 1, 0)
    tracer.add_light(0.6, 0.6, 0.6, 12, 10, 5)
    tracer.add_light(0.3, 0.3, 0.4, -10, 4, 8)
    tracer.add_sphere(-0.7, 0, 0, 0.5, 0.4, 0.4, 0.2, 1.0, 0.3, 90)
    tracer.add_sphere(0.7, 0, 0, 0.5, 0.2, 0.2, 0.5, 1.0, 0.5, 20)
    tracer.add_sphere(0, -40, 0, 39.5, 0.2, 0.2, 0.2, 1.0, 0.0, 1)
    return ExampleSceneDef(tracer)


def OrthoFriendlyExample(sphere_radius=0.25, width=128, height=128):
    # One small sphere centered at z=-0.5, lit only by ambient
    tracer = ray.RayTracer(width, height)
    tracer.reset_scene()
    tracer.set_ambient(0.5, 0.5, 0.5)
    tracer.set_background(0, 0, 0)
    tracer.set_fov(90)
    tracer.set_eye(0, 0, 0, 0, 0, -0.5, 0, 1, 0)
    tracer.add_sphere(0, 0, -0.5, sphere_radius, 0.5, 0.5, 0.5, 1.0, 0.0, 1)
    return ExampleSceneDef(tracer)
