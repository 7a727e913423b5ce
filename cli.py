import argparse
from ray import RayTracer, render_image
from utils import save_image

DEFAULT_WIDTH = 256
DEFAULT_HEIGHT = 256

# scene file command -> number of numeric arguments
COMMANDS = {
    "reset_scene": 0,
    "add_light": 6,
    "set_ambient": 3,
    "set_background": 3,
    "set_fov": 1,
    "set_eye": 9,
    "add_sphere": 10,
}


def load_scene_file(file_path, tracer):
    """Replay the commands in a scene file on the given tracer.

    One command per line, e.g. "add_sphere 0 0 -3 1 1 0 0 0.2 0.5 20";
    blank lines and lines starting with # are skipped.
    """
    with open(file_path, 'r') as f:
        for line_no, line in enumerate(f, 1):
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            parts = line.split()
            command = parts[0]
            if command not in COMMANDS:
                raise ValueError("{}:{}: unknown command: {}".format(file_path, line_no, command))
            if len(parts) - 1 != COMMANDS[command]:
                raise ValueError("{}:{}: {} takes {} arguments, got {}".format(
                    file_path, line_no, command, COMMANDS[command], len(parts) - 1))
            params = [float(p) for p in parts[1:]]
            getattr(tracer, command)(*params)
    return tracer


def render(tracer, output_path="render.png"):
    """Ray trace every pixel of the tracer's screen and save the image."""
    print(f"Scene: {len(tracer.scene.surfs)} spheres, {len(tracer.scene.lights)} lights")
    print(f"Rendering {tracer.screen_width}x{tracer.screen_height} image...")
    image_array = render_image(tracer)
    save_image(image_array, output_path)
    return image_array


def main(argv=None):
    parser = argparse.ArgumentParser(description='Phong sphere ray tracer')
    parser.add_argument('scene_file', type=str, help='Path to the scene file')
    parser.add_argument('output_image', type=str, help='Name of the output image file')
    parser.add_argument('--width', type=int, default=DEFAULT_WIDTH, help='Number of pixels across')
    parser.add_argument('--height', type=int, default=DEFAULT_HEIGHT, help='Number of pixels down')
    parser.add_argument('--near', type=float, default=None,
                        help='Ignore hits closer than this along each eye ray '
                             '(default: accept hits behind the eye too)')
    args = parser.parse_args(argv)

    tracer = RayTracer(args.width, args.height, near=args.near)
    try:
        load_scene_file(args.scene_file, tracer)
    except (OSError, ValueError) as e:
        parser.error(str(e))

    render(tracer, args.output_image)


if __name__ == '__main__':
    main()
