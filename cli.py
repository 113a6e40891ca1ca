import argparse
import logging
import os
import sys

from ImLite import Image
from ray import RenderError, render_image
from scene import read_scene
from scene_file import GrammarError

logger = logging.getLogger(__name__)


def positive_int(text):
    if not (text.isascii() and text.isdigit()) or int(text) == 0:
        raise argparse.ArgumentTypeError(f"'{text}' is not a positive whole number")
    return int(text)


def path_with_extension(extension):
    def check(text):
        ext = os.path.splitext(text)[1]
        if ext == "":
            raise argparse.ArgumentTypeError(f"'{text}' does not have a file extension")
        if ext != extension:
            raise argparse.ArgumentTypeError(f"'{text}' is not a {extension} file")
        return text
    return check


def build_parser():
    parser = argparse.ArgumentParser(
        prog="raycast",
        description="Render a scene of spheres and planes to a PPM image, one ray per pixel.",
    )
    parser.add_argument("width", type=positive_int, help="Image width in pixels")
    parser.add_argument("height", type=positive_int, help="Image height in pixels")
    parser.add_argument("scene_file", type=path_with_extension(".json"), help="Path to the .json scene file")
    parser.add_argument("output_image", type=path_with_extension(".ppm"), help="Path of the .ppm image to write")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every object and row")
    return parser


def render(objects, width, height, output_path):
    """Render the objects and write the result to output_path."""
    pix = render_image(objects, width, height)
    im = Image.from_render_buffer(pix)
    im.writeToFile(output_path)
    logger.info("wrote %dx%d image to %s", im.width, im.height, output_path)
    return im


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        objects = read_scene(args.scene_file)
        render(objects, args.width, args.height, args.output_image)
    except (GrammarError, RenderError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: could not write {args.output_image}: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
