import logging

import numpy as np
from geometry import Kind, Camera, Sphere, Plane
from scene_file import GrammarError, InputStream, SourceLocation, read_records

"""
Builds the list of scene objects from the records of a scene description,
checking every field against the rules for its object kind.
"""

logger = logging.getLogger(__name__)

# Largest number of objects, besides the camera, a scene may hold.
MAX_OBJECTS = 128

REQUIRED_FIELDS = {
    Kind.CAMERA: {"width", "height"},
    Kind.SPHERE: {"position", "radius", "color"},
    Kind.PLANE: {"position", "normal", "color"},
}

NUMBER_FIELDS = {"width", "height", "radius"}
VECTOR_FIELDS = {"position", "normal", "color"}


class SceneError(GrammarError):
    """A scene description that is well formed but does not describe a valid scene."""


def _check_value(key, value, location):
    if key in NUMBER_FIELDS:
        if not isinstance(value, float):
            raise SceneError(location, f"\"{key}\" must be a number")
        if key in ("width", "height") and not value > 0:
            raise SceneError(location, f"camera {key} must be greater than 0, got {value}")
    elif key in VECTOR_FIELDS:
        if not isinstance(value, np.ndarray):
            raise SceneError(location, f"\"{key}\" must be a vector of 3 numbers")
        if key == "color" and not np.all((value >= 0.0) & (value <= 1.0)):
            raise SceneError(location, f"color components must lie in [0, 1], got {value.tolist()}")
        if key == "normal":
            length = np.linalg.norm(value)
            if not length > 0 or not np.isfinite(length):
                raise SceneError(location, "plane normal must have a finite, non-zero length")
            value = value / length
    return value


def build_object(record):
    """Turn one record into a Camera, Sphere or Plane.

    The first field must be "type". Each required field of the kind must then appear
    exactly once; unknown keys and out-of-range values are rejected as soon as they are seen.
    """
    first = record.fields[0]
    if first.key != "type":
        raise SceneError(first.location, "expected \"type\" as the first key")
    if not isinstance(first.value, str):
        raise SceneError(first.location, "\"type\" must be a string")
    try:
        kind = Kind(first.value)
    except ValueError:
        raise SceneError(first.location, f"unknown type, \"{first.value}\"") from None

    missing = set(REQUIRED_FIELDS[kind])
    values = {}
    for field in record.fields[1:]:
        if field.key not in REQUIRED_FIELDS[kind]:
            raise SceneError(field.location, f"unknown property, \"{field.key}\", for {kind.value}")
        if field.key not in missing:
            raise SceneError(field.location, f"property \"{field.key}\" given more than once")
        values[field.key] = _check_value(field.key, field.value, field.location)
        missing.discard(field.key)

    if missing:
        names = ", ".join(sorted(missing))
        raise SceneError(record.location, f"{kind.value} is missing required properties: {names}")

    if kind is Kind.CAMERA:
        return Camera(values["width"], values["height"])
    elif kind is Kind.SPHERE:
        return Sphere(values["position"], values["radius"], values["color"])
    elif kind is Kind.PLANE:
        return Plane(values["position"], values["normal"], values["color"])
    raise AssertionError(f"unhandled kind {kind}")


def load_objects(records, file_name=""):
    """Build the ordered object list for a scene.

    Parameters:
      records : iterable of Record -- parsed scene description
      file_name : str -- used in the error for an empty scene
    Return:
      list -- the camera and every other object, in file order
    """
    objects = []
    camera_location = None
    n_others = 0
    last_location = SourceLocation(file_name=file_name)
    for record in records:
        last_location = record.location
        obj = build_object(record)
        if obj.kind is Kind.CAMERA:
            if camera_location is not None:
                raise SceneError(record.location, f"scene already has a camera, defined at {camera_location}")
            camera_location = record.location
        else:
            n_others += 1
            if n_others > MAX_OBJECTS:
                raise SceneError(
                    record.location,
                    f"too many objects: at most {MAX_OBJECTS} are allowed besides the camera",
                )
        logger.debug("loaded %r", obj)
        objects.append(obj)

    if not objects:
        raise SceneError(last_location, "the scene contains no objects")
    if camera_location is None:
        raise SceneError(last_location, "the scene has no camera")
    return objects


def parse_scene(stream, file_name=""):
    """Read and validate a scene from an open text stream."""
    return load_objects(read_records(InputStream(stream, file_name=file_name)), file_name=file_name)


def read_scene(path):
    """Read and validate the scene stored in the file at `path`."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            objects = parse_scene(f, file_name=str(path))
    except OSError as e:
        raise SceneError(SourceLocation(file_name=str(path)), f"could not open file: {e.strerror}") from e
    logger.info("read %d objects from %s", len(objects), path)
    return objects
