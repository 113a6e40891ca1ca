from PIL import Image as PIM
import numpy as np

from utils import to_rgb8


class Image(object):
    """Image

    An 8-bit RGB raster, stored top row first, that can be written to disk.
    """

    def __init__(self, path=None, pixels=None):
        # You can do Image(pixels) or Image(path)
        self.file_path = None
        if isinstance(path, np.ndarray) and pixels is None:
            # if the path looks like pixels and pixels are undefined, treat the path as pixels
            pixels = path
            path = None
        self.pixels = pixels
        self.file_path = path
        if self.file_path is not None and pixels is None:
            self.loadImageData(self.file_path)

    @classmethod
    def from_render_buffer(cls, buffer):
        """Build an image from a render_image buffer.

        The buffer's first row is the bottom of the view plane, so rows are flipped
        to get the usual top-to-bottom scan order.
        """
        return cls(pixels=to_rgb8(np.flipud(buffer)))

    @property
    def pixels(self):
        return self._samples

    @pixels.setter
    def pixels(self, data):
        if data is None:
            self._samples = None
            return
        data = np.asarray(data)
        if data.ndim != 3 or data.shape[2] != 3:
            raise ValueError(f"expected an (height, width, 3) array, got shape {data.shape}")
        if data.dtype != np.uint8:
            data = to_rgb8(data)
        self._samples = data

    @property
    def shape(self):
        return self._samples.shape

    @property
    def width(self):
        return self.shape[1]

    @property
    def height(self):
        return self.shape[0]

    def loadImageData(self, path=None):
        if path:
            self.file_path = path
        if self.file_path:
            with PIM.open(fp=self.file_path) as pim:
                self.pixels = np.array(pim.convert('RGB'))

    def PIL(self):
        return PIM.fromarray(self.pixels)

    def writeToFile(self, output_path=None, **kwargs):
        """Write the image; a .ppm path gives a binary P6 file."""
        if output_path is None:
            output_path = self.file_path
        self.PIL().save(output_path, **kwargs)
        self.file_path = output_path
