import numpy as np
from PIL import Image

def vec(list):
    """Handy shorthand to make a double-precision float array."""
    return np.array(list, dtype=np.float64)

def normalize(v):
    """Return a unit vector in the direction of the vector v.

    A zero vector is scaled by infinity instead of raising, so its
    components come out as nan (or +-inf) and flow on through the shading.
    """
    mag = np.linalg.norm(v)
    div = np.inf if mag == 0 else 1.0 / mag
    with np.errstate(invalid='ignore'):
        return div * v


def white():
    return vec([1.0, 1.0, 1.0])

def black():
    return vec([0.0, 0.0, 0.0])


def to_drawing_color(c):
    """Map an unclamped color to an (r, g, b) tuple of ints in 0..255 (nan maps to 0)."""
    return tuple(int(x) for x in np.floor(np.clip(np.nan_to_num(c), 0, 1) * 255))

def to_drawing_image(img):
    """Map an (h, w, 3) float image to uint8 the same way as to_drawing_color."""
    return np.floor(np.clip(np.nan_to_num(img), 0, 1) * 255).astype(np.uint8)

def save_image(img, output_path):
    """Write an unclamped float image to disk (format taken from the extension)."""
    pil_img = Image.fromarray(to_drawing_image(img))
    pil_img.save(output_path)
    print(f"Image saved to {output_path}")
