"""
Pixel <-> fractal-space coordinate mapping.

Screen pixels have their origin at the top-left corner with Y growing
downward. Fractal space has Y growing upward and the current offset at the
screen center. One screen height always spans 2/zoom fractal units; the
horizontal axis is scaled by the aspect ratio so a non-square window does
not stretch the image.

These must stay in sync with the coordinate setup in shaders/fragment.glsl.
"""


def pixel_delta_to_fractal_delta(pixel_delta, resolution, zoom):
    """
    Convert a pixel displacement into a fractal-space displacement.

    Args:
        pixel_delta: (dx, dy) in screen pixels
        resolution: (width, height) of the surface
        zoom: Current zoom factor

    Returns:
        (dx, dy) in fractal units, Y inverted
    """
    dx, dy = pixel_delta
    scale = 2.0 / (resolution[1] * zoom)
    return (dx * scale, -dy * scale)


def pixel_to_normalized(pixel_pos, resolution):
    """Map a pixel position to aspect-corrected device coordinates."""
    width, height = resolution
    px, py = pixel_pos
    ndc_x = 2.0 * px / width - 1.0
    ndc_y = 1.0 - 2.0 * py / height  # Flip Y
    return (ndc_x * (width / height), ndc_y)


def pixel_to_fractal(pixel_pos, resolution, offset, zoom):
    """
    Convert a pixel position into the fractal-space point drawn there.

    Args:
        pixel_pos: (x, y) in screen pixels
        resolution: (width, height) of the surface
        offset: Fractal-space point at the screen center
        zoom: Current zoom factor

    Returns:
        (x, y) in fractal space
    """
    ndc_x, ndc_y = pixel_to_normalized(pixel_pos, resolution)
    return (offset[0] + ndc_x / zoom, offset[1] + ndc_y / zoom)


def fractal_to_pixel(point, resolution, offset, zoom):
    """Inverse of pixel_to_fractal."""
    width, height = resolution
    ndc_x = (point[0] - offset[0]) * zoom / (width / height)
    ndc_y = (point[1] - offset[1]) * zoom
    return ((ndc_x + 1.0) * width / 2.0, (1.0 - ndc_y) * height / 2.0)
