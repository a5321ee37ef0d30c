"""
View state shared by the interaction controller and the renderer.

ViewportState is plain data: the drawable size, the fractal-space point
shown at the screen center, the zoom factor and the shader iteration cap.
"""

from dataclasses import dataclass


# Iteration range exposed by the settings slider
MIN_ITERATIONS = 10
MAX_ITERATIONS = 2000


def clamp_iterations(value, minimum=MIN_ITERATIONS, maximum=MAX_ITERATIONS):
    """Clamp an iteration count into [minimum, maximum]."""
    return max(minimum, min(maximum, int(value)))


@dataclass
class ViewportState:
    """
    Current view parameters.

    Attributes:
        resolution: (width, height) of the drawable surface in pixels
        offset: Fractal-space point mapped to the screen center
        zoom: Scale factor; one screen height spans 2/zoom fractal units
        max_iterations: Iteration cap passed to the shader
    """

    resolution: tuple = (640.0, 480.0)
    offset: tuple = (0.0, 0.0)
    zoom: float = 1.0
    max_iterations: int = 100

    def set_resolution(self, width, height):
        """Store a new surface size, never letting a dimension drop below 1."""
        self.resolution = (float(max(1, width)), float(max(1, height)))

    def set_max_iterations(self, value, minimum=MIN_ITERATIONS,
                           maximum=MAX_ITERATIONS):
        """
        Set the iteration cap, clamped to the allowed range.

        Returns:
            The value actually stored
        """
        self.max_iterations = clamp_iterations(value, minimum, maximum)
        return self.max_iterations

    @property
    def aspect_ratio(self):
        """Width divided by height of the drawable surface."""
        width, height = self.resolution
        return width / height
