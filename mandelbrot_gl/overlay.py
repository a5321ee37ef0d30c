"""
Draws the pygame-rendered settings panel on top of the GL scene.

The panel surface is uploaded to a texture whenever it changes and blended
over the fractal as a screen-aligned quad.
"""

import logging

import numpy as np
import pygame

from .shader import ShaderProgram, default_gl


_LOGGER = logging.getLogger(__name__)


def panel_bounds(rect, window_size):
    """
    Convert a window-space rectangle into normalized device coordinates.

    Args:
        rect: (x, y, width, height) with the origin at the top-left
        window_size: (width, height) of the window

    Returns:
        (left, bottom, right, top) in [-1, 1], Y up
    """
    x, y, w, h = rect
    win_w, win_h = window_size
    left = 2.0 * x / win_w - 1.0
    right = 2.0 * (x + w) / win_w - 1.0
    top = 1.0 - 2.0 * y / win_h
    bottom = 1.0 - 2.0 * (y + h) / win_h
    return (left, bottom, right, top)


class OverlayRenderer:
    """Textured quad for a 2D panel drawn with pygame."""

    # Unit square as a triangle fan, counter-clockwise
    VERTICES = np.array([
        0.0, 0.0,
        1.0, 0.0,
        1.0, 1.0,
        0.0, 1.0,
    ], dtype=np.float32)

    def __init__(self, gl=None):
        self._gl = gl or default_gl()
        self.program = None
        self.vao = None
        self.vbo = None
        self.texture = None
        self.texture_size = None
        self.window_size = (1, 1)
        self.bounds_location = None
        self.sampler_location = None

    def initialize(self, vertex_source, fragment_source):
        gl = self._gl
        self.program = ShaderProgram(gl)
        self.program.add_shader_from_source('vertex', vertex_source)
        self.program.add_shader_from_source('fragment', fragment_source)
        self.program.bind_attribute_location('position', 0)
        if not self.program.link():
            _LOGGER.warning("Overlay shader unavailable; settings panel will not be shown")
            return False

        self.bounds_location = self.program.uniform_location('bounds')
        self.sampler_location = self.program.uniform_location('panel')

        self.vao = gl.glGenVertexArrays(1)
        gl.glBindVertexArray(self.vao)
        self.vbo = gl.glGenBuffers(1)
        gl.glBindBuffer(gl.GL_ARRAY_BUFFER, self.vbo)
        gl.glBufferData(gl.GL_ARRAY_BUFFER, self.VERTICES.nbytes,
                        self.VERTICES, gl.GL_STATIC_DRAW)
        gl.glEnableVertexAttribArray(0)
        gl.glVertexAttribPointer(0, 2, gl.GL_FLOAT, gl.GL_FALSE,
                                 2 * self.VERTICES.itemsize, None)
        gl.glBindVertexArray(0)
        gl.glBindBuffer(gl.GL_ARRAY_BUFFER, 0)

        self.texture = gl.glGenTextures(1)
        gl.glBindTexture(gl.GL_TEXTURE_2D, self.texture)
        gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_MIN_FILTER, gl.GL_NEAREST)
        gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_MAG_FILTER, gl.GL_NEAREST)
        gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_WRAP_S, gl.GL_CLAMP_TO_EDGE)
        gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_WRAP_T, gl.GL_CLAMP_TO_EDGE)
        gl.glBindTexture(gl.GL_TEXTURE_2D, 0)
        return True

    @property
    def is_ready(self):
        return self.program is not None and self.program.is_linked and self.texture is not None

    def resize(self, width, height):
        self.window_size = (max(1, width), max(1, height))

    def upload(self, surface):
        """Copy a pygame surface into the panel texture."""
        if not self.is_ready:
            return
        gl = self._gl
        width, height = surface.get_size()
        # Flipped so the first row is the bottom one, as GL expects
        data = pygame.image.tobytes(surface, 'RGBA', True)
        gl.glBindTexture(gl.GL_TEXTURE_2D, self.texture)
        gl.glPixelStorei(gl.GL_UNPACK_ALIGNMENT, 1)
        gl.glTexImage2D(gl.GL_TEXTURE_2D, 0, gl.GL_RGBA, width, height, 0,
                        gl.GL_RGBA, gl.GL_UNSIGNED_BYTE, data)
        gl.glBindTexture(gl.GL_TEXTURE_2D, 0)
        self.texture_size = (width, height)

    def draw(self, position):
        """Blend the panel with its top-left corner at a window position."""
        if not self.is_ready or self.texture_size is None:
            return
        gl = self._gl
        rect = (position[0], position[1]) + tuple(self.texture_size)

        gl.glDisable(gl.GL_DEPTH_TEST)
        gl.glEnable(gl.GL_BLEND)
        gl.glBlendFunc(gl.GL_SRC_ALPHA, gl.GL_ONE_MINUS_SRC_ALPHA)

        self.program.bind()
        if self.bounds_location is not None:
            self.program.set_uniform_value(self.bounds_location,
                                           panel_bounds(rect, self.window_size))
        if self.sampler_location is not None:
            self.program.set_uniform_value(self.sampler_location, 0)
        gl.glActiveTexture(gl.GL_TEXTURE0)
        gl.glBindTexture(gl.GL_TEXTURE_2D, self.texture)
        gl.glBindVertexArray(self.vao)
        gl.glDrawArrays(gl.GL_TRIANGLE_FAN, 0, 4)
        gl.glBindVertexArray(0)
        gl.glBindTexture(gl.GL_TEXTURE_2D, 0)
        self.program.release()

        gl.glDisable(gl.GL_BLEND)
        gl.glEnable(gl.GL_DEPTH_TEST)

    def release(self):
        gl = self._gl
        if self.program is not None:
            self.program.delete()
            self.program = None
        if self.texture is not None:
            gl.glDeleteTextures([self.texture])
            self.texture = None
        if self.vbo is not None:
            gl.glDeleteBuffers(1, [self.vbo])
            self.vbo = None
        if self.vao is not None:
            gl.glDeleteVertexArrays(1, [self.vao])
            self.vao = None
