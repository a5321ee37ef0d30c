"""
GPU fractal renderer.

The FractalRenderer class handles:
- Building the shader program and the static full-screen quad
- The per-frame sequence (clear, bind, push uniforms, draw, release)
- Viewport changes on window resize
- Continuous redraw in animated mode
- Freeing GPU resources on shutdown

Nothing here raises when the shader is broken: an unlinked program turns
every frame into a plain clear.
"""

import logging

import numpy as np

from .shader import ShaderProgram, default_gl
from .timing import PerformanceSampler
from .uniforms import UniformSync


_LOGGER = logging.getLogger(__name__)


class FractalRenderer:
    """
    Draws the fractal for a ViewportState.

    Usage:
        renderer = FractalRenderer(state, sampler, on_redraw=app.request_redraw)
        renderer.initialize(vertex_source, fragment_source)

        # Whenever a redraw was requested:
        renderer.render()

    Attributes:
        state: ViewportState shared with the interaction controller
        sampler: PerformanceSampler wrapping every frame
        animated: Request a new frame after each one (the shader uses `time`)
        program: The ShaderProgram (None before initialize())
    """

    # Two triangles covering the viewport, counter-clockwise
    VERTICES = np.array([
        -1.0, -1.0,
         1.0,  1.0,
        -1.0,  1.0,
         1.0, -1.0,
    ], dtype=np.float32)
    INDICES = np.array([0, 1, 2, 0, 3, 1], dtype=np.uint32)

    POSITION_ATTRIBUTE = 0

    def __init__(self, state, sampler=None, gl=None, animated=True,
                 on_redraw=None, wall_clock=None):
        """
        Initialize the renderer. No GL calls are made until initialize().

        Args:
            state: ViewportState to render
            sampler: PerformanceSampler (a private one is created if omitted)
            gl: GL function table (default: PyOpenGL)
            animated: Keep requesting frames continuously
            on_redraw: Callable used to request another frame
            wall_clock: Milliseconds-since-epoch source for the time uniform
        """
        self.state = state
        self.sampler = sampler or PerformanceSampler()
        self.animated = animated
        self.on_redraw = on_redraw
        self._gl = gl or default_gl()
        self.uniforms = UniformSync(wall_clock)

        self.program = None
        self.vao = None
        self.vbo = None
        self.ibo = None

    @property
    def is_ready(self):
        return self.program is not None and self.program.is_linked

    def initialize(self, vertex_source, fragment_source):
        """
        Create the program and quad geometry. Must run with the context current.

        Returns:
            True if the program linked
        """
        gl = self._gl

        # Configure shaders
        self.program = ShaderProgram(gl)
        self.program.add_shader_from_source('vertex', vertex_source)
        self.program.add_shader_from_source('fragment', fragment_source)
        self.program.bind_attribute_location('position', self.POSITION_ATTRIBUTE)
        linked = self.program.link()

        # Quad geometry
        self.vao = gl.glGenVertexArrays(1)
        gl.glBindVertexArray(self.vao)

        self.vbo = gl.glGenBuffers(1)
        gl.glBindBuffer(gl.GL_ARRAY_BUFFER, self.vbo)
        gl.glBufferData(gl.GL_ARRAY_BUFFER, self.VERTICES.nbytes,
                        self.VERTICES, gl.GL_STATIC_DRAW)

        self.ibo = gl.glGenBuffers(1)
        gl.glBindBuffer(gl.GL_ELEMENT_ARRAY_BUFFER, self.ibo)
        gl.glBufferData(gl.GL_ELEMENT_ARRAY_BUFFER, self.INDICES.nbytes,
                        self.INDICES, gl.GL_STATIC_DRAW)

        gl.glEnableVertexAttribArray(self.POSITION_ATTRIBUTE)
        gl.glVertexAttribPointer(self.POSITION_ATTRIBUTE, 2, gl.GL_FLOAT,
                                 gl.GL_FALSE, 2 * self.VERTICES.itemsize, None)

        if linked:
            self.uniforms.locate(self.program)
            missing = [name for name, loc in self.uniforms.locations.items() if loc is None]
            if missing:
                _LOGGER.info("Shader does not use uniforms: %s", ", ".join(missing))

        # Release all (VAO first so it keeps the element buffer binding)
        gl.glBindVertexArray(0)
        gl.glBindBuffer(gl.GL_ARRAY_BUFFER, 0)
        gl.glBindBuffer(gl.GL_ELEMENT_ARRAY_BUFFER, 0)

        gl.glEnable(gl.GL_DEPTH_TEST)
        gl.glEnable(gl.GL_CULL_FACE)
        gl.glClear(gl.GL_COLOR_BUFFER_BIT | gl.GL_DEPTH_BUFFER_BIT)
        return linked

    def render(self):
        """Draw one frame."""
        gl = self._gl
        with self.sampler.capture():
            gl.glClear(gl.GL_COLOR_BUFFER_BIT | gl.GL_DEPTH_BUFFER_BIT)

            if self.is_ready:
                self.program.bind()
                gl.glBindVertexArray(self.vao)

                self.uniforms.push(self.program, self.state)
                gl.glDrawElements(gl.GL_TRIANGLES, len(self.INDICES),
                                  gl.GL_UNSIGNED_INT, None)

                gl.glBindVertexArray(0)
                self.program.release()

            # Counts frame cadence, not draw success
            self.sampler.count_frame()

            if self.animated:
                self.request_redraw()

    def resize(self, width, height):
        """Apply a new surface size and push it to the shader right away."""
        self.state.set_resolution(width, height)
        width, height = self.state.resolution
        self._gl.glViewport(0, 0, int(width), int(height))

        if self.is_ready:
            self.program.bind()
            self.uniforms.push(self.program, self.state)
            self.program.release()

    def request_redraw(self):
        if self.on_redraw is not None:
            self.on_redraw()

    def release(self):
        """Free GPU resources. The GL context must still be current."""
        gl = self._gl
        if self.program is not None:
            self.program.delete()
            self.program = None
        for name in ('vbo', 'ibo'):
            buffer = getattr(self, name)
            if buffer is not None:
                gl.glDeleteBuffers(1, [buffer])
                setattr(self, name, None)
        if self.vao is not None:
            gl.glDeleteVertexArrays(1, [self.vao])
            self.vao = None
