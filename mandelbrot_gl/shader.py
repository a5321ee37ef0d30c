"""
Thin wrapper around an OpenGL shader program.

ShaderProgram collects shader stages, links them and exposes uniform lookup
and upload. Compile errors surface as ShaderError inside the class; link()
reports failure through its return value so callers can keep running with
an unlinked program.

The GL function table is injectable (gl=...). By default PyOpenGL's
OpenGL.GL module is used; it is imported lazily so that the rest of the
package can be imported without a GL library present.
"""

import logging


_LOGGER = logging.getLogger(__name__)


class ShaderError(RuntimeError):
    """A shader stage failed to compile or the program failed to link."""


def default_gl():
    """Return PyOpenGL's GL namespace."""
    from OpenGL import GL
    return GL


def _to_text(log):
    if isinstance(log, bytes):
        return log.decode('utf-8', errors='replace')
    return str(log or '')


class ShaderProgram:
    """
    A linked (or not yet linked) GL program.

    Usage:
        program = ShaderProgram()
        program.add_shader_from_file('vertex', 'shaders/vertex.glsl')
        program.add_shader_from_file('fragment', 'shaders/fragment.glsl')
        program.bind_attribute_location('position', 0)
        if program.link():
            loc = program.uniform_location('zoom')
    """

    STAGES = {
        'vertex': 'GL_VERTEX_SHADER',
        'fragment': 'GL_FRAGMENT_SHADER',
    }

    def __init__(self, gl=None):
        self._gl = gl or default_gl()
        self._sources = []
        self._attributes = {}
        self.handle = None
        self.linked = False
        self.log = ''

    @property
    def is_linked(self):
        return self.handle is not None and self.linked

    def add_shader_from_source(self, stage, source):
        """
        Queue a shader stage for the next link().

        Args:
            stage: 'vertex' or 'fragment'
            source: GLSL source text
        """
        if stage not in self.STAGES:
            raise ValueError(f"Unknown shader stage: {stage!r}")
        self._sources.append((stage, source))

    def add_shader_from_file(self, stage, path):
        with open(path, 'r') as f:
            self.add_shader_from_source(stage, f.read())

    def bind_attribute_location(self, name, index):
        """Bind a vertex attribute to a fixed index; applied at link time."""
        self._attributes[name] = index

    def link(self):
        """
        Compile all queued stages and link them.

        Returns:
            True on success. On failure the error is logged, the program
            stays unlinked and False is returned.
        """
        gl = self._gl
        self.delete()
        try:
            shaders = [self._compile(stage, source) for stage, source in self._sources]
        except ShaderError as e:
            self.log = str(e)
            _LOGGER.error("Shader compilation failed: %s", e)
            return False

        program = gl.glCreateProgram()
        for shader in shaders:
            gl.glAttachShader(program, shader)
        for name, index in self._attributes.items():
            gl.glBindAttribLocation(program, index, name.encode('ascii'))
        gl.glLinkProgram(program)

        # Stages are owned by the program once linked
        for shader in shaders:
            gl.glDeleteShader(shader)

        if not gl.glGetProgramiv(program, gl.GL_LINK_STATUS):
            self.log = _to_text(gl.glGetProgramInfoLog(program))
            _LOGGER.error("Shader program failed to link: %s", self.log)
            gl.glDeleteProgram(program)
            return False

        self.handle = program
        self.linked = True
        self.log = ''
        return True

    def _compile(self, stage, source):
        gl = self._gl
        shader = gl.glCreateShader(getattr(gl, self.STAGES[stage]))
        gl.glShaderSource(shader, source)
        gl.glCompileShader(shader)
        if not gl.glGetShaderiv(shader, gl.GL_COMPILE_STATUS):
            log = _to_text(gl.glGetShaderInfoLog(shader))
            gl.glDeleteShader(shader)
            raise ShaderError(f"{stage} shader: {log}")
        return shader

    def bind(self):
        if self.is_linked:
            self._gl.glUseProgram(self.handle)

    def release(self):
        self._gl.glUseProgram(0)

    def uniform_location(self, name):
        """
        Look up a uniform slot.

        Returns:
            The location, or None if the linked program does not expose
            the uniform (it may have been optimized away).
        """
        if not self.is_linked:
            return None
        location = self._gl.glGetUniformLocation(self.handle, name)
        if location is None or location < 0:
            return None
        return location

    def set_uniform_value(self, location, value):
        """
        Upload a value to a uniform slot; the GL call is chosen by type.

        ints map to glUniform1i, floats to glUniform1f, and 2- or
        4-element sequences to glUniform2f / glUniform4f.
        """
        gl = self._gl
        if isinstance(value, (tuple, list)):
            if len(value) == 2:
                gl.glUniform2f(location, float(value[0]), float(value[1]))
            elif len(value) == 4:
                gl.glUniform4f(location, *(float(v) for v in value))
            else:
                raise ValueError(f"Unsupported uniform vector size: {len(value)}")
        elif isinstance(value, int):
            gl.glUniform1i(location, value)
        else:
            gl.glUniform1f(location, float(value))

    def delete(self):
        """Free the GL program object. Safe to call more than once."""
        if self.handle is not None:
            self._gl.glDeleteProgram(self.handle)
        self.handle = None
        self.linked = False
