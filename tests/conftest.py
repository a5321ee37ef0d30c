import os

# Let pygame run without a display
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pytest

from mandelbrot_gl.viewport import ViewportState


class GLConstant(str):
    """A GL enum stand-in that still supports bitmask OR."""

    def __or__(self, other):
        return GLConstant(f"{self}|{other}")


class FakeGL:
    """
    Records GL calls instead of issuing them.

    Any GL_* constant resolves to its own name. Any gl* function not defined
    below is accepted and recorded with a None result.
    """

    def __init__(self, compile_ok=True, link_ok=True, uniforms=None):
        self.compile_ok = compile_ok
        self.link_ok = link_ok
        # Uniform name -> location exposed by the "compiled" program
        self.uniforms = dict(uniforms) if uniforms is not None else {
            "resolution": 0,
            "offset": 1,
            "zoom": 2,
            "time": 3,
            "maxIterations": 4,
        }
        self.calls = []
        self.uniform_values = {}
        self._next_handle = 1

    def __getattr__(self, name):
        if name.startswith("GL_"):
            return GLConstant(name)
        if name.startswith("gl"):
            def record(*args):
                self.calls.append((name, args))
            return record
        raise AttributeError(name)

    def _handle(self, name, args):
        self.calls.append((name, args))
        handle = self._next_handle
        self._next_handle += 1
        return handle

    def names(self):
        return [name for name, _ in self.calls]

    def count(self, name):
        return self.names().count(name)

    def glCreateShader(self, *args):
        return self._handle("glCreateShader", args)

    def glCreateProgram(self, *args):
        return self._handle("glCreateProgram", args)

    def glGenBuffers(self, *args):
        return self._handle("glGenBuffers", args)

    def glGenVertexArrays(self, *args):
        return self._handle("glGenVertexArrays", args)

    def glGenTextures(self, *args):
        return self._handle("glGenTextures", args)

    def glGetShaderiv(self, shader, pname):
        self.calls.append(("glGetShaderiv", (shader, pname)))
        return 1 if self.compile_ok else 0

    def glGetShaderInfoLog(self, shader):
        return b"0:1: syntax error"

    def glGetProgramiv(self, program, pname):
        self.calls.append(("glGetProgramiv", (program, pname)))
        return 1 if self.link_ok else 0

    def glGetProgramInfoLog(self, program):
        return b"link error"

    def glGetUniformLocation(self, program, name):
        self.calls.append(("glGetUniformLocation", (program, name)))
        return self.uniforms.get(name, -1)

    def _set_uniform(self, name, location, *values):
        self.calls.append((name, (location,) + values))
        self.uniform_values[location] = values[0] if len(values) == 1 else values

    def glUniform1f(self, location, value):
        self._set_uniform("glUniform1f", location, value)

    def glUniform1i(self, location, value):
        self._set_uniform("glUniform1i", location, value)

    def glUniform2f(self, location, x, y):
        self._set_uniform("glUniform2f", location, x, y)

    def glUniform4f(self, location, x, y, z, w):
        self._set_uniform("glUniform4f", location, x, y, z, w)


class FakeClock:
    """Manually advanced millisecond clock."""

    def __init__(self, start=0.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, ms):
        self.now += ms


@pytest.fixture
def gl():
    return FakeGL()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def state():
    return ViewportState()
