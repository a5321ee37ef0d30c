"""
Viewport state -> shader uniform synchronization.

A conforming fragment shader declares these uniforms by name:

    uniform vec2  resolution;
    uniform vec2  offset;
    uniform float zoom;
    uniform float time;
    uniform int   maxIterations;

Any of them may be missing from the compiled program (unused uniforms are
stripped by the GLSL compiler); missing slots are skipped.
"""

import time as _time


UNIFORM_NAMES = ("resolution", "offset", "zoom", "time", "maxIterations")

# Period of the animation phase in milliseconds (about 2*pi*10 s)
TIME_PERIOD_MS = 2 * 31415


def wall_clock_ms():
    return int(_time.time() * 1000)


def animation_time(now_ms):
    """Bounded animation phase for the `time` uniform."""
    return float(int(now_ms) % TIME_PERIOD_MS)


class UniformSync:
    """
    Caches uniform locations for a program and pushes view state into them.

    Attributes:
        locations: Dict of uniform name -> location, or None when absent
    """

    def __init__(self, wall_clock=None):
        """
        Args:
            wall_clock: Callable returning milliseconds since the epoch
                (default: time.time scaled to ms)
        """
        self._wall_clock = wall_clock or wall_clock_ms
        self.locations = dict.fromkeys(UNIFORM_NAMES)

    def locate(self, program):
        """Look up every uniform slot in a freshly linked program."""
        self.locations = {name: program.uniform_location(name) for name in UNIFORM_NAMES}
        return self.locations

    def values(self, state):
        """Uniform values for the given ViewportState, keyed by name."""
        return {
            "resolution": tuple(state.resolution),
            "offset": tuple(state.offset),
            "zoom": float(state.zoom),
            "time": animation_time(self._wall_clock()),
            "maxIterations": int(state.max_iterations),
        }

    def push(self, program, state):
        """
        Upload the current state. Does nothing if the program is not linked.

        The program must already be bound.
        """
        if program is None or not program.is_linked:
            return
        for name, value in self.values(state).items():
            location = self.locations.get(name)
            if location is None:
                continue
            program.set_uniform_value(location, value)
