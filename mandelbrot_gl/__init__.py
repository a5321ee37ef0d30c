"""
GPU Mandelbrot Viewer Package

An interactive Mandelbrot set explorer that evaluates the fractal in an
OpenGL fragment shader, using Pygame for the window and PyOpenGL for GL
calls.

Quick Start:
    from mandelbrot_gl import run
    run()

Or from command line:
    python -m mandelbrot_gl

Package Structure:
    - viewport.py: View state (resolution, offset, zoom, iterations)
    - transform.py: Pixel <-> fractal-space coordinate mapping
    - interaction.py: Pan and zoom-to-cursor input handling
    - uniforms.py: View state -> shader uniform upload
    - timing.py: Frame-rate sampling
    - shader.py: Shader program wrapper
    - renderer.py: Per-frame render sequence
    - menu.py / overlay.py: Settings panel and its on-screen drawing
    - config.py: settings.json loading
    - app.py: Main application and event loop

Controls:
    - Scroll: Zoom in/out at mouse position
    - Drag: Pan around
    - Up/Down, PageUp/PageDown: Change iteration count
    - A: Toggle animation
    - R: Reset to default view
    - ESC: Quit
"""

from .app import run, FractalViewerApp
from .interaction import InteractionController, PointerState
from .renderer import FractalRenderer
from .shader import ShaderProgram, ShaderError
from .timing import PerformanceSampler, FrameTimingState
from .transform import pixel_delta_to_fractal_delta, pixel_to_fractal, fractal_to_pixel
from .uniforms import UniformSync, UNIFORM_NAMES
from .viewport import ViewportState, clamp_iterations

__version__ = "1.0.0"
__all__ = [
    "run",
    "FractalViewerApp",
    "InteractionController",
    "PointerState",
    "FractalRenderer",
    "ShaderProgram",
    "ShaderError",
    "PerformanceSampler",
    "FrameTimingState",
    "pixel_delta_to_fractal_delta",
    "pixel_to_fractal",
    "fractal_to_pixel",
    "UniformSync",
    "UNIFORM_NAMES",
    "ViewportState",
    "clamp_iterations",
]
