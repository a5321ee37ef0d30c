"""
Main application module for the GPU Mandelbrot viewer.

Contains the FractalViewerApp class which handles:
- Window and OpenGL context setup and the main loop
- Routing input to the settings menu and the interaction controller
- Coalescing redraw requests into at most one frame per loop pass
- Releasing GPU resources on exit
"""

import logging

import pygame

from .config import load_settings, read_shader
from .interaction import InteractionController
from .menu import Menu
from .overlay import OverlayRenderer
from .renderer import FractalRenderer
from .shader import default_gl
from .timing import PerformanceSampler
from .viewport import ViewportState


_LOGGER = logging.getLogger(__name__)


class FractalViewerApp:
    """
    Main application class for the GPU Mandelbrot viewer.

    Handles the pygame window, event loop, and coordinates between
    the interaction controller, the renderer and the menu.
    """

    MENU_MARGIN = 10

    def __init__(self, width=None, height=None, max_iter=None, settings=None,
                 gl=None):
        """
        Initialize the application.

        Args:
            width: Window width in pixels (default from settings)
            height: Window height in pixels (default from settings)
            max_iter: Initial iteration cap (default from settings)
            settings: Settings dict (default: load_settings())
            gl: GL function table for the renderers (default: PyOpenGL)
        """
        self.settings = settings or load_settings()
        self._gl = gl
        window = self.settings['window']
        iterations = self.settings['iterations']
        view = self.settings['view']

        self.width = width or window['width']
        self.height = height or window['height']
        self.title = window['title']
        self.iter_range = (iterations['min'], iterations['max'])

        # View state
        self.state = ViewportState(
            resolution=(float(self.width), float(self.height)),
            offset=tuple(view['offset']),
            zoom=float(view['zoom']),
        )
        self.state.set_max_iterations(max_iter or iterations['default'], *self.iter_range)

        # Pygame state (initialized in run())
        self.screen = None

        # Components
        self.sampler = None
        self.controller = None
        self.renderer = None
        self.overlay = None
        self.menu = None

        self.redraw_requested = True
        self.running = False

    def request_redraw(self):
        """Ask for a frame on the next loop pass; repeated requests collapse."""
        self.redraw_requested = True

    def run(self):
        """Run the application main loop."""
        self._init_pygame()
        try:
            self._init_components()

            self.running = True
            while self.running:
                self._tick()
        finally:
            self._shutdown()

    def _tick(self):
        """One loop pass: drain events, then draw at most one frame."""
        self._handle_events()

        if self.redraw_requested:
            self.redraw_requested = False
            self._draw()

    def _init_pygame(self):
        """Initialize pygame and create an OpenGL window."""
        pygame.init()
        pygame.display.gl_set_attribute(pygame.GL_CONTEXT_MAJOR_VERSION, 3)
        pygame.display.gl_set_attribute(pygame.GL_CONTEXT_MINOR_VERSION, 3)
        pygame.display.gl_set_attribute(pygame.GL_CONTEXT_PROFILE_MASK,
                                        pygame.GL_CONTEXT_PROFILE_CORE)
        pygame.display.gl_set_attribute(pygame.GL_CONTEXT_FORWARD_COMPATIBLE_FLAG, True)
        pygame.display.gl_set_attribute(pygame.GL_DEPTH_SIZE, 24)

        self.screen = pygame.display.set_mode(
            (self.width, self.height),
            pygame.OPENGL | pygame.DOUBLEBUF | pygame.RESIZABLE
        )
        pygame.display.set_caption(self.title)

        gl = default_gl()
        version = gl.glGetString(gl.GL_VERSION)
        _LOGGER.info("OpenGL version: %s", version.decode() if version else "unknown")

    def _init_components(self):
        """Create the controller, renderer, overlay and menu."""
        self.sampler = PerformanceSampler(clock=pygame.time.get_ticks)
        self.sampler.add_listener(self._on_fps)

        self.controller = InteractionController(
            self.state,
            on_redraw=self.request_redraw,
            zoom_factor=self.settings['zoom_factor'],
        )

        self.renderer = FractalRenderer(
            self.state,
            self.sampler,
            animated=self.settings['animated'],
            gl=self._gl,
            on_redraw=self.request_redraw,
        )
        if not self.renderer.initialize(read_shader('vertex.glsl'),
                                        read_shader('fragment.glsl')):
            pygame.display.set_caption(f"{self.title} - shader failed to link")
        self.renderer.resize(self.width, self.height)

        # Menu in top-left corner
        self.menu = Menu(
            self.MENU_MARGIN, self.MENU_MARGIN,
            max_iter=self.state.max_iterations,
            minimum=self.iter_range[0],
            maximum=self.iter_range[1],
            tick_interval=self.settings['iterations']['tick_interval'],
        )
        self.overlay = OverlayRenderer(gl=self._gl)
        self.overlay.initialize(read_shader('overlay_vertex.glsl'),
                                read_shader('overlay_fragment.glsl'))
        self.overlay.resize(self.width, self.height)

        # Restart timing so start-up work does not count against the first window
        self.sampler.restart()

    def _handle_events(self):
        """Process pending events, sleeping until one arrives when idle."""
        if self.redraw_requested:
            events = pygame.event.get()
        else:
            events = [pygame.event.wait()] + pygame.event.get()

        for event in events:
            if event.type == pygame.QUIT:
                self.running = False
                continue

            if event.type == pygame.VIDEORESIZE:
                self._handle_resize(event.w, event.h)
                continue

            # Menu gets first crack at events
            menu_handled, iterations_changed = self.menu.handle_event(event)
            if iterations_changed:
                self._apply_menu_settings()
            if self.menu.dirty:
                self.request_redraw()
            if menu_handled:
                continue

            if event.type == pygame.KEYDOWN:
                self._handle_key(event)
                continue

            if event.type == pygame.MOUSEWHEEL:
                cursor = pygame.mouse.get_pos()
                if self.menu.point_in_menu(cursor):
                    continue
                self.controller.handle_event(event, cursor)
            else:
                self.controller.handle_event(event)

    def _apply_menu_settings(self):
        """Copy the slider value into the view state."""
        self.state.set_max_iterations(self.menu.max_iter, *self.iter_range)
        self._update_caption()
        self.request_redraw()

    def _handle_resize(self, width, height):
        self.width = max(1, width)
        self.height = max(1, height)
        self.renderer.resize(self.width, self.height)
        self.overlay.resize(self.width, self.height)
        self.request_redraw()

    def _handle_key(self, event):
        """Handle keyboard input."""
        if event.key == pygame.K_r:
            # Reset to default view
            self.controller.reset_view()
        elif event.key == pygame.K_a:
            # Toggle continuous animation
            self.renderer.animated = not self.renderer.animated
            _LOGGER.info("Animation %s", "on" if self.renderer.animated else "off")
            self.request_redraw()
        elif event.key == pygame.K_ESCAPE:
            self.running = False

    def _on_fps(self, fps):
        self.menu.set_fps(fps)
        self._update_caption()

    def _update_caption(self):
        pygame.display.set_caption(
            f"{self.title} - {self.sampler.fps} FPS - {self.state.max_iterations} iterations"
        )

    def _draw(self):
        """Draw the current frame."""
        self.renderer.render()

        if self.menu.dirty:
            self.overlay.upload(self.menu.render())
        self.overlay.draw((self.menu.x, self.menu.y))

        pygame.display.flip()

    def _shutdown(self):
        """Free GPU resources while the context still exists, then close pygame."""
        try:
            if self.overlay is not None:
                self.overlay.release()
            if self.renderer is not None:
                self.renderer.release()
        finally:
            pygame.quit()


def run(width=None, height=None, max_iter=None):
    """
    Run the GPU Mandelbrot viewer.

    Args:
        width: Window width (default from settings.json)
        height: Window height (default from settings.json)
        max_iter: Initial iteration cap (default from settings.json)
    """
    settings = load_settings()
    logging.basicConfig(
        level=getattr(logging, str(settings['log_level']).upper(), logging.INFO),
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )
    app = FractalViewerApp(width, height, max_iter, settings=settings)
    try:
        app.run()
    except KeyboardInterrupt:
        pass
