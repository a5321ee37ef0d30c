"""
Settings panel for the GPU Mandelbrot viewer.

Provides a slider for the iteration cap plus labels showing the current
value and the measured frame rate. The panel is drawn with pygame onto its
own Surface; OverlayRenderer puts that surface on screen.
"""

import pygame

from .viewport import MIN_ITERATIONS, MAX_ITERATIONS, clamp_iterations


class Slider:
    """A horizontal integer slider component."""

    def __init__(self, x, y, width, minimum, maximum, value, tick_interval=0):
        self.x = x
        self.y = y
        self.width = width
        self.height = 16
        self.minimum = minimum
        self.maximum = maximum
        self.tick_interval = tick_interval
        self.value = clamp_iterations(value, minimum, maximum)
        self.dragging = False

    def get_rect(self):
        return pygame.Rect(self.x, self.y, self.width, self.height)

    def set_value(self, value):
        """Set a clamped value. Returns True if it changed."""
        old_value = self.value
        self.value = clamp_iterations(value, self.minimum, self.maximum)
        return self.value != old_value

    def step(self, amount):
        return self.set_value(self.value + amount)

    def value_at(self, mx):
        """Slider value for a horizontal position."""
        t = (mx - self.x) / max(1, self.width - 1)
        t = max(0.0, min(1.0, t))
        return int(round(self.minimum + t * (self.maximum - self.minimum)))

    def handle_position(self):
        t = (self.value - self.minimum) / max(1, self.maximum - self.minimum)
        return self.x + int(round(t * (self.width - 1)))

    def handle_event(self, event, pos):
        """
        Handle a mouse event at a position in panel coordinates.

        Returns (handled, value_changed).
        """
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            # Grab area is a bit taller than the track
            grab_rect = self.get_rect().inflate(0, 8)
            if grab_rect.collidepoint(pos):
                self.dragging = True
                return True, self.set_value(self.value_at(pos[0]))

        elif event.type == pygame.MOUSEMOTION and self.dragging:
            return True, self.set_value(self.value_at(pos[0]))

        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1 and self.dragging:
            self.dragging = False
            return True, False

        return False, False

    def draw(self, screen):
        # Track
        track_y = self.y + self.height // 2
        pygame.draw.line(screen, (90, 90, 90), (self.x, track_y),
                         (self.x + self.width - 1, track_y), 3)

        # Ticks below the track
        if self.tick_interval > 0 and self.maximum > self.minimum:
            tick = self.minimum - self.minimum % self.tick_interval
            while tick <= self.maximum:
                if tick >= self.minimum:
                    t = (tick - self.minimum) / (self.maximum - self.minimum)
                    tx = self.x + int(round(t * (self.width - 1)))
                    pygame.draw.line(screen, (80, 80, 80), (tx, self.y + self.height),
                                     (tx, self.y + self.height + 3))
                tick += self.tick_interval

        # Handle
        hx = self.handle_position()
        color = (140, 180, 220) if self.dragging else (200, 200, 200)
        pygame.draw.rect(screen, color, pygame.Rect(hx - 4, self.y, 8, self.height))


class Menu:
    """
    Settings panel with the iteration slider and FPS readout.

    Coordinates passed to handle_event() and point_in_menu() are window
    coordinates; the widgets themselves are laid out relative to the panel.
    """

    WIDTH = 250
    HEIGHT = 104

    def __init__(self, x, y, max_iter=100, minimum=MIN_ITERATIONS,
                 maximum=MAX_ITERATIONS, tick_interval=50):
        self.x = x
        self.y = y
        self.width = self.WIDTH
        self.height = self.HEIGHT

        # Fonts
        self.font = None
        self.small_font = None

        self.slider = Slider(10, 42, self.width - 20, minimum, maximum,
                             max_iter, tick_interval)
        self.fps = 0

        # Set whenever the panel needs to be drawn again
        self.dirty = True

    @property
    def max_iter(self):
        return self.slider.value

    def init_fonts(self):
        pygame.font.init()
        self.font = pygame.font.SysFont('Arial', 14, bold=True)
        self.small_font = pygame.font.SysFont('Arial', 12)

    def get_rect(self):
        """Get the bounding rectangle of the menu in window coordinates."""
        return pygame.Rect(self.x, self.y, self.width, self.height)

    def point_in_menu(self, pos):
        return self.get_rect().collidepoint(pos)

    def set_fps(self, fps):
        if fps != self.fps:
            self.fps = fps
            self.dirty = True

    def set_max_iter(self, value):
        """Set the slider value programmatically. Returns True if it changed."""
        changed = self.slider.set_value(value)
        if changed:
            self.dirty = True
        return changed

    def handle_event(self, event):
        """
        Handle a pygame event.
        Returns (handled, iterations_changed).
        """
        if event.type in (pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP, pygame.MOUSEMOTION):
            mx, my = event.pos
            local = (mx - self.x, my - self.y)
            handled, changed = self.slider.handle_event(event, local)
            if handled:
                self.dirty = True
                return True, changed

            # Clicks on the panel background stay in the menu
            if event.type == pygame.MOUSEBUTTONDOWN and self.point_in_menu(event.pos):
                return True, False

        elif event.type == pygame.KEYDOWN:
            steps = {
                pygame.K_UP: 10,
                pygame.K_DOWN: -10,
                pygame.K_PAGEUP: self.slider.tick_interval or 10,
                pygame.K_PAGEDOWN: -(self.slider.tick_interval or 10),
            }
            if event.key in steps:
                changed = self.slider.step(steps[event.key])
                if changed:
                    self.dirty = True
                return True, changed

        return False, False

    def render(self):
        """Draw the panel onto a new transparent surface and return it."""
        surface = pygame.Surface((self.width, self.height), pygame.SRCALPHA)
        self.draw(surface)
        self.dirty = False
        return surface

    def draw(self, screen):
        if self.font is None:
            self.init_fonts()

        rect = pygame.Rect(0, 0, self.width, self.height)
        pygame.draw.rect(screen, (40, 40, 40, 220), rect)
        pygame.draw.rect(screen, (100, 100, 100), rect, 1)

        # Fractal parameters
        title = self.font.render('Fractal parameters', True, (220, 220, 220))
        screen.blit(title, (10, 6))
        label = self.small_font.render(f'Iterations: {self.max_iter}', True, (200, 200, 200))
        screen.blit(label, (10, 24))
        self.slider.draw(screen)

        # Performance
        fps_text = self.font.render(f'FPS: {self.fps}', True, (255, 255, 255))
        screen.blit(fps_text, (10, 74))
