"""
Mouse-driven pan and zoom.

The controller has two pointer states. Pressing the left button enters
PANNING; dragging while it is held moves the view so the content follows
the cursor; releasing returns to IDLE. The wheel zooms in or out at any
time while keeping the fractal point under the cursor fixed.
"""

from enum import Enum

import pygame

from .transform import pixel_delta_to_fractal_delta, pixel_to_fractal


class PointerState(Enum):
    IDLE = "idle"
    PANNING = "panning"


class InteractionController:
    """
    Applies pointer and wheel input to a ViewportState.

    Every call that changes the view invokes on_redraw().
    """

    PRIMARY_BUTTON = 1
    ZOOM_FACTOR = 1.25  # Slower, more precise zoom

    def __init__(self, state, on_redraw=None, zoom_factor=None,
                 home_offset=None, home_zoom=None):
        """
        Args:
            state: ViewportState to mutate
            on_redraw: Callable invoked after each change
            zoom_factor: Zoom step per wheel notch, must be > 1
            home_offset, home_zoom: View restored by reset_view()
                (default: the state's values at construction)
        """
        self.state = state
        self.on_redraw = on_redraw
        self.zoom_factor = zoom_factor if zoom_factor is not None else self.ZOOM_FACTOR
        if self.zoom_factor <= 1.0:
            raise ValueError("zoom_factor must be greater than 1")

        self.home_offset = tuple(home_offset) if home_offset is not None else tuple(state.offset)
        self.home_zoom = home_zoom if home_zoom is not None else state.zoom

        self.pointer = PointerState.IDLE
        self.last_pos = None

    @property
    def panning(self):
        return self.pointer is PointerState.PANNING

    def _changed(self):
        if self.on_redraw is not None:
            self.on_redraw()

    def press(self, button, pos):
        """Start panning on primary-button press."""
        if button != self.PRIMARY_BUTTON:
            return False
        self.pointer = PointerState.PANNING
        self.last_pos = tuple(pos)
        return True

    def release(self, button):
        """Stop panning on primary-button release."""
        if button != self.PRIMARY_BUTTON:
            return False
        self.pointer = PointerState.IDLE
        self.last_pos = None
        return True

    def move(self, pos, primary_held):
        """
        Drag the view while panning.

        Returns:
            True if the view changed
        """
        if not self.panning or not primary_held:
            return False

        pos = tuple(pos)
        delta = (pos[0] - self.last_pos[0], pos[1] - self.last_pos[1])
        self.last_pos = pos

        self.pan(delta)
        return True

    def pan(self, pixel_delta):
        """Move the content by a pixel displacement (grab-and-drag direction)."""
        fx, fy = pixel_delta_to_fractal_delta(pixel_delta, self.state.resolution,
                                              self.state.zoom)
        ox, oy = self.state.offset
        self.state.offset = (ox - fx, oy - fy)
        self._changed()

    def scroll(self, delta, pos):
        """
        Zoom at the cursor position.

        Args:
            delta: Signed wheel amount; > 0 zooms in, < 0 zooms out
            pos: Cursor position in pixels

        Returns:
            True if the view changed
        """
        if not delta:
            return False

        state = self.state
        # Fractal point under the cursor before zooming
        before = pixel_to_fractal(pos, state.resolution, state.offset, state.zoom)

        if delta > 0:
            state.zoom *= self.zoom_factor
        else:
            state.zoom /= self.zoom_factor

        # Shift the offset so the same point stays under the cursor
        after = pixel_to_fractal(pos, state.resolution, state.offset, state.zoom)
        ox, oy = state.offset
        state.offset = (ox + before[0] - after[0], oy + before[1] - after[1])

        self._changed()
        return True

    def reset_view(self):
        """Return to the initial view."""
        self.state.offset = self.home_offset
        self.state.zoom = self.home_zoom
        self.pointer = PointerState.IDLE
        self.last_pos = None
        self._changed()

    def handle_event(self, event, cursor_pos=None):
        """
        Dispatch a pygame event.

        Args:
            event: pygame event
            cursor_pos: Current cursor position, needed for MOUSEWHEEL
                events which carry no position of their own

        Returns:
            True if the event was used
        """
        if event.type == pygame.MOUSEBUTTONDOWN:
            return self.press(event.button, event.pos)
        elif event.type == pygame.MOUSEBUTTONUP:
            return self.release(event.button)
        elif event.type == pygame.MOUSEMOTION:
            return self.move(event.pos, bool(event.buttons[0]))
        elif event.type == pygame.MOUSEWHEEL:
            if cursor_pos is None:
                return False
            return self.scroll(event.y, cursor_pos)
        return False
