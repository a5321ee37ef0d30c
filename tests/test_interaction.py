import pygame
import pytest

from mandelbrot_gl.interaction import InteractionController, PointerState
from mandelbrot_gl.transform import pixel_to_fractal
from mandelbrot_gl.viewport import ViewportState


class RedrawCounter:
    def __init__(self):
        self.count = 0

    def __call__(self):
        self.count += 1


@pytest.fixture
def redraws():
    return RedrawCounter()


@pytest.fixture
def controller(state, redraws):
    return InteractionController(state, on_redraw=redraws)


@pytest.mark.parametrize("resolution", [(640.0, 480.0), (800.0, 400.0), (300.0, 900.0)])
@pytest.mark.parametrize("cursor", [(0, 0), (123, 45), (320, 240), (799, 399)])
@pytest.mark.parametrize("delta", [1, -1])
def test_zoom_keeps_point_under_cursor(resolution, cursor, delta):
    state = ViewportState(resolution=resolution, offset=(-0.75, 0.1), zoom=3.0)
    controller = InteractionController(state)

    before = pixel_to_fractal(cursor, state.resolution, state.offset, state.zoom)
    assert controller.scroll(delta, cursor)
    after = pixel_to_fractal(cursor, state.resolution, state.offset, state.zoom)

    assert after == pytest.approx(before, abs=1e-12)


def test_scroll_direction_scales_zoom(controller, state):
    controller.scroll(1, (320, 240))
    assert state.zoom == pytest.approx(1.25)
    controller.scroll(-2, (320, 240))
    assert state.zoom == pytest.approx(1.0)
    controller.scroll(-1, (320, 240))
    assert state.zoom == pytest.approx(0.8)


def test_zoom_at_center_leaves_offset(controller, state):
    controller.scroll(1, (320, 240))
    assert state.offset == pytest.approx((0.0, 0.0))


def test_zero_scroll_is_noop(controller, state, redraws):
    assert not controller.scroll(0, (10, 10))
    assert state.zoom == 1.0
    assert state.offset == (0.0, 0.0)
    assert redraws.count == 0


def test_pan_is_reversible(controller, state):
    state.offset = (0.3, -0.2)
    state.zoom = 7.0
    controller.pan((37, -12))
    assert state.offset != pytest.approx((0.3, -0.2))
    controller.pan((-37, 12))
    assert state.offset == pytest.approx((0.3, -0.2))


def test_drag_moves_content_with_cursor(controller, state, redraws):
    assert controller.press(1, (100, 100))
    assert controller.pointer is PointerState.PANNING

    # Dragging right moves the view center left
    assert controller.move((148, 100), primary_held=True)
    assert state.offset == pytest.approx((-0.2, 0.0))

    # Dragging down moves the view center up
    assert controller.move((148, 148), primary_held=True)
    assert state.offset == pytest.approx((-0.2, 0.2))
    assert redraws.count == 2

    assert controller.release(1)
    assert controller.pointer is PointerState.IDLE


def test_move_uses_last_position(controller, state):
    controller.press(1, (0, 0))
    controller.move((24, 0), primary_held=True)
    controller.move((48, 0), primary_held=True)
    assert state.offset == pytest.approx((-0.2, 0.0))


def test_move_while_idle_is_ignored(controller, state, redraws):
    assert not controller.move((50, 50), primary_held=True)
    assert state.offset == (0.0, 0.0)
    assert redraws.count == 0


def test_move_without_button_held_is_ignored(controller, state):
    controller.press(1, (0, 0))
    assert not controller.move((50, 50), primary_held=False)
    assert state.offset == (0.0, 0.0)


def test_other_buttons_are_ignored(controller):
    assert not controller.press(3, (0, 0))
    assert controller.pointer is PointerState.IDLE

    controller.press(1, (0, 0))
    assert not controller.release(2)
    assert controller.pointer is PointerState.PANNING


def test_reset_view(controller, state, redraws):
    controller.scroll(1, (10, 10))
    controller.press(1, (0, 0))
    controller.reset_view()
    assert state.offset == (0.0, 0.0)
    assert state.zoom == 1.0
    assert controller.pointer is PointerState.IDLE
    assert redraws.count == 2


def test_zoom_factor_must_exceed_one(state):
    with pytest.raises(ValueError):
        InteractionController(state, zoom_factor=0.9)


def test_zero_zoom_factor_is_rejected(state):
    with pytest.raises(ValueError):
        InteractionController(state, zoom_factor=0)


def test_handle_pygame_events(controller, state):
    down = pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(100, 100))
    motion = pygame.event.Event(pygame.MOUSEMOTION, pos=(148, 100), rel=(48, 0),
                                buttons=(1, 0, 0))
    up = pygame.event.Event(pygame.MOUSEBUTTONUP, button=1, pos=(148, 100))

    assert controller.handle_event(down)
    assert controller.handle_event(motion)
    assert controller.handle_event(up)
    assert state.offset == pytest.approx((-0.2, 0.0))
    assert controller.pointer is PointerState.IDLE


def test_handle_wheel_event_needs_cursor(controller, state):
    wheel = pygame.event.Event(pygame.MOUSEWHEEL, x=0, y=1)
    assert not controller.handle_event(wheel)
    assert state.zoom == 1.0

    assert controller.handle_event(wheel, cursor_pos=(320, 240))
    assert state.zoom == pytest.approx(1.25)


def test_horizontal_wheel_is_ignored(controller, state):
    wheel = pygame.event.Event(pygame.MOUSEWHEEL, x=1, y=0)
    assert not controller.handle_event(wheel, cursor_pos=(320, 240))
    assert state.zoom == 1.0
