import pygame
import pytest

from conftest import FakeGL
from mandelbrot_gl.overlay import OverlayRenderer, panel_bounds


def test_panel_bounds_full_window():
    assert panel_bounds((0, 0, 640, 480), (640, 480)) == pytest.approx((-1.0, -1.0, 1.0, 1.0))


def test_panel_bounds_top_left_corner():
    left, bottom, right, top = panel_bounds((10, 10, 250, 104), (640, 480))
    assert left == pytest.approx(2 * 10 / 640 - 1)
    assert right == pytest.approx(2 * 260 / 640 - 1)
    assert top == pytest.approx(1 - 2 * 10 / 480)
    assert bottom == pytest.approx(1 - 2 * 114 / 480)
    assert bottom < top


def test_upload_and_draw():
    overlay = OverlayRenderer(gl=FakeGL(uniforms={'bounds': 7, 'panel': 8}))
    gl = overlay._gl
    assert overlay.initialize('vertex', 'fragment')
    overlay.resize(640, 480)

    overlay.upload(pygame.Surface((4, 2), pygame.SRCALPHA))
    tex_call = [args for name, args in gl.calls if name == 'glTexImage2D'][0]
    assert tex_call[3:5] == (4, 2)
    assert len(tex_call[-1]) == 4 * 2 * 4

    overlay.draw((0, 0))
    assert gl.uniform_values[7] == pytest.approx(panel_bounds((0, 0, 4, 2), (640, 480)))
    assert gl.uniform_values[8] == 0
    assert ('glDrawArrays', ('GL_TRIANGLE_FAN', 0, 4)) in gl.calls
    # Depth testing is restored for the next fractal frame
    assert gl.calls[-1] == ('glEnable', ('GL_DEPTH_TEST',))


def test_draw_before_upload_is_noop(gl):
    overlay = OverlayRenderer(gl=gl)
    overlay.initialize('vertex', 'fragment')
    del gl.calls[:]
    overlay.draw((0, 0))
    assert gl.calls == []


def test_failed_link_disables_overlay():
    gl = FakeGL(link_ok=False)
    overlay = OverlayRenderer(gl=gl)
    assert not overlay.initialize('vertex', 'fragment')
    assert not overlay.is_ready
    overlay.upload(pygame.Surface((4, 2), pygame.SRCALPHA))
    assert gl.count('glTexImage2D') == 0


def test_release(gl):
    overlay = OverlayRenderer(gl=gl)
    overlay.initialize('vertex', 'fragment')
    overlay.release()
    overlay.release()
    assert gl.count('glDeleteTextures') == 1
    assert gl.count('glDeleteBuffers') == 1
    assert gl.count('glDeleteVertexArrays') == 1
