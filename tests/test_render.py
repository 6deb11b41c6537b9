from dataclasses import replace

import numpy as np
import pytest

from pong_entities import Ball, Images
from pong_render import Blit, FillRect, OutlineRect, draw_list, outline_edges, rasterize, to_pixels
from pong_sim import Key, new_game, tick

RED = np.zeros((2, 2, 3), dtype=np.uint8)
RED[:] = (255, 0, 0)


class Rng:
    def integers(self, low, high):
        return 50


def standby(images=Images()):
    state = tick(new_game(images), None, 0.02, Rng())
    return tick(state, None, 0.02, Rng())


def test_paint_order_without_panels():
    state = tick(standby(), Key.UP, 0.02, Rng())
    prims = draw_list(state)
    assert [type(p) for p in prims] == [OutlineRect, FillRect, FillRect, FillRect]


def test_panel_needs_visibility_and_image():
    assert len(draw_list(standby())) == 4  # title visible but no image
    prims = draw_list(standby(Images(title=RED)))
    assert isinstance(prims[-1], Blit)
    assert prims[-1].image is RED


def test_primitives_are_in_viewport_space():
    prims = draw_list(standby())
    outline, left, right, ball = prims
    assert outline.rect.x == pytest.approx(0.02)
    assert outline.rect.w == pytest.approx(0.96)
    assert left.rect.x == pytest.approx(0.5 - 205.0 / 500.0)
    assert right.rect.x == pytest.approx(0.5 + 195.0 / 500.0)
    assert ball.rect.w == pytest.approx(6.0 / 500.0)


def test_to_pixels_truncates():
    outline = draw_list(standby())[0]
    assert to_pixels(outline.rect, 640, 480) == (12, 12, 614, 454)


def test_outline_edges_are_centered_on_rect_edges():
    edges = outline_edges((10, 20, 100, 50), 2.0)
    assert edges == [
        (9, 19, 2, 52),
        (109, 19, 2, 52),
        (9, 69, 102, 2),
        (9, 19, 102, 2),
    ]


def test_rasterize_standby_frame():
    img = rasterize(draw_list(standby(Images(title=RED))), 640, 480)
    assert img.shape == (480, 640, 3)
    assert img.dtype == np.uint8
    assert tuple(img[0, 0]) == (0, 0, 0)
    assert tuple(img[239, 319]) == (255, 255, 255)  # ball
    assert tuple(img[240, 11]) == (255, 255, 255)   # playfield outline
    assert tuple(img[100, 300]) == (255, 0, 0)      # title panel


def test_rasterize_skips_foreign_images():
    img = rasterize(draw_list(standby(Images(title="not-an-array"))), 640, 480)
    assert tuple(img[100, 300]) == (0, 0, 0)


def test_rasterize_grayscale_image():
    gray = np.full((2, 2), 200, dtype=np.uint8)
    img = rasterize(draw_list(standby(Images(title=gray))), 640, 480)
    assert tuple(img[100, 300]) == (200, 200, 200)


def test_game_over_panel_shows_winner_image():
    p1 = RED.copy()
    state = tick(standby(Images(player1_win=p1)), Key.UP, 0.02, Rng())
    state = replace(state, ball=Ball(235.0, 0.0, 3.0, 150.0, 1.0, 0.0))
    state = tick(state, None, 0.1, Rng())
    assert state.winner == 0
    state = tick(state, None, 0.02, Rng())
    prims = draw_list(state)
    assert isinstance(prims[-1], Blit)
    assert prims[-1].image is p1
    assert len(prims) == 5


def test_game_over_panel_paints_under_title():
    over, title = RED.copy(), RED.copy()
    state = standby()
    state = replace(state,
                    title=replace(state.title, visible=True, image=title),
                    game_over=replace(state.game_over, visible=True, image=over))
    prims = draw_list(state)
    assert [type(p) for p in prims[-2:]] == [Blit, Blit]
    assert prims[-2].image is over
    assert prims[-1].image is title
