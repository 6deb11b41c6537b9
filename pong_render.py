"""
Turns a SimulationState into an ordered list of draw primitives.

Rects in the primitives are already in viewport space ([0, 1] on both axes).
Paint order is fixed: playfield outline, left paddle, right paddle, ball,
game-over panel, title panel. Later items paint over earlier ones.
"""
from typing import List, NamedTuple, Tuple, Union

import numpy as np

from pong_geometry import Rect, transform_rect

WHITE = (255, 255, 255)
BLACK = (0, 0, 0)
OUTLINE_THICKNESS = 2.0


class FillRect(NamedTuple):
    rect: Rect
    color: Tuple[int, int, int] = WHITE


class OutlineRect(NamedTuple):
    rect: Rect
    color: Tuple[int, int, int] = WHITE
    thickness: float = OUTLINE_THICKNESS


class Blit(NamedTuple):
    rect: Rect
    image: object


Primitive = Union[FillRect, OutlineRect, Blit]


def _panel(panel, area) -> List[Primitive]:
    if panel.visible and panel.image is not None:
        return [Blit(transform_rect(panel.rect, *area), panel.image)]
    return []


def draw_list(state) -> List[Primitive]:
    cfg = state.config
    area = (cfg.area_width, cfg.area_height)
    left, right = state.paddles

    prims: List[Primitive] = [
        OutlineRect(transform_rect(state.stadium.rect, *area)),
        FillRect(transform_rect(left.rect, *area)),
        FillRect(transform_rect(right.rect, *area)),
        FillRect(transform_rect(state.ball.rect, *area)),
    ]
    prims += _panel(state.game_over, area)
    prims += _panel(state.title, area)
    return prims


def to_pixels(rect: Rect, width: int, height: int) -> Tuple[int, int, int, int]:
    return (int(rect.x * width), int(rect.y * height),
            int(rect.w * width), int(rect.h * height))


def outline_edges(px: Tuple[int, int, int, int], thickness: float) -> List[Tuple[int, int, int, int]]:
    """Four strips of `thickness` centered on the edges of a pixel rect."""
    x, y, w, h = px
    half = thickness * 0.5
    t = int(thickness)
    x0, y0 = int(x - half), int(y - half)
    return [
        (x0, y0, t, int(h + thickness)),                 # left
        (int(x + w - half), y0, t, int(h + thickness)),  # right
        (x0, int(y + h - half), int(w + thickness), t),  # bottom
        (x0, y0, int(w + thickness), t),                 # top
    ]


def _fill(img: np.ndarray, px, color):
    x, y, w, h = px
    H, W = img.shape[:2]
    x1, y1 = max(0, x), max(0, y)
    x2, y2 = min(W, x + w), min(H, y + h)
    if x2 > x1 and y2 > y1:
        img[y1:y2, x1:x2] = color


def _blit(img: np.ndarray, px, src: np.ndarray):
    x, y, w, h = px
    if w <= 0 or h <= 0:
        return
    if src.ndim == 2:
        # grayscale -> RGB
        src = np.repeat(src[:, :, None], 3, axis=2)
    # nearest-neighbour scale into the target rect
    rows = (np.arange(h) * src.shape[0] // h).clip(0, src.shape[0] - 1)
    cols = (np.arange(w) * src.shape[1] // w).clip(0, src.shape[1] - 1)
    scaled = src[rows][:, cols, :3]
    H, W = img.shape[:2]
    x1, y1 = max(0, x), max(0, y)
    x2, y2 = min(W, x + w), min(H, y + h)
    if x2 > x1 and y2 > y1:
        img[y1:y2, x1:x2] = scaled[y1 - y:y2 - y, x1 - x:x2 - x]


def rasterize(prims: List[Primitive], width: int, height: int, background=BLACK) -> np.ndarray:
    # Headless painter: same list, numpy RGB frame instead of a window
    img = np.zeros((height, width, 3), dtype=np.uint8)
    img[:] = background
    for prim in prims:
        px = to_pixels(prim.rect, width, height)
        if isinstance(prim, FillRect):
            _fill(img, px, prim.color)
        elif isinstance(prim, OutlineRect):
            for edge in outline_edges(px, prim.thickness):
                _fill(img, edge, prim.color)
        elif isinstance(prim.image, np.ndarray):
            _blit(img, px, prim.image)
    return img
