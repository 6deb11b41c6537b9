"""
Rectangles and the logical -> viewport mapping.

Logical space is centered on (0, 0). Viewport space is normalized to [0, 1]
on both axes; the drawing surface multiplies by its pixel size.
"""
from typing import NamedTuple, Tuple

PADDLE_HALF_WIDTH = 5.0


class Rect(NamedTuple):
    x: float
    y: float
    w: float
    h: float

    @property
    def x_min(self) -> float:
        return self.x

    @property
    def y_min(self) -> float:
        return self.y

    @property
    def x_max(self) -> float:
        return self.x + self.w

    @property
    def y_max(self) -> float:
        return self.y + self.h


def contains(rect: Rect, x: float, y: float) -> bool:
    # closed on all four edges
    return rect.x_min <= x <= rect.x_max and rect.y_min <= y <= rect.y_max


def transform(x: float, y: float, area_w: float, area_h: float) -> Tuple[float, float]:
    # no translation, rotation or scale beyond the area size
    return 0.5 + x / area_w, 0.5 + y / area_h


def inverse_transform(u: float, v: float, area_w: float, area_h: float) -> Tuple[float, float]:
    return (u - 0.5) * area_w, (v - 0.5) * area_h


def transform_rect(rect: Rect, area_w: float, area_h: float) -> Rect:
    min_x, min_y = transform(rect.x_min, rect.y_min, area_w, area_h)
    max_x, max_y = transform(rect.x_max, rect.y_max, area_w, area_h)
    return Rect(min_x, min_y, max_x - min_x, max_y - min_y)


def centered_rect(cx: float, cy: float, w: float, h: float) -> Rect:
    return Rect(cx - w * 0.5, cy - h * 0.5, w, h)


def paddle_rect(paddle) -> Rect:
    return Rect(paddle.center_x - PADDLE_HALF_WIDTH,
                paddle.center_y - paddle.length * 0.5,
                PADDLE_HALF_WIDTH * 2.0,
                paddle.length)


def ball_rect(ball) -> Rect:
    return Rect(ball.center_x - ball.radius, ball.center_y - ball.radius,
                ball.radius * 2.0, ball.radius * 2.0)


def stadium_rect(stadium) -> Rect:
    return centered_rect(0.0, 0.0, stadium.width, stadium.height)
