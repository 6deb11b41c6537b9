# Plain records for the things on the playfield. Validity (paddles inside the
# stadium, ball direction, ...) is kept by pong_sim, never checked here.
from dataclasses import dataclass
from typing import Any, NamedTuple, Optional

from pong_geometry import Rect, ball_rect, paddle_rect, stadium_rect

LEFT, RIGHT = 0, 1


@dataclass(frozen=True)
class Paddle:
    center_x: float
    center_y: float
    length: float

    @property
    def rect(self) -> Rect:
        return paddle_rect(self)


@dataclass(frozen=True)
class Ball:
    center_x: float
    center_y: float
    radius: float
    speed: float = 0.0
    direction_x: float = 0.0
    direction_y: float = 0.0

    @property
    def rect(self) -> Rect:
        return ball_rect(self)


@dataclass(frozen=True)
class Stadium:
    width: float
    height: float

    @property
    def rect(self) -> Rect:
        return stadium_rect(self)


@dataclass(frozen=True)
class Panel:
    """Title / game-over overlay. `image` is whatever the image provider handed us."""
    visible: bool
    rect: Rect
    image: Optional[Any] = None


class Images(NamedTuple):
    title: Optional[Any] = None
    player1_win: Optional[Any] = None
    player2_win: Optional[Any] = None

    def winner_image(self, winner: int):
        return self.player1_win if winner == LEFT else self.player2_win
