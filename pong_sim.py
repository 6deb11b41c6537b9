"""
Game simulation: phases, per-tick physics, scoring.

`tick(state, signal, dt, rng)` is the only entry point the game loop needs.
It never mutates its input; every call returns a new SimulationState.

    Initialize -> Standby -> Playing -> GameOver -> Initialize ...

`signal` is the key seen this tick (None when nothing was pressed), `dt` the
elapsed wall time in seconds and `rng` anything with numpy's
`Generator.integers(low, high)` signature (used for paddle deflection).
"""
import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Tuple, Union

import numpy as np

from pong_entities import LEFT, RIGHT, Ball, Images, Paddle, Panel, Stadium
from pong_geometry import Rect, contains

logger = logging.getLogger("PongSim")

RAND_MAX = 2 ** 31 - 1


@dataclass(frozen=True)
class GameConfig:
    stadium_width: float = 480.0
    stadium_height: float = 360.0
    # visible logical extent used by the viewport transform
    area_width: float = 500.0
    area_height: float = 380.0
    paddle_x: float = 200.0
    paddle_length: float = 50.0
    ball_radius: float = 3.0
    launch_speed: float = 150.0
    player_speed: float = 400.0
    ai_speed: float = 50.0
    deflection_steps: int = 100
    panel_rect: Rect = Rect(-125.0, -150.0, 250.0, 100.0)
    frame_period: float = 1.0 / 60.0


DEFAULT_CONFIG = GameConfig()


class Key(Enum):
    UNKNOWN = 0
    UP = 1
    DOWN = 2
    QUIT = 3


class Phase(Enum):
    INITIALIZE = 0
    STANDBY = 1
    PLAYING = 2
    GAMEOVER = 3


@dataclass(frozen=True)
class Initialize:
    kind = Phase.INITIALIZE


@dataclass(frozen=True)
class Standby:
    kind = Phase.STANDBY


@dataclass(frozen=True)
class Playing:
    kind = Phase.PLAYING


@dataclass(frozen=True)
class GameOver:
    winner: int
    kind = Phase.GAMEOVER


PhaseState = Union[Initialize, Standby, Playing, GameOver]


@dataclass(frozen=True)
class SimulationState:
    phase: PhaseState
    stadium: Stadium
    paddles: Tuple[Paddle, Paddle]
    ball: Ball
    title: Panel
    game_over: Panel
    images: Images = Images()
    config: GameConfig = DEFAULT_CONFIG
    quit_requested: bool = False

    @property
    def winner(self) -> Optional[int]:
        if isinstance(self.phase, GameOver):
            return self.phase.winner
        return None


def _defaults(images: Images, config: GameConfig, phase: PhaseState) -> SimulationState:
    return SimulationState(
        phase=phase,
        stadium=Stadium(config.stadium_width, config.stadium_height),
        paddles=(
            Paddle(-config.paddle_x, 0.0, config.paddle_length),
            Paddle(config.paddle_x, 0.0, config.paddle_length),
        ),
        ball=Ball(0.0, 0.0, config.ball_radius),
        title=Panel(False, config.panel_rect, images.title),
        game_over=Panel(False, config.panel_rect, None),
        images=images,
        config=config,
    )


def new_game(images: Images = Images(), config: GameConfig = DEFAULT_CONFIG) -> SimulationState:
    """State before the very first tick. The first tick resets it into Standby."""
    return _defaults(images, config, Initialize())


def reset(state: SimulationState) -> SimulationState:
    return _defaults(state.images, state.config, Standby())


def cpu_policy(paddle: Paddle, ball: Ball, config: GameConfig = DEFAULT_CONFIG) -> float:
    # Follow the ball vertically, nothing smarter
    if paddle.center_y < ball.center_y:
        return config.ai_speed
    if paddle.center_y > ball.center_y:
        return -config.ai_speed
    return 0.0


def deflection(rng, config: GameConfig = DEFAULT_CONFIG) -> float:
    steps = config.deflection_steps
    n = int(rng.integers(0, RAND_MAX))
    return (n % steps - steps // 2) / steps


def integrate(ball: Ball, dt: float) -> Ball:
    direction = np.array([ball.direction_x, ball.direction_y], dtype=float)
    norm = np.linalg.norm(direction)
    if norm == 0.0:
        # a ball without a direction stays put
        return ball
    step = direction / norm * ball.speed * dt
    return replace(ball,
                   center_x=ball.center_x + float(step[0]),
                   center_y=ball.center_y + float(step[1]))


def clamp_paddle(paddle: Paddle, field: Rect) -> Paddle:
    half = paddle.length * 0.5
    if paddle.center_y + half > field.y_max:
        return replace(paddle, center_y=field.y_max - half)
    if paddle.center_y - half < field.y_min:
        return replace(paddle, center_y=field.y_min + half)
    return paddle


def bounce_walls(ball: Ball, ball_box: Rect, field: Rect) -> Ball:
    # Mirrors the *center* about the bound, not the edge. Slightly off for
    # fast balls.
    if ball_box.y_max > field.y_max:
        bound = field.y_max
    elif ball_box.y_min < field.y_min:
        bound = field.y_min
    else:
        return ball
    return replace(ball,
                   center_y=ball.center_y + (ball.center_y - bound),
                   direction_y=ball.direction_y * -1.0)


def _deflect(ball: Ball, rng, config: GameConfig) -> Ball:
    return replace(ball,
                   direction_x=ball.direction_x * -1.0,
                   direction_y=ball.direction_y + deflection(rng, config))


def _standby(state: SimulationState, signal: Optional[Key]) -> SimulationState:
    title = replace(state.title, visible=True)
    if signal is None:
        return replace(state, title=title)

    # Serve toward the player
    ball = replace(state.ball, speed=state.config.launch_speed,
                   direction_x=-1.0, direction_y=0.0)
    return replace(state, phase=Playing(), title=replace(title, visible=False), ball=ball)


def _play(state: SimulationState, signal: Optional[Key], dt: float, rng) -> SimulationState:
    cfg = state.config
    player, ai = state.paddles

    # Player paddle
    if signal is Key.UP:
        player = replace(player, center_y=player.center_y - cfg.player_speed * dt)
    elif signal is Key.DOWN:
        player = replace(player, center_y=player.center_y + cfg.player_speed * dt)

    # AI paddle
    ai = replace(ai, center_y=ai.center_y + cpu_policy(ai, state.ball, cfg) * dt)

    # Move ball
    ball = integrate(state.ball, dt)

    # Collide with top/bottom
    ball_box = ball.rect
    field = state.stadium.rect
    ball = bounce_walls(ball, ball_box, field)

    player = clamp_paddle(player, field)
    ai = clamp_paddle(ai, field)

    # Collide with paddles, only when heading toward them
    if contains(player.rect, ball.center_x, ball.center_y) and ball.direction_x <= 0:
        ball = _deflect(ball, rng, cfg)
    if contains(ai.rect, ball.center_x, ball.center_y) and ball.direction_x >= 0:
        ball = _deflect(ball, rng, cfg)

    # Score
    phase = state.phase
    if ball_box.x_max > field.x_max:
        phase = GameOver(LEFT)
    elif ball_box.x_min < field.x_min:
        phase = GameOver(RIGHT)

    return replace(state, phase=phase, paddles=(player, ai), ball=ball)


def _game_over(state: SimulationState, signal: Optional[Key]) -> SimulationState:
    panel = replace(state.game_over, visible=True,
                    image=state.images.winner_image(state.phase.winner))
    if signal is None:
        return replace(state, game_over=panel)
    if signal is Key.QUIT:
        return replace(state, game_over=panel, quit_requested=True)
    return replace(state, phase=Initialize(), game_over=panel)


def tick(state: SimulationState, signal: Optional[Key], dt: float, rng) -> SimulationState:
    if dt < 0:
        raise ValueError(f"time delta must not be negative, got {dt}")

    kind = state.phase.kind
    if kind is Phase.INITIALIZE:
        new_state = reset(state)
    elif kind is Phase.STANDBY:
        new_state = _standby(state, signal)
    elif kind is Phase.PLAYING:
        new_state = _play(state, signal, dt, rng)
    else:
        new_state = _game_over(state, signal)

    if new_state.phase.kind is not kind:
        logger.debug("phase %s -> %s (winner=%s)",
                     kind.name, new_state.phase.kind.name, new_state.winner)
    return new_state
