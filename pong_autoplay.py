"""
Headless rallies: the simulation driven by a scripted left paddle instead of
a keyboard. Used by the dashboard and the tests.
"""
from dataclasses import dataclass
from typing import Callable, Dict, Optional

import numpy as np

from pong_sim import DEFAULT_CONFIG, GameConfig, Key, Phase, SimulationState, new_game, tick

DEAD_BAND = 4.0


def idle_policy(state: SimulationState, rng) -> Optional[Key]:
    return None


def track_policy(state: SimulationState, rng) -> Optional[Key]:
    # Simple tracking, same idea as the CPU paddle but at player speed
    paddle, ball = state.paddles[0], state.ball
    if abs(ball.center_y - paddle.center_y) <= DEAD_BAND:
        return None
    return Key.DOWN if ball.center_y > paddle.center_y else Key.UP


def random_policy(state: SimulationState, rng) -> Optional[Key]:
    return (None, Key.UP, Key.DOWN)[int(rng.integers(0, 3))]


POLICIES: Dict[str, Callable] = {
    "idle": idle_policy,
    "track": track_policy,
    "random": random_policy,
}


@dataclass
class Rally:
    trajectory: np.ndarray  # (ticks, 4): ball x, ball y, left paddle y, right paddle y
    final: SimulationState
    winner: Optional[int]

    @property
    def ticks(self) -> int:
        return len(self.trajectory)


def play_rally(policy=track_policy, rng=None, dt=1.0 / 60.0, max_ticks=5000,
               config: GameConfig = DEFAULT_CONFIG) -> Rally:
    if rng is None:
        rng = np.random.default_rng()

    # Initialize -> Standby, then any key serves
    state = tick(new_game(config=config), None, dt, rng)
    state = tick(state, Key.UNKNOWN, dt, rng)

    rows = []
    while state.phase.kind is Phase.PLAYING and len(rows) < max_ticks:
        state = tick(state, policy(state, rng), dt, rng)
        left, right = state.paddles
        rows.append((state.ball.center_x, state.ball.center_y, left.center_y, right.center_y))

    trajectory = np.array(rows, dtype=float).reshape(-1, 4)
    return Rally(trajectory, state, state.winner)
