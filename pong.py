
import argparse
import logging
import os
import sys

import numpy as np
import pygame

from pong_entities import Images
from pong_render import BLACK, Blit, FillRect, OutlineRect, draw_list, outline_edges, to_pixels
from pong_sim import DEFAULT_CONFIG, Key, new_game, tick

WIDTH, HEIGHT = 640, 480
MEDIA_DIR = "Media"
IMAGE_FILES = ("Title.bmp", "Player1Win.bmp", "Player2Win.bmp")

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

logger = logging.getLogger("Pong")

KEYMAP = {
    pygame.K_UP: Key.UP,
    pygame.K_w: Key.UP,
    pygame.K_DOWN: Key.DOWN,
    pygame.K_s: Key.DOWN,
    pygame.K_q: Key.QUIT,
}


def poll_input(events):
    """Returns (key seen this poll or None, window was closed). Last key wins."""
    signal = None
    closed = False
    for event in events:
        if event.type == pygame.QUIT:
            closed = True
        elif event.type == pygame.KEYDOWN:
            signal = KEYMAP.get(event.key, Key.UNKNOWN)
    return signal, closed


class FrameClock:
    # Busy-waits instead of sleeping; dt is the real elapsed time, never less
    # than one period.
    def __init__(self, period=DEFAULT_CONFIG.frame_period, now=None):
        self.period = period
        self.now = now or pygame.time.get_ticks
        self.last = self.now()

    def tick(self):
        while True:
            current = self.now()
            dt = (current - self.last) / 1000.0
            if dt > self.period:
                self.last = current
                return dt


def load_image(path):
    try:
        return pygame.image.load(path)
    except (pygame.error, OSError) as e:
        logger.warning("Unable to load image %s: %s", path, e)
        return None


def load_images(media_dir=MEDIA_DIR):
    return Images(*(load_image(os.path.join(media_dir, name)) for name in IMAGE_FILES))


def init_window(width, height):
    try:
        pygame.init()
        screen = pygame.display.set_mode((width, height))
        pygame.display.set_caption("Pong")
    except pygame.error as e:
        logger.error("Window could not be created: %s", e)
        return None
    return screen


def paint(surface, prims):
    # Surface origin is top-left; prims are already in viewport space
    W, H = surface.get_size()
    surface.fill(BLACK)
    for prim in prims:
        x, y, w, h = to_pixels(prim.rect, W, H)
        if isinstance(prim, FillRect):
            surface.fill(prim.color, pygame.Rect(x, y, w, h))
        elif isinstance(prim, OutlineRect):
            for edge in outline_edges((x, y, w, h), prim.thickness):
                surface.fill(prim.color, pygame.Rect(edge))
        elif isinstance(prim, Blit) and w > 0 and h > 0:
            surface.blit(pygame.transform.scale(prim.image, (w, h)), (x, y))


def game(width=WIDTH, height=HEIGHT, media_dir=MEDIA_DIR, seed=None):
    screen = init_window(width, height)
    if screen is None:
        pygame.quit()
        return 1

    try:
        rng = np.random.default_rng(seed)
        state = new_game(load_images(media_dir))
        clock = FrameClock(period=state.config.frame_period)

        while True:
            dt = clock.tick()
            signal, closed = poll_input(pygame.event.get())
            if closed:
                break

            state = tick(state, signal, dt, rng)
            if state.quit_requested:
                break

            paint(screen, draw_list(state))
            pygame.display.flip()
    finally:
        logger.info("Quitting")
        pygame.quit()
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(description="Pong against a simple CPU paddle")
    parser.add_argument("--width", type=int, default=WIDTH)
    parser.add_argument("--height", type=int, default=HEIGHT)
    parser.add_argument("--media", default=MEDIA_DIR, help="directory holding the title/win bitmaps")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = parser.parse_args(argv)

    logging.basicConfig(format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT,
                        level=getattr(logging, args.log_level))
    return game(args.width, args.height, args.media, args.seed)


if __name__ == "__main__":
    sys.exit(main())
