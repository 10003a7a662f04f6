"""
ReelCast - Main Entry Point

Cast, wait for a bite, and reel in a catch whose identity is decided by a
256-bit random value. Without a ready session the game runs in practice
mode with local entropy and no stakes.

Usage:
    reelcast [--config settings.json] [--demo-wallet] [--fps 60] [--seed N]

Controls:
    Click / touch / Space: Cast, hook a bite, hold to reel, dismiss result
    1-4: Choose stake (while idle)
    Escape: Quit
"""
import argparse
import logging
import random
from typing import Optional, Tuple

import pygame

from reelcast.config import get_settings, load_settings
from reelcast.engine.scheduler import FrameScheduler
from reelcast.gameplay.game import FishingGame, CatchEvent
from reelcast.gameplay.outcome import expected_return
from reelcast.services.randomness import LocalEntropyProvider
from reelcast.services.session import LocalSession
from reelcast.ui.input_handler import InputHandler
from reelcast.ui.renderer import Renderer

logger = logging.getLogger(__name__)

# Starting funds for the simulated wallet
DEMO_FEE = 1
DEMO_WALLET_BALANCE = 1000


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="reelcast", description="Arcade fishing mini-game")
    parser.add_argument("--config", help="JSON settings file layered over the environment")
    parser.add_argument("--fps", type=int, help="Target frames per second")
    parser.add_argument("--seed", type=int, help="Seed for gameplay randomness (not the catch)")
    parser.add_argument(
        "--demo-wallet",
        action="store_true",
        help="Play with stakes against a simulated wallet and delayed random source",
    )
    return parser.parse_args(argv)


def make_rngs(seed: Optional[int]) -> Tuple[Optional[random.Random], Optional[random.Random]]:
    """Separate gameplay and scenery generators for a seed, or none without one."""
    if seed is None:
        return None, None
    return random.Random(seed), random.Random(f"scenery:{seed}")


def main(argv=None) -> None:
    """Main entry point."""
    args = parse_args(argv)
    settings = load_settings(args.config) if args.config else get_settings()
    if args.fps:
        settings = settings.model_copy(update={"fps": args.fps})

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger.info("ReelCast starting...")
    logger.info(f"Expected return per stake: {expected_return(settings.catch_table, settings.economy):.0%}")

    session = LocalSession(settings.session)
    random_provider = None
    if args.demo_wallet:
        session.login()
        session.switch_network()
        session.set_funds(fee=DEMO_FEE, wallet_balance=DEMO_WALLET_BALANCE)
        random_provider = LocalEntropyProvider(delay_seconds=1.0)

    game_rng, scenery_rng = make_rngs(args.seed)
    game = FishingGame(settings=settings, session=session, random_provider=random_provider, rng=game_rng)

    pygame.init()
    pygame.display.set_caption("ReelCast")
    screen = pygame.display.set_mode((settings.window_width, settings.window_height), pygame.RESIZABLE)

    renderer = Renderer(screen, settings=settings, rng=scenery_rng)

    def frame(delta_ms: float) -> None:
        """Update game state and draw."""
        for event in game.update(delta_ms):
            if isinstance(event, CatchEvent):
                logger.info(f"Catch #{len(game.snapshot.catches)}: {event.fish.name}, payout {event.payout}")
        renderer.render(game.snapshot, delta_ms, game.render_options())
        pygame.display.flip()

    scheduler = FrameScheduler(frame, fps=settings.fps, max_delta_ms=settings.max_frame_delta_ms)
    input_handler = InputHandler(game, renderer, scheduler)

    def pump() -> bool:
        """Process pending window events. False once the player quits."""
        for event in pygame.event.get():
            if input_handler.handle_event(event):
                return False
        return True

    try:
        scheduler.run(pump)
    finally:
        game.random_provider.reset()
        pygame.quit()
        logger.info(f"ReelCast stopped, {len(game.snapshot.catches)} catches this session")


if __name__ == "__main__":
    main()
