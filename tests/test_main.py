"""
Tests for entry point wiring.
"""
import random

from reelcast.main import make_rngs, parse_args


class TestSeeding:
    """Tests for --seed handling."""

    def test_no_seed(self):
        assert make_rngs(None) == (None, None)

    def test_gameplay_follows_seed(self):
        """The gameplay generator replays random.Random(seed)."""
        game_rng, _ = make_rngs(42)
        expected = random.Random(42)
        assert [game_rng.random() for _ in range(5)] == [expected.random() for _ in range(5)]

    def test_scenery_does_not_consume_gameplay(self):
        """Drawing scenery leaves the gameplay sequence unchanged."""
        game_rng, scenery_rng = make_rngs(42)
        assert game_rng is not scenery_rng
        for _ in range(100):
            scenery_rng.random()
        assert game_rng.random() == random.Random(42).random()

    def test_scenery_repeatable(self):
        """The same seed gives the same scenery."""
        first = make_rngs(7)[1]
        second = make_rngs(7)[1]
        assert first.random() == second.random()
        assert make_rngs(8)[1].random() != make_rngs(7)[1].random()


class TestArgs:
    """Tests for command-line parsing."""

    def test_seed_and_demo_wallet(self):
        args = parse_args(["--seed", "3", "--demo-wallet"])
        assert args.seed == 3
        assert args.demo_wallet
        assert args.config is None
