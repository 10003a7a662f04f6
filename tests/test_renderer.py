"""
Tests for the pygame renderer.

Runs headless on SDL's dummy video driver.
"""
import random

import pygame
import pytest

from reelcast.gameplay.constants import GAME_HEIGHT, GAME_WIDTH, HORIZON_Y, NEAR_Y
from reelcast.gameplay.fish import CaughtFish, Rarity
from reelcast.gameplay.game import RenderOptions
from reelcast.gameplay.state import Phase, SplashParticle
from reelcast.ui import renderer as renderer_module
from reelcast.ui.drawing import hex_color, with_alpha
from reelcast.ui.renderer import (
    COLOR_SKY, COLOR_TENSION_HIGH, COLOR_TENSION_LOW, COLOR_TENSION_MED,
    Renderer, bobber_position, generate_trees, tension_color,
)

DRAW_STEPS = (
    "_draw_sky", "_draw_water", "_draw_fishing_line", "_draw_bobber", "_draw_particles",
    "_draw_rod", "_draw_start_prompt", "_draw_session_panel", "_draw_waiting_indicator", "_draw_bite_indicator",
    "_draw_reeling_hud", "_draw_revealing", "_draw_caught", "_draw_escaped",
    "_draw_insufficient_balance", "_present",
)


@pytest.fixture
def renderer(pygame_init, settings):
    return Renderer(pygame.Surface((GAME_WIDTH, GAME_HEIGHT)), settings=settings, rng=random.Random(5))


@pytest.fixture
def draw_calls(renderer, monkeypatch):
    """Record the order of draw steps instead of drawing."""
    calls = []
    for name in DRAW_STEPS:
        monkeypatch.setattr(renderer, name, lambda *args, name=name: calls.append(name))
    return calls


class TestLayout:
    """Tests for the letterbox transform."""

    def test_exact_fit(self, renderer):
        """Matching aspect ratio scales without bars."""
        renderer.resize(720, 1280)
        assert renderer.scale == 2
        assert renderer.offset_x == 0
        assert renderer.offset_y == 0

    def test_wide_window_gets_side_bars(self, renderer):
        """A square window scales to the height and centres horizontally."""
        renderer.resize(1000, 1000)
        assert renderer.scale == pytest.approx(1.5625)
        assert renderer.offset_x == pytest.approx(218.75)
        assert renderer.offset_y == 0

    def test_tall_window_gets_top_bars(self, renderer):
        renderer.resize(360, 1000)
        assert renderer.scale == 1
        assert renderer.offset_y == pytest.approx(180)

    def test_letterbox_filled_with_sky(self, renderer, make_snapshot):
        """Bars around the canvas use the sky colour."""
        renderer.set_target(pygame.Surface((1000, 1000)))
        renderer.render(make_snapshot(), 16)
        assert tuple(renderer.target.get_at((5, 500)))[:3] == COLOR_SKY


class TestDrawOrder:
    """Tests for layer order per phase."""

    def test_idle(self, renderer, draw_calls, make_snapshot):
        """No line or bobber before the cast lands."""
        renderer.render(make_snapshot(Phase.IDLE), 16)
        assert draw_calls == [
            "_draw_sky", "_draw_water", "_draw_particles", "_draw_rod", "_draw_start_prompt",
            "_draw_session_panel", "_present",
        ]

    def test_reeling(self, renderer, draw_calls, make_snapshot):
        """Line and bobber sit under the particles, rod and HUD."""
        renderer.render(make_snapshot(Phase.REELING), 16)
        assert draw_calls == [
            "_draw_sky", "_draw_water", "_draw_fishing_line", "_draw_bobber",
            "_draw_particles", "_draw_rod", "_draw_reeling_hud", "_present",
        ]

    @pytest.mark.parametrize("phase, overlay", [
        (Phase.WAITING, "_draw_waiting_indicator"),
        (Phase.BITE, "_draw_bite_indicator"),
        (Phase.REVEALING, "_draw_revealing"),
        (Phase.CAUGHT, "_draw_caught"),
        (Phase.ESCAPED, "_draw_escaped"),
    ])
    def test_one_overlay_per_phase(self, renderer, draw_calls, make_snapshot, phase, overlay):
        renderer.render(make_snapshot(phase), 16)
        assert draw_calls[-2] == overlay
        assert overlay in draw_calls and draw_calls.count(overlay) == 1

    def test_insufficient_balance_replaces_scene(self, renderer, draw_calls, make_snapshot):
        """The funds overlay hides the scene entirely."""
        renderer.render(make_snapshot(Phase.IDLE), 16, RenderOptions(insufficient_balance=True))
        assert draw_calls == ["_draw_sky", "_draw_water", "_draw_insufficient_balance", "_present"]


class TestRendering:
    """Tests that draw for real."""

    @pytest.mark.parametrize("phase, fields", [
        (Phase.IDLE, {"is_practice_mode": False}),
        (Phase.CASTING, {"cast_progress": 0.5, "rod_angle": -0.2}),
        (Phase.WAITING, {"bobber_distance": 70.0,
                         "splash_particles": (SplashParticle(180, 230, 1, -3, 0.5),)}),
        (Phase.BITE, {"bobber_distance": 70.0, "bite_timer": 700.0}),
        (Phase.REELING, {"bobber_distance": 40.0, "tension": 65.0, "progress": 30.0,
                         "fish_is_fighting": True, "fish_fight_intensity": 0.7, "bobber_x": 12.0}),
        (Phase.REELING, {"tension": 85.0, "progress": 99.0}),
        (Phase.REVEALING, {"progress": 100.0}),
        (Phase.CAUGHT, {"last_catch": CaughtFish("Mythic Moonfish", Rarity.LEGENDARY, 90, 0.0, "3", False),
                        "last_payout": 20, "caught_fish_y": 300.0}),
        (Phase.CAUGHT, {"last_catch": CaughtFish("Tin Can", Rarity.JUNK, 8, 0.0, "practice", True),
                        "caught_fish_y": 256.0}),
        (Phase.ESCAPED, {"is_practice_mode": False, "stake": 25}),
    ])
    def test_every_phase_renders(self, renderer, make_snapshot, phase, fields):
        """Rendering draws pixels and leaves the snapshot as it was."""
        snapshot = make_snapshot(phase, **fields)
        expected = make_snapshot(phase, **fields)
        renderer.render(snapshot, 16)
        renderer.render(snapshot, 16, RenderOptions(insufficient_balance=False))
        assert snapshot == expected

    def test_insufficient_balance_overlay(self, renderer, make_snapshot):
        """The amber warning box covers the middle of the screen."""
        renderer.render(make_snapshot(), 16, RenderOptions(insufficient_balance=True))
        color = renderer.canvas.get_at((GAME_WIDTH // 2, int(GAME_HEIGHT * 0.45)))
        assert color.r > color.b

    def test_ambient_time_accumulates(self, renderer, make_snapshot):
        """Ambient animation runs on render time, not game time."""
        snapshot = make_snapshot()
        renderer.render(snapshot, 16)
        renderer.render(snapshot, 20)
        assert renderer.time == 36
        assert renderer.wave_offset == pytest.approx(36 / 500)

    def test_backdrop_built_once(self, renderer, make_snapshot):
        """Trees and gradients are cached between frames."""
        backdrop = renderer._backdrop
        trees = list(renderer.trees)
        renderer.render(make_snapshot(), 16)
        renderer.render(make_snapshot(Phase.WAITING), 16)
        assert renderer._backdrop is backdrop
        assert renderer.trees == trees



def catch(name, rarity=Rarity.COMMON, size=30, practice=False):
    return CaughtFish(name, rarity, size, 0.0, "practice" if practice else "1", practice)


@pytest.fixture
def drawn_text(renderer, monkeypatch):
    """Record every string the renderer draws, still drawing it."""
    texts = []
    real_draw_text = renderer_module.draw_text

    def record(surface, font, text, *args, **kwargs):
        texts.append(text)
        return real_draw_text(surface, font, text, *args, **kwargs)

    monkeypatch.setattr(renderer_module, "draw_text", record)
    return texts


class TestSessionPanel:
    """Tests for the idle session summary."""

    def test_recent_catches_newest_five(self, renderer, drawn_text, make_snapshot):
        """Only the five newest catches are listed, practice ones marked."""
        catches = (
            catch("Sunfish", practice=True),
            catch("Golden Trout", Rarity.RARE, 55),
            catch("Bass"),
            catch("Perch", practice=True),
            catch("Carp"),
            catch("Old Boot", Rarity.JUNK, 5),
        )
        renderer.render(make_snapshot(catches=catches), 16)

        assert "Sunfish (practice)" in drawn_text
        assert "Golden Trout" in drawn_text
        assert "55cm" in drawn_text
        assert "Carp" in drawn_text
        assert "Old Boot" not in drawn_text
        assert "Catches: 4 real, 2 practice" in drawn_text

    def test_payout_table_for_stake(self, renderer, drawn_text, make_snapshot):
        """Odds and net result per rarity follow the current stake."""
        renderer.render(make_snapshot(stake=10), 16)

        assert "Legendary" in drawn_text
        assert "10.0%" in drawn_text
        assert "55.0%" in drawn_text
        assert "+10" in drawn_text
        assert "-6" in drawn_text
        assert "House edge 70.0%" in drawn_text
        assert "Recent catches" not in drawn_text

    def test_last_payout_beside_balance(self, renderer, drawn_text, make_snapshot):
        """The settled payout stays beside the balance after the reset."""
        renderer.render(make_snapshot(Phase.CAUGHT, is_practice_mode=False, balance=1010, last_payout=20), 16)
        renderer.render(make_snapshot(is_practice_mode=False, balance=1010), 16)
        assert "Balance 1010" in drawn_text
        assert "Won 20" in drawn_text

    def test_loss_and_low_balance(self, renderer, drawn_text, make_snapshot):
        """A lost stake shows as a loss and a short balance is called out."""
        renderer.render(make_snapshot(Phase.ESCAPED, is_practice_mode=False, stake=10, last_payout=0), 16)
        renderer.render(make_snapshot(is_practice_mode=False, balance=5, stake=10), 16)
        assert "Lost 10" in drawn_text
        assert "Not enough balance!" in drawn_text

    def test_practice_hides_payout_result(self, renderer, drawn_text, make_snapshot):
        renderer.render(make_snapshot(Phase.ESCAPED, is_practice_mode=True, last_payout=0), 16)
        renderer.render(make_snapshot(is_practice_mode=True), 16)
        assert renderer.last_result is None
        assert "Lost 10" not in drawn_text
        assert "Practice: nothing is staked" in drawn_text


class TestHelpers:
    """Tests for pure renderer helpers."""

    @pytest.mark.parametrize("tension, color", [
        (0, COLOR_TENSION_LOW),
        (40, COLOR_TENSION_LOW),
        (41, COLOR_TENSION_MED),
        (70, COLOR_TENSION_MED),
        (71, COLOR_TENSION_HIGH),
    ])
    def test_tension_color(self, settings, tension, color):
        """Colour bands follow the configured thresholds."""
        assert tension_color(tension, settings) == color

    def test_bobber_perspective(self, make_snapshot):
        """Far bobber sits on the horizon and small, near bobber large at the shore."""
        far = bobber_position(make_snapshot(bobber_distance=100.0))
        near = bobber_position(make_snapshot(bobber_distance=0.0, bobber_x=10.0))
        assert far == pytest.approx((GAME_WIDTH / 2, HORIZON_Y, 0.5))
        assert near == pytest.approx((GAME_WIDTH / 2 + 10, NEAR_Y, 1.3))

    def test_treeline_spans_horizon(self):
        trees = generate_trees(random.Random(1))
        assert trees[0].x == 0
        assert trees[-1].x >= GAME_WIDTH - 20
        assert all(25 <= tree.height <= 45 for tree in trees)

    def test_color_helpers(self):
        assert hex_color("#FF8000") == (255, 128, 0)
        assert with_alpha((1, 2, 3), 0.5) == (1, 2, 3, 127)
        assert with_alpha((1, 2, 3), 2.0)[3] == 255
