"""
Renderer - Reads a GameSnapshot and draws it with pygame.
This is a THIN ADAPTER - no game logic here.

Everything is drawn on a fixed 360x640 logical canvas which is then
scaled (letterboxed) onto the window surface.
"""
import math
import random
from dataclasses import dataclass
from typing import List, Optional, Tuple

import pygame

from reelcast.config import Settings, get_settings
from reelcast.gameplay.constants import (
    GAME_WIDTH, GAME_HEIGHT, HORIZON_Y, NEAR_Y,
    ROD_LENGTH, ROD_PIVOT_X, ROD_PIVOT_Y,
)
from reelcast.gameplay.fish import Rarity
from reelcast.gameplay.game import RenderOptions
from reelcast.gameplay.outcome import expected_return, payout_for, rarity_odds
from reelcast.gameplay.state import GameSnapshot, Phase
from .drawing import (
    FontCache, hex_color, with_alpha, vertical_gradient, quadratic_points,
    fill_polygon, fill_ellipse, fill_circle, fill_rect_alpha, stroke_polyline,
    radial_glow, dashed_hline, ellipse_points, draw_text,
)


# Colors
COLOR_SKY = hex_color("#87CEEB")
COLOR_SKY_TOP = hex_color("#6BB3D9")
COLOR_HORIZON = hex_color("#E8D5B7")
COLOR_SUN = hex_color("#FFEB3B")
COLOR_SUN_GLOW = hex_color("#FFECB3")
COLOR_TREE = hex_color("#2D5016")
COLOR_WATER = hex_color("#2E7D9E")
COLOR_WATER_MID = hex_color("#256B89")
COLOR_WATER_NEAR = hex_color("#1D5A75")
COLOR_WATER_DEEP = hex_color("#194D66")
COLOR_ROD = hex_color("#5D4037")
COLOR_ROD_LIGHT = hex_color("#795548")
COLOR_ROD_DARK = hex_color("#3E2723")
COLOR_REEL = hex_color("#78909C")
COLOR_REEL_DARK = hex_color("#546E7A")
COLOR_HANDLE = hex_color("#4E342E")
COLOR_LINE = hex_color("#E0E0E0")
COLOR_BOBBER = hex_color("#E53935")
COLOR_BOBBER_WHITE = hex_color("#FFFFFF")
COLOR_TENSION_LOW = hex_color("#4CAF50")
COLOR_TENSION_MED = hex_color("#FFC107")
COLOR_TENSION_HIGH = hex_color("#F44336")
COLOR_PROGRESS_BAR = hex_color("#64B5F6")
COLOR_PROGRESS_BG = hex_color("#1A1A2E")
COLOR_TEXT = hex_color("#FFFFFF")
COLOR_BLACK = (0, 0, 0)
COLOR_GOLD = hex_color("#FFD700")
COLOR_ORANGE = hex_color("#FF9800")
COLOR_WARNING = hex_color("#FCD34D")
COLOR_MYSTERY_FISH = hex_color("#4A5568")
COLOR_MYSTERY_MARK = hex_color("#A0AEC0")


@dataclass(frozen=True)
class RarityPalette:
    primary: Tuple[int, int, int]
    secondary: Tuple[int, int, int]
    glow: Optional[Tuple[int, int, int]] = None


RARITY_COLORS = {
    Rarity.JUNK: RarityPalette(hex_color("#666666"), hex_color("#444444")),
    Rarity.COMMON: RarityPalette(hex_color("#FFB74D"), hex_color("#F57C00")),
    Rarity.RARE: RarityPalette(hex_color("#FFD700"), hex_color("#FFA000"), hex_color("#FFD700")),
    Rarity.LEGENDARY: RarityPalette(hex_color("#E040FB"), hex_color("#9C27B0"), hex_color("#E040FB")),
}

# HUD layout (logical px)
TENSION_BAR = pygame.Rect(310, 80, 24, 180)
PROGRESS_BAR = pygame.Rect(40, 570, 280, 20)
SESSION_PANEL = pygame.Rect(16, 14, 328, 286)
RECENT_CATCHES_SHOWN = 5
DANGER_ZONE_FRACTION = 0.3
BITE_TIMER_WIDTH = 100
BITE_TIMER_HEIGHT = 8

SUN_POS = (GAME_WIDTH * 0.75, GAME_HEIGHT * 0.1)
SUN_RADIUS = 25
WAVE_LINES = 8
WAVE_SPACING = 25
SPARKLES = 6


@dataclass(frozen=True)
class Tree:
    x: float
    height: float
    width: float
    pine: bool


def generate_trees(rng: random.Random) -> List[Tree]:
    """Treeline along the horizon, left to right."""
    trees = []
    x = 0.0
    while x < GAME_WIDTH + 20:
        trees.append(Tree(
            x=x,
            height=25 + rng.random() * 20,
            width=12 + rng.random() * 10,
            pine=rng.random() > 0.3,
        ))
        x += 8 + rng.random() * 12
    return trees


def tension_color(tension: float, settings: Settings) -> Tuple[int, int, int]:
    if tension > settings.reeling.tension_high_threshold:
        return COLOR_TENSION_HIGH
    if tension > settings.reeling.tension_low_threshold:
        return COLOR_TENSION_MED
    return COLOR_TENSION_LOW


def rod_point(snapshot: GameSnapshot, fraction: float) -> Tuple[float, float]:
    """Point a given fraction of the way from the rod pivot to its tip."""
    angle = snapshot.rod_angle - math.pi / 2
    return (
        ROD_PIVOT_X + math.cos(angle) * ROD_LENGTH * fraction,
        ROD_PIVOT_Y + math.sin(angle) * ROD_LENGTH * fraction,
    )


def _rect(x: float, y: float, width: float, height: float) -> pygame.Rect:
    return pygame.Rect(round(x), round(y), round(width), round(height))


def bobber_position(snapshot: GameSnapshot) -> Tuple[float, float, float]:
    """(x, y, scale) of the bobber with parabolic perspective."""
    t = 1 - snapshot.bobber_distance / 100
    y = HORIZON_Y + (NEAR_Y - HORIZON_Y) * t * t
    x = GAME_WIDTH / 2 + snapshot.bobber_x
    return x, y, 0.5 + t * 0.8


class Renderer:
    """
    Draws game snapshots onto a target surface.

    The renderer keeps only presentation state: ambient time, the
    treeline and the letterbox transform. It never modifies a snapshot.
    """

    def __init__(
        self,
        target: pygame.Surface,
        settings: Optional[Settings] = None,
        rng: Optional[random.Random] = None,
    ):
        self.target = target
        self.settings = settings if settings is not None else get_settings()
        self.canvas = pygame.Surface((GAME_WIDTH, GAME_HEIGHT))
        self.fonts = FontCache()

        self.time = 0.0
        self.wave_offset = 0.0
        self.scale = 1.0
        self.offset_x = 0.0
        self.offset_y = 0.0
        # (payout, stake) of the last settled real-stake cycle
        self.last_result: Optional[Tuple[int, int]] = None

        self.trees = generate_trees(rng or random.Random())
        self._backdrop = self._build_backdrop()
        self.resize(*target.get_size())

    # =========================================================================
    # LAYOUT
    # =========================================================================

    def resize(self, width: int, height: int) -> None:
        """Fit the logical canvas into width x height, centred."""
        width = max(1, width)
        height = max(1, height)
        if width / height < GAME_WIDTH / GAME_HEIGHT:
            self.scale = width / GAME_WIDTH
        else:
            self.scale = height / GAME_HEIGHT
        self.offset_x = (width - GAME_WIDTH * self.scale) / 2
        self.offset_y = (height - GAME_HEIGHT * self.scale) / 2

    def set_target(self, target: pygame.Surface) -> None:
        """New window surface (after a resize event)."""
        self.target = target
        self.resize(*target.get_size())

    # =========================================================================
    # FRAME
    # =========================================================================

    def render(self, snapshot: GameSnapshot, delta_ms: float, options: Optional[RenderOptions] = None) -> None:
        """Draw one frame of the given snapshot."""
        options = options or RenderOptions()
        self.time += delta_ms
        self.wave_offset = self.time / 500
        if snapshot.is_result and snapshot.last_payout is not None and not snapshot.is_practice_mode:
            self.last_result = (snapshot.last_payout, snapshot.stake)

        self._draw_sky()
        self._draw_water()

        if options.insufficient_balance:
            self._draw_insufficient_balance()
        else:
            self._draw_scene(snapshot)

        self._present()

    def _draw_scene(self, snapshot: GameSnapshot) -> None:
        if snapshot.phase not in (Phase.IDLE, Phase.CASTING):
            self._draw_fishing_line(snapshot)
            self._draw_bobber(snapshot)

        self._draw_particles(snapshot)
        self._draw_rod(snapshot)

        phase = snapshot.phase
        if phase == Phase.IDLE:
            self._draw_start_prompt(snapshot)
            self._draw_session_panel(snapshot)
        elif phase == Phase.WAITING:
            self._draw_waiting_indicator()
        elif phase == Phase.BITE:
            self._draw_bite_indicator(snapshot)
        elif phase == Phase.REELING:
            self._draw_reeling_hud(snapshot)
        elif phase == Phase.REVEALING:
            self._draw_revealing()
        elif phase == Phase.CAUGHT:
            self._draw_caught(snapshot)
        elif phase == Phase.ESCAPED:
            self._draw_escaped(snapshot)

    def _present(self) -> None:
        self.target.fill(COLOR_SKY)
        size = (max(1, round(GAME_WIDTH * self.scale)), max(1, round(GAME_HEIGHT * self.scale)))
        if size == self.canvas.get_size():
            scaled = self.canvas
        else:
            scaled = pygame.transform.smoothscale(self.canvas, size)
        self.target.blit(scaled, (round(self.offset_x), round(self.offset_y)))

    # =========================================================================
    # BACKGROUND
    # =========================================================================

    def _build_backdrop(self) -> pygame.Surface:
        """Static parts of sky and water, drawn once."""
        surface = pygame.Surface((GAME_WIDTH, GAME_HEIGHT))
        vertical_gradient(surface, pygame.Rect(0, 0, GAME_WIDTH, HORIZON_Y),
                          [(0.0, COLOR_SKY_TOP), (1.0, COLOR_SKY)])
        vertical_gradient(surface, pygame.Rect(0, HORIZON_Y, GAME_WIDTH, GAME_HEIGHT - HORIZON_Y),
                          [(0.0, COLOR_WATER), (0.3, COLOR_WATER_MID),
                           (0.6, COLOR_WATER_NEAR), (1.0, COLOR_WATER_DEEP)])

        radial_glow(surface, COLOR_SUN_GLOW, SUN_POS, SUN_RADIUS * 3, 0.6)
        fill_circle(surface, COLOR_SUN, SUN_POS, SUN_RADIUS)

        pygame.draw.rect(surface, COLOR_HORIZON, (0, HORIZON_Y - 3, GAME_WIDTH, 6))
        for tree in self.trees:
            self._draw_tree(surface, tree)
        return surface

    def _draw_tree(self, surface: pygame.Surface, tree: Tree) -> None:
        base_y = HORIZON_Y
        center_x = tree.x + tree.width / 2
        if tree.pine:
            pygame.draw.rect(surface, COLOR_TREE,
                             _rect(tree.x + tree.width * 0.35, base_y - 5, tree.width * 0.3, 5))
            for layer in range(3):
                layer_y = base_y - 5 - layer * (tree.height * 0.3)
                layer_width = tree.width * (1 - layer * 0.15)
                layer_height = tree.height * 0.45
                fill_polygon(surface, COLOR_TREE, [
                    (center_x, layer_y - layer_height),
                    (center_x - layer_width / 2, layer_y),
                    (center_x + layer_width / 2, layer_y),
                ])
        else:
            pygame.draw.rect(surface, COLOR_TREE,
                             _rect(tree.x + tree.width * 0.35, base_y - tree.height * 0.4,
                                   tree.width * 0.3, tree.height * 0.4))
            fill_ellipse(surface, COLOR_TREE, (center_x, base_y - tree.height * 0.6),
                         tree.width * 0.6, tree.height * 0.5)

    def _draw_sky(self) -> None:
        self.canvas.blit(self._backdrop, (0, 0))

    def _draw_water(self) -> None:
        waves = pygame.Surface((GAME_WIDTH, GAME_HEIGHT), pygame.SRCALPHA)
        wave_color = with_alpha(COLOR_TEXT, 0.15)
        for i in range(WAVE_LINES):
            y = HORIZON_Y + 20 + i * WAVE_SPACING
            points = [
                (x, round(y + math.sin(x / 40 + self.wave_offset + i * 0.5) * (3 + i * 0.5)))
                for x in range(0, GAME_WIDTH + 1, 5)
            ]
            pygame.draw.lines(waves, wave_color, False, points)
        self.canvas.blit(waves, (0, 0))

        water_height = GAME_HEIGHT - HORIZON_Y
        for i in range(SPARKLES):
            x = (self.time / 20 + i * 60) % GAME_WIDTH
            y = HORIZON_Y + 40 + (i * 50) % (water_height - 80)
            size = 2 + math.sin(self.time / 200 + i * 2) * 1.5
            fill_rect_alpha(self.canvas, with_alpha(COLOR_TEXT, 0.6),
                            pygame.Rect(int(x - size / 2), int(y - size / 2), max(1, round(size)), max(1, round(size))))

    # =========================================================================
    # SCENE
    # =========================================================================

    def _draw_fishing_line(self, snapshot: GameSnapshot) -> None:
        tip = rod_point(snapshot, 1.0)
        bob_x, bob_y, _ = bobber_position(snapshot)

        color = COLOR_LINE
        if snapshot.phase == Phase.REELING:
            color = tension_color(snapshot.tension, self.settings)
            if color == COLOR_TENSION_LOW:
                color = COLOR_LINE

        sag = 30 - (snapshot.tension / 100) * 20
        control = ((tip[0] + bob_x) / 2, max(tip[1], bob_y) / 2 + sag)
        stroke_polyline(self.canvas, color, quadratic_points(tip, control, (bob_x, bob_y)), 2)

    def _draw_bobber(self, snapshot: GameSnapshot) -> None:
        x, y, scale = bobber_position(snapshot)
        y += math.sin(self.time / 400) * 3 * scale

        fill_ellipse(self.canvas, (0, 0, 0, 51), (x, y + 8 * scale), 10 * scale, 4 * scale)
        fill_ellipse(self.canvas, COLOR_BOBBER_WHITE, (x, y + 5 * scale), 8 * scale, 10 * scale, 0, math.pi)
        fill_ellipse(self.canvas, COLOR_BOBBER, (x, y - 5 * scale), 8 * scale, 10 * scale, math.pi, math.tau)
        fill_ellipse(self.canvas, (255, 255, 255, 102), (x - 3 * scale, y - 8 * scale),
                     2 * scale, 3 * scale, rotation=-0.3)

        if snapshot.phase in (Phase.WAITING, Phase.BITE):
            ripple = (self.time / 500) % 1
            radius = 15 + ripple * 20
            points = ellipse_points(x, y + 5 * scale, radius * scale, (5 + ripple * 8) * scale)
            stroke_polyline(self.canvas, with_alpha(COLOR_TEXT, (1 - ripple) * 0.5), points, 2)

    def _draw_particles(self, snapshot: GameSnapshot) -> None:
        for p in snapshot.splash_particles:
            fill_rect_alpha(self.canvas, with_alpha(COLOR_TEXT, p.life), pygame.Rect(int(p.x - 3), int(p.y - 3), 6, 6))

    def _draw_rod(self, snapshot: GameSnapshot) -> None:
        pivot = rod_point(snapshot, 0.0)
        tip = rod_point(snapshot, 1.0)

        stroke_polyline(self.canvas, (0, 0, 0, 77),
                        [(pivot[0] + 3, pivot[1] + 3), (tip[0] + 3, tip[1] + 3)], 12)

        sections = ((0.0, 0.25, COLOR_ROD, 10), (0.25, 0.6, COLOR_ROD_LIGHT, 7), (0.6, 1.0, COLOR_ROD_DARK, 3))
        for start, end, color, width in sections:
            a = rod_point(snapshot, start)
            b = rod_point(snapshot, end)
            pygame.draw.line(self.canvas, color, (round(a[0]), round(a[1])), (round(b[0]), round(b[1])), width)

        angle = snapshot.rod_angle - math.pi / 2
        reel = (pivot[0] + math.cos(angle) * 40, pivot[1] + math.sin(angle) * 40)
        fill_circle(self.canvas, COLOR_REEL, reel, 14)
        pygame.draw.circle(self.canvas, COLOR_REEL_DARK, (round(reel[0]), round(reel[1])), 14, 2)
        fill_circle(self.canvas, COLOR_REEL_DARK, reel, 8)

        handle_angle = self.time / 100
        handle = (reel[0] + math.cos(handle_angle) * 16, reel[1] + math.sin(handle_angle) * 16)
        pygame.draw.line(self.canvas, COLOR_REEL_DARK, (round(reel[0]), round(reel[1])),
                         (round(handle[0]), round(handle[1])), 3)
        fill_circle(self.canvas, COLOR_HANDLE, handle, 5)

        for i in range(1, 5):
            fill_circle(self.canvas, COLOR_REEL_DARK, rod_point(snapshot, i * 0.2), 2)

    # =========================================================================
    # OVERLAYS
    # =========================================================================

    def _dim(self, alpha: float) -> None:
        fill_rect_alpha(self.canvas, with_alpha(COLOR_BLACK, alpha), self.canvas.get_rect())

    def _draw_start_prompt(self, snapshot: GameSnapshot) -> None:
        self._dim(0.4)
        cx, cy = GAME_WIDTH / 2, GAME_HEIGHT * 0.55
        pulse = 1 + math.sin(self.time / 300) * 0.05
        draw_text(self.canvas, self.fonts.get(36, bold=True), "TAP TO CAST", (cx, cy), COLOR_TEXT, scale=pulse)
        draw_text(self.canvas, self.fonts.get(20), "Hold to reel in your catch",
                  (cx, cy + 35 * pulse), COLOR_TEXT, alpha=0.7, scale=pulse)

        stake_text = "Practice mode" if snapshot.is_practice_mode else f"Stake {snapshot.stake}  (keys 1-4)"
        draw_text(self.canvas, self.fonts.get(18), stake_text, (cx, GAME_HEIGHT - 40), COLOR_TEXT, alpha=0.6)

    def _draw_session_panel(self, snapshot: GameSnapshot) -> None:
        """Balance, payout table, catch counts and the latest catches."""
        fill_rect_alpha(self.canvas, with_alpha(COLOR_BLACK, 0.45), SESSION_PANEL, border_radius=10)
        left = SESSION_PANEL.left + 12
        right = SESSION_PANEL.right - 12
        small = self.fonts.get(16)
        y = SESSION_PANEL.top + 18

        heading = self.fonts.get(20, bold=True)
        draw_text(self.canvas, heading, f"Balance {snapshot.balance}", (left, y), COLOR_TEXT, anchor="midleft")
        if self.last_result is not None and not snapshot.is_practice_mode:
            payout, stake = self.last_result
            if payout > 0:
                draw_text(self.canvas, heading, f"Won {payout}", (right, y), COLOR_TENSION_LOW, anchor="midright")
            else:
                draw_text(self.canvas, heading, f"Lost {stake}", (right, y),
                          COLOR_TENSION_HIGH, anchor="midright")
        y += 20
        if snapshot.is_practice_mode:
            draw_text(self.canvas, small, "Practice: nothing is staked", (left, y), COLOR_TEXT,
                      alpha=0.7, anchor="midleft")
        elif snapshot.balance < snapshot.stake:
            draw_text(self.canvas, small, "Not enough balance!", (left, y), COLOR_TENSION_HIGH, anchor="midleft")

        y += 22
        economy = self.settings.economy
        draw_text(self.canvas, small, f"Payouts at stake {snapshot.stake}", (left, y), COLOR_GOLD, anchor="midleft")
        for rarity, probability in rarity_odds(self.settings.catch_table).items():
            y += 16
            net = payout_for(rarity, snapshot.stake, economy) - snapshot.stake
            color = RARITY_COLORS[rarity].primary
            draw_text(self.canvas, small, rarity.value.title(), (left, y), color, anchor="midleft")
            draw_text(self.canvas, small, f"{probability:.1%}", (left + 150, y), COLOR_TEXT,
                      alpha=0.8, anchor="midright")
            draw_text(self.canvas, small, f"{net:+d}", (right, y), color, anchor="midright")
        y += 18
        house_edge = 1 - expected_return(self.settings.catch_table, economy)
        draw_text(self.canvas, small, f"House edge {house_edge:.1%}", (left, y), COLOR_TEXT,
                  alpha=0.6, anchor="midleft")

        practice_count = sum(1 for fish in snapshot.catches if fish.is_practice)
        real_count = len(snapshot.catches) - practice_count
        y += 22
        draw_text(self.canvas, small, f"Catches: {real_count} real, {practice_count} practice", (left, y),
                  COLOR_TEXT, anchor="midleft")

        if not snapshot.catches:
            return
        y += 20
        draw_text(self.canvas, small, "Recent catches", (left, y), COLOR_GOLD, anchor="midleft")
        for fish in snapshot.catches[:RECENT_CATCHES_SHOWN]:
            y += 16
            label = f"{fish.name} (practice)" if fish.is_practice else fish.name
            alpha = 0.6 if fish.is_practice else 1.0
            color = RARITY_COLORS[fish.rarity].primary
            draw_text(self.canvas, small, label, (left, y), color, alpha=alpha, anchor="midleft")
            draw_text(self.canvas, small, f"{fish.size}cm", (right, y), COLOR_TEXT, alpha=alpha, anchor="midright")

    def _draw_insufficient_balance(self) -> None:
        self._dim(0.7)
        cx, cy = GAME_WIDTH / 2, GAME_HEIGHT * 0.45
        pulse = 1 + math.sin(self.time / 200) * 0.03

        box = pygame.Rect(0, 0, int(240 * pulse), int(140 * pulse))
        box.center = (int(cx), int(cy))
        fill_rect_alpha(self.canvas, (180, 83, 9, 230), box, border_radius=12)
        pygame.draw.rect(self.canvas, hex_color("#F59E0B"), box, 3, border_radius=12)

        fill_polygon(self.canvas, COLOR_WARNING, [
            (cx, cy - 45 * pulse), (cx - 20 * pulse, cy - 15 * pulse), (cx + 20 * pulse, cy - 15 * pulse),
        ])
        draw_text(self.canvas, self.fonts.get(24, bold=True), "!", (cx, cy - 25 * pulse), hex_color("#78350F"))
        title = self.fonts.get(24, bold=True)
        draw_text(self.canvas, title, "INSUFFICIENT", (cx, cy + 10 * pulse), hex_color("#FEF3C7"), scale=pulse)
        draw_text(self.canvas, title, "BALANCE", (cx, cy + 32 * pulse), hex_color("#FEF3C7"), scale=pulse)
        draw_text(self.canvas, self.fonts.get(16), "Fund wallet to play", (cx, cy + 55 * pulse),
                  hex_color("#FDE68A"), scale=pulse)

    def _draw_waiting_indicator(self) -> None:
        dots = int((self.time / 500) % 4)
        box = pygame.Rect(int(GAME_WIDTH / 2 - 60), 20, 120, 30)
        fill_rect_alpha(self.canvas, with_alpha(COLOR_BLACK, 0.5), box, border_radius=8)
        draw_text(self.canvas, self.fonts.get(22), "Waiting" + "." * dots, box.center, COLOR_TEXT)

    def _draw_bite_indicator(self, snapshot: GameSnapshot) -> None:
        x, y, _ = bobber_position(snapshot)
        pulse = 1 + math.sin(self.time / 80) * 0.15
        fill_circle(self.canvas, COLOR_GOLD, (x, y - 60), 22 * pulse)
        draw_text(self.canvas, self.fonts.get(24, bold=True), "TAP!", (x, y - 60), COLOR_BLACK, scale=pulse)

        window = self.settings.timing.bite_window_ms
        remaining = max(0.0, min(1.0, snapshot.bite_timer / window))
        timer_x = GAME_WIDTH / 2 - BITE_TIMER_WIDTH / 2
        timer_y = GAME_HEIGHT * 0.85
        fill_rect_alpha(self.canvas, with_alpha(COLOR_BLACK, 0.5),
                        pygame.Rect(int(timer_x - 5), int(timer_y - 5), BITE_TIMER_WIDTH + 10, BITE_TIMER_HEIGHT + 10),
                        border_radius=5)
        fill_rect_alpha(self.canvas, COLOR_GOLD,
                        pygame.Rect(int(timer_x), int(timer_y), int(BITE_TIMER_WIDTH * remaining), BITE_TIMER_HEIGHT),
                        border_radius=3)

    def _draw_reeling_hud(self, snapshot: GameSnapshot) -> None:
        cfg = self.settings.reeling
        bar = TENSION_BAR
        in_zone = cfg.fight_zone_min <= snapshot.tension <= cfg.fight_zone_max
        zone_color = COLOR_TENSION_LOW if in_zone else COLOR_ORANGE

        pygame.draw.rect(self.canvas, COLOR_PROGRESS_BG, bar.inflate(6, 6), border_radius=4)
        fill_rect_alpha(self.canvas, (244, 67, 54, 77),
                        pygame.Rect(bar.x, bar.y, bar.width, int(bar.height * DANGER_ZONE_FRACTION)))

        if snapshot.fish_is_fighting:
            zone_min_y = bar.bottom - (cfg.fight_zone_min / 100) * bar.height
            zone_max_y = bar.bottom - (cfg.fight_zone_max / 100) * bar.height
            pulse_alpha = 0.3 + math.sin(self.time / 150) * 0.15
            fill_rect_alpha(self.canvas, with_alpha(zone_color, pulse_alpha),
                            pygame.Rect(bar.x, int(zone_max_y), bar.width, int(zone_min_y - zone_max_y)))
            dashed_hline(self.canvas, zone_color, bar.x - 5, bar.right + 5, zone_max_y)
            dashed_hline(self.canvas, zone_color, bar.x - 5, bar.right + 5, zone_min_y)
            draw_text(self.canvas, self.fonts.get(12, bold=True), "ZONE",
                      (bar.x - 8, (zone_min_y + zone_max_y) / 2), zone_color, anchor="midright")

        fill_height = int((snapshot.tension / 100) * bar.height)
        pygame.draw.rect(self.canvas, tension_color(snapshot.tension, self.settings),
                         (bar.x, bar.bottom - fill_height, bar.width, fill_height))
        flashing = snapshot.fish_is_fighting and math.sin(self.time / 60) > 0
        pygame.draw.rect(self.canvas, COLOR_ORANGE if flashing else COLOR_TEXT, bar, 2)
        draw_text(self.canvas, self.fonts.get(14), "TENSION", (bar.x - 8, bar.centery), COLOR_TEXT, angle=90)

        progress = PROGRESS_BAR
        pygame.draw.rect(self.canvas, COLOR_PROGRESS_BG, progress.inflate(6, 6), border_radius=4)
        fill_width = int((snapshot.progress / 100) * progress.width)
        pygame.draw.rect(self.canvas, COLOR_PROGRESS_BAR, (progress.x, progress.y, fill_width, progress.height))
        pygame.draw.rect(self.canvas, COLOR_TEXT, progress, 2)

        # Identity stays hidden until the reveal
        fish_x = progress.x + fill_width + 20
        fish_y = progress.centery
        fill_ellipse(self.canvas, COLOR_MYSTERY_FISH, (fish_x, fish_y), 12, 8)
        fill_polygon(self.canvas, COLOR_MYSTERY_FISH,
                     [(fish_x + 10, fish_y), (fish_x + 18, fish_y - 6), (fish_x + 18, fish_y + 6)])
        draw_text(self.canvas, self.fonts.get(14, bold=True), "?", (fish_x - 2, fish_y), COLOR_MYSTERY_MARK)

        if snapshot.fish_is_fighting:
            pulse = 1 + math.sin(self.time / 80) * 0.1
            alert = pygame.Rect(0, 0, int(100 * pulse), int(30 * pulse))
            alert.center = (GAME_WIDTH // 2, 50)
            pygame.draw.rect(self.canvas, COLOR_ORANGE, alert, border_radius=8)
            draw_text(self.canvas, self.fonts.get(22, bold=True), "FIGHTING!", alert.center, COLOR_BLACK, scale=pulse)

            instruction = "Keep it steady!" if in_zone else "Get tension in the ZONE!"
            draw_text(self.canvas, self.fonts.get(20), instruction, (GAME_WIDTH / 2, GAME_HEIGHT - 30), zone_color)
        else:
            draw_text(self.canvas, self.fonts.get(18), "HOLD to reel - RELEASE to ease tension",
                      (GAME_WIDTH / 2, GAME_HEIGHT - 30), COLOR_TEXT, alpha=0.8)

    def _draw_revealing(self) -> None:
        self._dim(0.7)
        cx, cy = GAME_WIDTH / 2, GAME_HEIGHT * 0.4
        pulse = 1 + math.sin(self.time / 150) * 0.05

        draw_text(self.canvas, self.fonts.get(36, bold=True), "STOP CLICKING!", (cx, cy - 40 * pulse),
                  COLOR_WARNING, scale=pulse)
        pygame.draw.circle(self.canvas, COLOR_WARNING, (int(cx), int(cy + 20 * pulse)), int(30 * pulse), 3)
        # Raised palm
        palm = pygame.Rect(0, 0, int(18 * pulse), int(16 * pulse))
        palm.midtop = (int(cx), int(cy + 22 * pulse))
        pygame.draw.rect(self.canvas, COLOR_WARNING, palm, border_radius=4)
        for i in range(4):
            finger_x = palm.left + 2 + i * (palm.width - 4) / 3
            pygame.draw.line(self.canvas, COLOR_WARNING, (int(finger_x), palm.top),
                             (int(finger_x), int(palm.top - 12 * pulse)), 3)

        dots = int((self.time / 400) % 4)
        draw_text(self.canvas, self.fonts.get(22), "Wallet prompt incoming" + "." * dots,
                  (cx, cy + 80), COLOR_TEXT, alpha=0.8)
        draw_text(self.canvas, self.fonts.get(16), "Sign to reveal your catch", (cx, cy + 105), COLOR_TEXT, alpha=0.5)

    def _draw_caught(self, snapshot: GameSnapshot) -> None:
        fish = snapshot.last_catch
        if fish is None:
            return
        self._dim(0.6)
        cx = GAME_WIDTH / 2
        fish_y = snapshot.caught_fish_y
        palette = RARITY_COLORS[fish.rarity]
        size = min(fish.size, 80)

        if palette.glow is not None:
            glow_pulse = 1 + math.sin(self.time / 200) * 0.2
            radial_glow(self.canvas, palette.glow, (cx, fish_y), size * 1.5 * glow_pulse, 0.5)
            fill_ellipse(self.canvas, with_alpha(palette.glow, 0.25), (cx, fish_y), size * 1.5, size)

        fill_ellipse(self.canvas, palette.primary, (cx, fish_y), size, size * 0.6)
        fill_ellipse(self.canvas, palette.secondary, (cx, fish_y), size, size * 0.6, math.pi, math.tau)
        fill_polygon(self.canvas, palette.primary, [
            (cx + size * 0.8, fish_y), (cx + size * 1.4, fish_y - size * 0.5), (cx + size * 1.4, fish_y + size * 0.5),
        ])
        fill_polygon(self.canvas, palette.secondary, [
            (cx - size * 0.2, fish_y - size * 0.55), (cx + size * 0.3, fish_y - size * 0.55),
            (cx + size * 0.1, fish_y - size * 0.9),
        ])
        for i in range(3):
            scale_x = cx - size * 0.3 + i * size * 0.3
            arc = ellipse_points(scale_x, fish_y, size * 0.25, size * 0.25, -0.5, 0.5, steps=8)
            stroke_polyline(self.canvas, with_alpha(palette.secondary, 0.5), arc)
        fill_circle(self.canvas, COLOR_TEXT, (cx - size * 0.55, fish_y - size * 0.1), size * 0.15)
        fill_circle(self.canvas, COLOR_BLACK, (cx - size * 0.55, fish_y - size * 0.1), size * 0.08)

        draw_text(self.canvas, self.fonts.get(36, bold=True), "NICE CATCH!", (cx, fish_y - 100), COLOR_TENSION_LOW)
        badge = pygame.Rect(int(cx - 50), int(fish_y + 70), 100, 25)
        pygame.draw.rect(self.canvas, palette.primary, badge, border_radius=5)
        draw_text(self.canvas, self.fonts.get(18, bold=True), fish.rarity.value, badge.center, COLOR_BLACK)
        draw_text(self.canvas, self.fonts.get(26, bold=True), fish.name, (cx, fish_y + 115), COLOR_TEXT)
        draw_text(self.canvas, self.fonts.get(18), f"{fish.size} cm", (cx, fish_y + 140), COLOR_TEXT, alpha=0.7)

        if snapshot.last_payout is not None:
            won = snapshot.last_payout > 0
            text = f"+{snapshot.last_payout}" if won else f"-{snapshot.stake}"
            draw_text(self.canvas, self.fonts.get(32, bold=True), text, (cx, fish_y + 175),
                      COLOR_TENSION_LOW if won else COLOR_TENSION_HIGH)

        if snapshot.can_dismiss:
            self._draw_continue_hint("Tap to continue")

    def _draw_escaped(self, snapshot: GameSnapshot) -> None:
        self._dim(0.6)
        cx, cy = GAME_WIDTH / 2, GAME_HEIGHT * 0.4
        draw_text(self.canvas, self.fonts.get(36, bold=True), "IT GOT AWAY!", (cx, cy), COLOR_TENSION_HIGH)
        draw_text(self.canvas, self.fonts.get(18), "Watch your tension!", (cx, cy + 40), COLOR_TEXT, alpha=0.7)
        if snapshot.stake > 0 and not snapshot.is_practice_mode:
            draw_text(self.canvas, self.fonts.get(32, bold=True), f"-{snapshot.stake}", (cx, cy + 80),
                      COLOR_TENSION_HIGH)
        if snapshot.can_dismiss:
            self._draw_continue_hint("Tap to try again")

    def _draw_continue_hint(self, text: str) -> None:
        alpha = 0.5 + math.sin(self.time / 300) * 0.3
        draw_text(self.canvas, self.fonts.get(18), text, (GAME_WIDTH / 2, GAME_HEIGHT - 50), COLOR_TEXT, alpha=alpha)
