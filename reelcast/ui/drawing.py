"""
Drawing helpers on top of pygame.draw / pygame.gfxdraw.

pygame.draw ignores alpha, so translucent shapes go through gfxdraw
(which blends RGBA colours) or a temporary SRCALPHA surface.
"""
import math
from typing import Dict, List, Optional, Sequence, Tuple

import pygame
import pygame.gfxdraw

Color = Tuple[int, ...]
Point = Tuple[float, float]


def hex_color(value: str) -> Tuple[int, int, int]:
    """'#RRGGBB' -> (r, g, b)."""
    value = value.lstrip("#")
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


def with_alpha(color: Sequence[int], alpha: float) -> Tuple[int, int, int, int]:
    """RGB plus an alpha given as 0..1."""
    return color[0], color[1], color[2], max(0, min(255, int(alpha * 255)))


def lerp_color(a: Sequence[int], b: Sequence[int], t: float) -> Tuple[int, int, int]:
    t = max(0.0, min(1.0, t))
    return tuple(int(a[i] + (b[i] - a[i]) * t) for i in range(3))


def vertical_gradient(
    surface: pygame.Surface,
    rect: pygame.Rect,
    stops: Sequence[Tuple[float, Sequence[int]]],
) -> None:
    """Fill rect with a top-to-bottom gradient through (offset, colour) stops."""
    height = max(1, rect.height)
    for row in range(rect.height):
        t = row / height
        for (start, color_a), (end, color_b) in zip(stops, stops[1:]):
            if start <= t <= end:
                local = (t - start) / (end - start) if end > start else 0.0
                color = lerp_color(color_a, color_b, local)
                break
        else:
            color = tuple(stops[-1][1][:3])
        pygame.draw.line(surface, color, (rect.left, rect.top + row), (rect.right - 1, rect.top + row))


def ellipse_points(
    cx: float,
    cy: float,
    rx: float,
    ry: float,
    start: float = 0.0,
    end: float = math.tau,
    rotation: float = 0.0,
    steps: int = 32,
) -> List[Point]:
    """Points along an (optionally rotated) elliptical arc."""
    cos_r = math.cos(rotation)
    sin_r = math.sin(rotation)
    points = []
    for i in range(steps + 1):
        a = start + (end - start) * i / steps
        x = math.cos(a) * rx
        y = math.sin(a) * ry
        points.append((cx + x * cos_r - y * sin_r, cy + x * sin_r + y * cos_r))
    return points


def quadratic_points(p0: Point, control: Point, p1: Point, steps: int = 24) -> List[Point]:
    """Points along a quadratic Bezier curve."""
    points = []
    for i in range(steps + 1):
        t = i / steps
        u = 1 - t
        x = u * u * p0[0] + 2 * u * t * control[0] + t * t * p1[0]
        y = u * u * p0[1] + 2 * u * t * control[1] + t * t * p1[1]
        points.append((x, y))
    return points


def _int_points(points: Sequence[Point]) -> List[Tuple[int, int]]:
    return [(int(round(x)), int(round(y))) for x, y in points]


def fill_polygon(surface: pygame.Surface, color: Color, points: Sequence[Point]) -> None:
    """Filled polygon; RGBA colours are blended."""
    if len(points) < 3:
        return
    if len(color) == 4:
        pygame.gfxdraw.filled_polygon(surface, _int_points(points), color)
    else:
        pygame.draw.polygon(surface, color, _int_points(points))


def fill_ellipse(
    surface: pygame.Surface,
    color: Color,
    center: Point,
    rx: float,
    ry: float,
    start: float = 0.0,
    end: float = math.tau,
    rotation: float = 0.0,
) -> None:
    """Filled ellipse or half-ellipse (closed through its centre chord)."""
    fill_polygon(surface, color, ellipse_points(center[0], center[1], rx, ry, start, end, rotation))


def fill_circle(surface: pygame.Surface, color: Color, center: Point, radius: float) -> None:
    if radius <= 0:
        return
    x, y = int(round(center[0])), int(round(center[1]))
    if len(color) == 4:
        pygame.gfxdraw.filled_circle(surface, x, y, int(round(radius)), color)
    else:
        pygame.draw.circle(surface, color, (x, y), int(round(radius)))


def stroke_polyline(surface: pygame.Surface, color: Color, points: Sequence[Point], width: int = 1) -> None:
    """Open polyline; translucent colours are drawn through a SRCALPHA layer."""
    if len(points) < 2:
        return
    if len(color) == 4 and color[3] < 255:
        layer = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
        pygame.draw.lines(layer, color, False, _int_points(points), width)
        surface.blit(layer, (0, 0))
    else:
        pygame.draw.lines(surface, color[:3], False, _int_points(points), width)


def fill_rect_alpha(
    surface: pygame.Surface,
    color: Color,
    rect: pygame.Rect,
    border_radius: int = 0,
) -> None:
    """Rectangle with optional alpha and rounded corners."""
    rect = pygame.Rect(rect)
    if rect.width <= 0 or rect.height <= 0:
        return
    if len(color) == 4 and color[3] < 255:
        layer = pygame.Surface(rect.size, pygame.SRCALPHA)
        pygame.draw.rect(layer, color, layer.get_rect(), border_radius=border_radius)
        surface.blit(layer, rect.topleft)
    else:
        pygame.draw.rect(surface, color[:3], rect, border_radius=border_radius)


def radial_glow(
    surface: pygame.Surface,
    color: Sequence[int],
    center: Point,
    radius: float,
    max_alpha: float,
    rings: int = 12,
) -> None:
    """Soft glow fading from max_alpha at the centre to nothing at radius."""
    layer = pygame.Surface((int(radius * 2) + 2, int(radius * 2) + 2), pygame.SRCALPHA)
    c = layer.get_width() // 2
    for i in range(rings, 0, -1):
        r = radius * i / rings
        pygame.gfxdraw.filled_circle(layer, c, c, int(r), with_alpha(color, max_alpha / rings))
    surface.blit(layer, (int(center[0]) - c, int(center[1]) - c))


def dashed_hline(
    surface: pygame.Surface,
    color: Color,
    x1: float,
    x2: float,
    y: float,
    dash: int = 4,
    gap: int = 4,
    width: int = 2,
) -> None:
    x = x1
    while x < x2:
        end = min(x + dash, x2)
        pygame.draw.line(surface, color[:3], (int(x), int(y)), (int(end), int(y)), width)
        x += dash + gap


class FontCache:
    """pygame fonts keyed by (size, bold)."""

    def __init__(self) -> None:
        if not pygame.font.get_init():
            pygame.font.init()
        self._fonts: Dict[Tuple[int, bool], pygame.font.Font] = {}

    def get(self, size: int, bold: bool = False) -> pygame.font.Font:
        key = (size, bold)
        if key not in self._fonts:
            font = pygame.font.Font(None, size)
            font.set_bold(bold)
            self._fonts[key] = font
        return self._fonts[key]


def draw_text(
    surface: pygame.Surface,
    font: pygame.font.Font,
    text: str,
    center: Point,
    color: Color,
    alpha: Optional[float] = None,
    scale: float = 1.0,
    angle: float = 0.0,
    anchor: str = "center",
) -> pygame.Rect:
    """Render text anchored at a point; supports alpha, pulse scale and rotation."""
    text_surf = font.render(text, True, color[:3])
    if scale != 1.0 or angle:
        text_surf = pygame.transform.rotozoom(text_surf, angle, scale)
    if alpha is not None:
        text_surf.set_alpha(max(0, min(255, int(alpha * 255))))
    elif len(color) == 4:
        text_surf.set_alpha(color[3])
    rect = text_surf.get_rect()
    setattr(rect, anchor, (int(center[0]), int(center[1])))
    surface.blit(text_surf, rect)
    return rect
