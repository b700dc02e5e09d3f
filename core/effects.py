"""Text-transform effects played while a task is being checked or deleted.

Every effect maps ``(text, elapsed, effect, palette)`` to prompt_toolkit
style/text fragments, one fragment per source character. Nothing here keeps
state between calls: randomness comes from the ``rng`` argument and colors
from the ``palette`` argument.

Progress-driven effects resolve positions left of ``floor(progress * len)``
(or the equivalent distance from the ends/center) and never un-resolve them
as time grows; the boundary position gets a cursor highlight. Once progress
reaches 1 their output is fixed.
"""

import math
import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Dict, FrozenSet, List, Optional, Tuple

from .palette import Palette
from .task import CHECK_ANIM_DURATION

Fragments = List[Tuple[str, str]]


class Effect(IntEnum):
    SPARKLE = 0
    MATRIX = 1
    WIPE_RIGHT = 2
    WIPE_LEFT = 3
    RAINBOW = 4
    WAVE = 5
    BINARY = 6
    DISSOLVE = 7
    FLIP = 8
    PULSE = 9
    TYPEWRITER = 10
    PARTICLE = 11
    REDACT = 12
    CHAOS = 13
    CONVERGE = 14
    BOUNCE = 15
    SPIN = 16
    ZIPPER = 17
    ERASER = 18
    GLITCH = 19
    MOONS = 20
    BRAILLE = 21
    HEX = 22
    REVERSE = 23
    CASE_FLIP = 24
    WIDE = 25
    TRAFFIC = 26
    CENTER_STRIKE = 27
    LOADING = 28
    SLIDER = 29


EFFECT_COUNT = len(Effect)

PROGRESS_EFFECTS: FrozenSet[Effect] = frozenset(
    {
        Effect.WIPE_RIGHT,
        Effect.WIPE_LEFT,
        Effect.TYPEWRITER,
        Effect.CONVERGE,
        Effect.ZIPPER,
        Effect.CENTER_STRIKE,
        Effect.LOADING,
    }
)
CYCLIC_EFFECTS: FrozenSet[Effect] = frozenset({Effect.WAVE, Effect.PULSE, Effect.SPIN, Effect.TRAFFIC})
STATIC_EFFECTS: FrozenSet[Effect] = frozenset({Effect.REVERSE, Effect.WIDE})
NOISE_EFFECTS: FrozenSet[Effect] = frozenset(Effect) - PROGRESS_EFFECTS - CYCLIC_EFFECTS - STATIC_EFFECTS

SPARKLE_CHARS = "*+°.xo"
MATRIX_CHARS = "H3LL0W0RLD$#@!%*&^"
CHAOS_CHARS = "!@#$%^&*()_+"
GLITCH_CHARS = "¡¢£¤¥¦§¨©ª«¬®¯°±²³´µ¶·¸¹º»¼½¾¿"
HEX_CHARS = "0123456789ABCDEF"
REDACT_CHARS = "█▓▒░"
MOON_CHARS = "◐◓◑◒"
SPINNER_CHARS = "-\\|/"


@dataclass(frozen=True)
class EffectFrame:
    elapsed: float
    progress: float
    palette: Palette
    rng: random.Random

    def strike(self) -> str:
        return f"{self.palette.dim} strike"

    def cursor(self, color: str) -> str:
        return f"bg:{color} {self.palette.bg}"


def compute_progress(elapsed: float, duration: float) -> float:
    if duration <= 0:
        return 1.0
    return min(1.0, max(0.0, elapsed / duration))


def _boundary(progress: float, span: int) -> int:
    return int(math.floor(progress * span))


def _flip_case(ch: str) -> str:
    upper = ch.upper()
    flipped = ch.lower() if upper == ch else upper
    # Some characters expand when case-mapped ("ß" -> "SS").
    return flipped if len(flipped) == 1 else ch


def _force_case(ch: str, upper: bool) -> str:
    mapped = ch.upper() if upper else ch.lower()
    return mapped if len(mapped) == 1 else ch


def _distance_from_edge(i: int, n: int) -> int:
    return min(i, n - 1 - i)


# --- noise-driven -----------------------------------------------------------


def _sparkle(text: str, f: EffectFrame) -> Fragments:
    out: Fragments = []
    for ch in text:
        if f.rng.random() < 0.4:
            color = f.palette.accent if f.rng.randrange(2) == 0 else f.palette.secondary
            out.append((color, f.rng.choice(SPARKLE_CHARS)))
        else:
            out.append((f.palette.dim, ch))
    return out


def _matrix(text: str, f: EffectFrame) -> Fragments:
    return [(f.palette.success, f.rng.choice(MATRIX_CHARS)) for _ in text]


def _rainbow(text: str, f: EffectFrame) -> Fragments:
    p = f.palette
    colors = [p.accent, p.secondary, p.success, p.warning, "#ff0000", "#00ff00", "#0000ff"]
    return [(f.rng.choice(colors), ch) for ch in text]


def _binary(text: str, f: EffectFrame) -> Fragments:
    return [(f.palette.success, "1" if f.rng.randrange(2) else "0") for _ in text]


def _dissolve(text: str, f: EffectFrame) -> Fragments:
    threshold = f.progress * 1.5
    return [(f.strike(), ch) if f.rng.random() < threshold else (f.palette.fg, ch) for ch in text]


def _flip(text: str, f: EffectFrame) -> Fragments:
    out: Fragments = []
    for ch in text:
        if f.rng.random() < 0.3:
            out.append((f.palette.secondary, _flip_case(ch)))
        else:
            out.append((f.palette.fg, ch))
    return out


def _particle(text: str, f: EffectFrame) -> Fragments:
    return [(f.palette.secondary, ".") if f.rng.random() < 0.5 else (f.palette.accent, ch) for ch in text]


def _redact(text: str, f: EffectFrame) -> Fragments:
    out: Fragments = []
    for ch in text:
        if f.rng.random() < 0.5:
            out.append((f.palette.warning, f.rng.choice(REDACT_CHARS)))
        else:
            out.append((f.palette.dim, ch))
    return out


def _chaos(text: str, f: EffectFrame) -> Fragments:
    out: Fragments = []
    for ch in text:
        if f.rng.random() < 0.5:
            out.append((f.palette.secondary, f.rng.choice(CHAOS_CHARS)))
        else:
            out.append((f.palette.fg, ch))
    return out


def _bounce(text: str, f: EffectFrame) -> Fragments:
    return [(f.palette.accent if f.rng.randrange(2) == 0 else f.palette.secondary, ch) for ch in text]


def _eraser(text: str, f: EffectFrame) -> Fragments:
    return [(f.palette.dim, " ") if f.rng.random() < f.progress else (f.palette.dim, ch) for ch in text]


def _glitch(text: str, f: EffectFrame) -> Fragments:
    style = f"bg:{f.palette.dim} {f.palette.warning}"
    out: Fragments = []
    for ch in text:
        if f.rng.random() < 0.3:
            out.append((style, f.rng.choice(GLITCH_CHARS)))
        else:
            out.append((f.palette.fg, ch))
    return out


def _moons(text: str, f: EffectFrame) -> Fragments:
    out: Fragments = []
    for ch in text:
        if f.rng.random() < 0.3:
            out.append((f.palette.secondary, f.rng.choice(MOON_CHARS)))
        else:
            out.append((f.palette.dim, ch))
    return out


def _braille(text: str, f: EffectFrame) -> Fragments:
    out: Fragments = []
    for ch in text:
        if f.rng.random() < 0.4:
            out.append((f.palette.accent, chr(0x2800 + f.rng.randrange(255))))
        else:
            out.append((f.palette.fg, ch))
    return out


def _hex(text: str, f: EffectFrame) -> Fragments:
    return [(f.palette.success, f.rng.choice(HEX_CHARS)) for _ in text]


def _case_flip(text: str, f: EffectFrame) -> Fragments:
    return [(f.palette.accent, _force_case(ch, f.rng.randrange(2) == 0)) for ch in text]


def _slider(text: str, f: EffectFrame) -> Fragments:
    return [(f.palette.accent, "^") if f.rng.random() < 0.3 else (f.palette.fg, ch) for ch in text]


# --- cyclic -----------------------------------------------------------------


def _wave(text: str, f: EffectFrame) -> Fragments:
    p = f.palette
    colors = [p.accent, p.secondary, p.success, p.fg]
    offset = int(f.elapsed * 30)
    return [(colors[(i + offset) % len(colors)], ch) for i, ch in enumerate(text)]


def _pulse(text: str, f: EffectFrame) -> Fragments:
    style = f"{f.palette.accent} bold" if math.sin(f.elapsed * 40) > 0 else f.palette.fg
    return [(style, ch) for ch in text]


def _spin(text: str, f: EffectFrame) -> Fragments:
    glyph = SPINNER_CHARS[int(f.elapsed * 20) % len(SPINNER_CHARS)]
    return [(f.palette.success, glyph) for _ in text]


def _traffic(text: str, f: EffectFrame) -> Fragments:
    colors = [f.palette.warning, "#ffff00", f.palette.success]
    color = colors[int(f.elapsed * 10) % len(colors)]
    return [(color, ch) for ch in text]


# --- static transforms ------------------------------------------------------


def _reverse(text: str, f: EffectFrame) -> Fragments:
    return [(f.palette.warning, ch) for ch in reversed(text)]


def _wide(text: str, f: EffectFrame) -> Fragments:
    return [(f.palette.secondary, ch + " ") for ch in text]


# --- progress-driven --------------------------------------------------------


def _wipe_right(text: str, f: EffectFrame) -> Fragments:
    idx = _boundary(f.progress, len(text))
    out: Fragments = []
    for i, ch in enumerate(text):
        if i < idx:
            out.append((f.strike(), ch))
        elif i == idx:
            out.append((f.cursor(f.palette.secondary), ch))
        else:
            out.append((f.palette.fg, ch))
    return out


def _wipe_left(text: str, f: EffectFrame) -> Fragments:
    idx = len(text) - 1 - _boundary(f.progress, len(text))
    out: Fragments = []
    for i, ch in enumerate(text):
        if i > idx:
            out.append((f.strike(), ch))
        elif i == idx:
            out.append((f.cursor(f.palette.accent), ch))
        else:
            out.append((f.palette.fg, ch))
    return out


def _typewriter(text: str, f: EffectFrame) -> Fragments:
    idx = _boundary(f.progress, len(text))
    out: Fragments = []
    for i, ch in enumerate(text):
        if i < idx:
            out.append((f.palette.success, ch))
        elif i == idx:
            out.append((f.cursor(f.palette.success), ch))
        else:
            out.append((f.palette.success, " "))
    return out


def _converge(text: str, f: EffectFrame) -> Fragments:
    n = len(text)
    fill = _boundary(f.progress, (n + 1) // 2)
    out: Fragments = []
    for i, ch in enumerate(text):
        dist = _distance_from_edge(i, n)
        if dist < fill:
            out.append((f.strike(), ch))
        elif dist == fill:
            out.append((f.cursor(f.palette.accent), ch))
        else:
            out.append((f.palette.accent, ch))
    return out


def _zipper(text: str, f: EffectFrame) -> Fragments:
    n = len(text)
    pos = _boundary(f.progress, (n + 1) // 2)
    teeth = f.cursor(f.palette.accent)
    return [(f.strike(), ch) if _distance_from_edge(i, n) < pos else (teeth, ch) for i, ch in enumerate(text)]


def _center_strike(text: str, f: EffectFrame) -> Fragments:
    mid = len(text) // 2
    width = _boundary(f.progress, mid + 1)
    out: Fragments = []
    for i, ch in enumerate(text):
        dist = abs(i - mid)
        if dist < width:
            out.append((f.strike(), ch))
        elif dist == width:
            out.append((f.cursor(f.palette.secondary), ch))
        else:
            out.append((f.palette.fg, ch))
    return out


def _loading(text: str, f: EffectFrame) -> Fragments:
    fill = _boundary(f.progress, len(text))
    out: Fragments = []
    for i in range(len(text)):
        if i < fill:
            out.append((f.palette.success, "█"))
        elif i == fill:
            out.append((f.palette.accent, "▓"))
        else:
            out.append((f.palette.dim, "▒"))
    return out


EFFECTS: Dict[Effect, Callable[[str, EffectFrame], Fragments]] = {
    Effect.SPARKLE: _sparkle,
    Effect.MATRIX: _matrix,
    Effect.WIPE_RIGHT: _wipe_right,
    Effect.WIPE_LEFT: _wipe_left,
    Effect.RAINBOW: _rainbow,
    Effect.WAVE: _wave,
    Effect.BINARY: _binary,
    Effect.DISSOLVE: _dissolve,
    Effect.FLIP: _flip,
    Effect.PULSE: _pulse,
    Effect.TYPEWRITER: _typewriter,
    Effect.PARTICLE: _particle,
    Effect.REDACT: _redact,
    Effect.CHAOS: _chaos,
    Effect.CONVERGE: _converge,
    Effect.BOUNCE: _bounce,
    Effect.SPIN: _spin,
    Effect.ZIPPER: _zipper,
    Effect.ERASER: _eraser,
    Effect.GLITCH: _glitch,
    Effect.MOONS: _moons,
    Effect.BRAILLE: _braille,
    Effect.HEX: _hex,
    Effect.REVERSE: _reverse,
    Effect.CASE_FLIP: _case_flip,
    Effect.WIDE: _wide,
    Effect.TRAFFIC: _traffic,
    Effect.CENTER_STRIKE: _center_strike,
    Effect.LOADING: _loading,
    Effect.SLIDER: _slider,
}


def render_effect(
    text: str,
    elapsed: float,
    effect,
    palette: Palette,
    *,
    duration: float = CHECK_ANIM_DURATION,
    rng: Optional[random.Random] = None,
) -> Fragments:
    """Render one frame of ``effect`` applied to ``text``.

    Unknown identifiers fall back to the untouched text in the success color.
    """
    renderer = EFFECTS.get(effect)
    if renderer is None:
        return [(palette.success, ch) for ch in text]
    frame = EffectFrame(
        elapsed=max(0.0, elapsed),
        progress=compute_progress(elapsed, duration),
        palette=palette,
        rng=rng or random.Random(),
    )
    return renderer(text, frame)


def render_delete(text: str, palette: Palette, rng: Optional[random.Random] = None) -> Fragments:
    rng = rng or random.Random()
    style = f"{palette.warning} bold"
    return [(style, "1" if rng.randrange(2) else "0") for _ in text]


def render_open(text: str, palette: Palette) -> Fragments:
    return [(palette.fg, text)] if text else []


def render_done(text: str, palette: Palette) -> Fragments:
    return [(f"{palette.dim} strike", text)] if text else []


def choose_effect(last: Optional[int], rng: Optional[random.Random] = None) -> Effect:
    """Pick an effect uniformly at random, never repeating ``last``."""
    rng = rng or random.Random()
    candidates = [e for e in Effect if e != last]
    return rng.choice(candidates)


__all__ = [
    "Effect",
    "EffectFrame",
    "EFFECTS",
    "EFFECT_COUNT",
    "PROGRESS_EFFECTS",
    "CYCLIC_EFFECTS",
    "STATIC_EFFECTS",
    "NOISE_EFFECTS",
    "Fragments",
    "compute_progress",
    "render_effect",
    "render_delete",
    "render_open",
    "render_done",
    "choose_effect",
]
