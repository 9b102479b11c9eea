import curses
import re
from dataclasses import dataclass
from typing import Dict, Optional, Tuple


HEX_RE = re.compile(r"^#?([0-9a-fA-F]{6})$")

NAMED_COLORS: Dict[str, Tuple[int, int, int]] = {
    "black": (0, 0, 0),
    "red": (128, 0, 0),
    "green": (0, 128, 0),
    "yellow": (128, 128, 0),
    "blue": (0, 0, 128),
    "magenta": (128, 0, 128),
    "cyan": (0, 128, 128),
    "gray": (192, 192, 192),
    "darkgray": (128, 128, 128),
    "lightred": (255, 0, 0),
    "lightgreen": (0, 255, 0),
    "lightyellow": (255, 255, 0),
    "lightblue": (0, 0, 255),
    "lightmagenta": (255, 0, 255),
    "lightcyan": (0, 255, 255),
    "white": (255, 255, 255),
}

COLOR_ALIASES: Dict[str, str] = {
    "grey": "gray",
    "lightgray": "gray",
    "lightgrey": "gray",
    "darkgrey": "darkgray",
}


@dataclass(frozen=True)
class Rgb:
    red: int
    green: int
    blue: int

    def __post_init__(self) -> None:
        for channel in (self.red, self.green, self.blue):
            if not 0 <= channel <= 255:
                raise ValueError(f"channel out of range: {channel}")

    @property
    def hex(self) -> str:
        return f"{self.red:02X}{self.green:02X}{self.blue:02X}"

    @classmethod
    def parse(cls, text: str) -> "Rgb":
        raw = text.strip()
        match = HEX_RE.match(raw)
        if match:
            value = match.group(1)
            return cls(int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16))
        key = re.sub(r"[\s_-]", "", raw).lower()
        key = COLOR_ALIASES.get(key, key)
        if key in NAMED_COLORS:
            return cls(*NAMED_COLORS[key])
        raise ValueError(f"invalid color {text!r} (expected 6 hex digits or a color name)")


def parse_optional_color(text: str) -> Optional[Rgb]:
    if not text or not text.strip():
        return None
    return Rgb.parse(text)


def format_optional_color(color: Optional[Rgb]) -> str:
    return "" if color is None else color.hex


# Reference points for the eight basic curses colors.
_CURSES_PALETTE = (
    (curses.COLOR_BLACK, (0, 0, 0)),
    (curses.COLOR_RED, (205, 0, 0)),
    (curses.COLOR_GREEN, (0, 205, 0)),
    (curses.COLOR_YELLOW, (205, 205, 0)),
    (curses.COLOR_BLUE, (0, 0, 238)),
    (curses.COLOR_MAGENTA, (205, 0, 205)),
    (curses.COLOR_CYAN, (0, 205, 205)),
    (curses.COLOR_WHITE, (229, 229, 229)),
)


def nearest_curses_color(color: Optional[Rgb]) -> int:
    """Map an RGB value onto the closest basic curses color.

    ``None`` maps to -1, the terminal default (needs ``use_default_colors``).
    """
    if color is None:
        return -1
    best = curses.COLOR_WHITE
    best_dist = None
    for number, (r, g, b) in _CURSES_PALETTE:
        dist = (color.red - r) ** 2 + (color.green - g) ** 2 + (color.blue - b) ** 2
        if best_dist is None or dist < best_dist:
            best = number
            best_dist = dist
    return best
