"""Glyph sets and the ANSI colour model used to draw reports."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum


class CharSet(Enum):
    UNICODE = "unicode"
    ASCII = "ascii"


class AnsiMode(Enum):
    OFF = "off"
    ON = "on"


class ColorKind(Enum):
    BASIC = "basic"
    FIXED = "fixed"


@dataclass(frozen=True)
class Characters:
    """Every glyph the renderer may draw."""

    hbar: str
    vbar: str
    xbar: str
    vbar_gap: str
    line_margin: str
    uarrow: str
    rarrow: str
    ltop: str
    mtop: str
    rtop: str
    lbot: str
    rbot: str
    mbot: str
    lbox: str
    rbox: str
    lcross: str
    rcross: str
    lunderbar: str
    runderbar: str
    munderbar: str
    underline: str
    underbar_single: str


UNICODE = Characters(
    hbar="─",
    vbar="│",
    xbar="┼",
    vbar_gap="┆",
    line_margin="┤",
    uarrow="▲",
    rarrow="▶",
    ltop="╭",
    mtop="┬",
    rtop="╮",
    lbot="╰",
    rbot="╯",
    mbot="┴",
    lbox="┤",
    rbox="│",
    lcross="├",
    rcross="┤",
    lunderbar="┌",
    runderbar="┐",
    munderbar="┬",
    underline="─",
    underbar_single="▲",
)

ASCII = Characters(
    hbar="-",
    vbar="|",
    xbar="+",
    vbar_gap=":",
    line_margin="|",
    uarrow="^",
    rarrow=">",
    ltop=",",
    mtop="v",
    rtop=".",
    lbot="`",
    rbot="'",
    mbot="-",
    lbox="[",
    rbox="]",
    lcross="|",
    rcross="|",
    lunderbar="-",
    runderbar="-",
    munderbar="-",
    underline="-",
    underbar_single="^",
)


def characters(char_set: CharSet) -> Characters:
    return ASCII if char_set is CharSet.ASCII else UNICODE


# --- Colours ---


_BASIC_CODES = {
    "black": 30,
    "red": 31,
    "green": 32,
    "yellow": 33,
    "blue": 34,
    "magenta": 35,
    "cyan": 36,
    "white": 37,
}

_RESET = "\033[0m"
_ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


@dataclass(frozen=True)
class Color:
    """Either one of the 8 basic ANSI colours or a 256-colour palette index."""

    kind: ColorKind
    value: str | int

    def fg_code(self) -> str:
        if self.kind is ColorKind.FIXED:
            return f"\033[38;5;{self.value}m"
        return f"\033[{_BASIC_CODES[self.value]}m"

    def bg_code(self) -> str:
        if self.kind is ColorKind.FIXED:
            return f"\033[48;5;{self.value}m"
        return f"\033[{_BASIC_CODES[self.value] + 10}m"


def basic_color(name: str) -> Color:
    name = name.lower()
    if name not in _BASIC_CODES:
        raise ValueError(f"unknown colour name: {name!r}")
    return Color(ColorKind.BASIC, name)


def fixed_color(value: int) -> Color:
    """A 256-colour palette entry; ``value`` is clamped into ``[0, 255]``."""
    return Color(ColorKind.FIXED, max(0, min(255, int(value))))


def parse_color(value: str | int) -> Color:
    """Read a colour written as a basic name or a palette index."""
    if isinstance(value, bool):
        raise ValueError(f"not a colour: {value!r}")
    if isinstance(value, int):
        return fixed_color(value)
    if value.isdigit():
        return fixed_color(int(value))
    return basic_color(value)


BLACK = basic_color("black")
RED = basic_color("red")
GREEN = basic_color("green")
YELLOW = basic_color("yellow")
BLUE = basic_color("blue")
MAGENTA = basic_color("magenta")
CYAN = basic_color("cyan")
WHITE = basic_color("white")


def fg(text: str, color: Color | None) -> str:
    if color is None:
        return text
    return f"{color.fg_code()}{text}{_RESET}"


def bg(text: str, color: Color | None) -> str:
    if color is None:
        return text
    return f"{color.bg_code()}{text}{_RESET}"


def strip_ansi(text: str) -> str:
    """Remove every SGR escape sequence from ``text``."""
    return _ANSI_RE.sub("", text)


# Semantic colours. Each returns None when ``enabled`` is false so call
# sites can pass the result straight to ``fg``.


def error_color(enabled: bool) -> Color | None:
    return RED if enabled else None


def warning_color(enabled: bool) -> Color | None:
    return YELLOW if enabled else None


def advice_color(enabled: bool) -> Color | None:
    return fixed_color(147) if enabled else None


def margin_color(enabled: bool) -> Color | None:
    return fixed_color(246) if enabled else None


def note_color(enabled: bool) -> Color | None:
    return fixed_color(115) if enabled else None


def skipped_margin_color(enabled: bool) -> Color | None:
    return fixed_color(240) if enabled else None


def unimportant_color(enabled: bool) -> Color | None:
    return fixed_color(249) if enabled else None
