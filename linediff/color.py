from __future__ import annotations

from typing import Mapping, Optional

from linediff.record import Kind

ATTRIBUTES: dict[str, int] = {
    "normal": 0,
    "bold": 1,
    "dim": 2,
    "italic": 3,
    "ul": 4,
    "reverse": 7,
    "strike": 9,
}

COLORS = ("black", "red", "green", "yellow", "blue", "magenta", "cyan", "white")

FOREGROUND = 30
BACKGROUND = 40
RESET = "\x1b[0m"

Style = str | list[str]


def style_names(style: Style) -> list[str]:
    return style.split() if isinstance(style, str) else list(style)


def is_style_name(name: str) -> bool:
    return name in ATTRIBUTES or name in COLORS


def sgr_sequence(style: Style) -> str:
    """
    Escape sequence selecting a style such as ``"bold red"``. The first
    colour name sets the foreground and any later one the background.
    """
    codes: list[int] = []
    base = FOREGROUND

    for name in style_names(style):
        if name in ATTRIBUTES:
            codes.append(ATTRIBUTES[name])
        elif name in COLORS:
            codes.append(base + COLORS.index(name))
            base = BACKGROUND
        else:
            raise ValueError(f"unknown style name {name!r}")

    return f"\x1b[{';'.join(map(str, codes))}m"


class Palette:
    DEFAULTS: dict[str, Style] = {
        "context": "normal",
        "old": "red",
        "new": "green",
    }

    KEYS: dict[Kind, str] = {
        Kind.COMMON: "context",
        Kind.LEFT_ONLY: "old",
        Kind.RIGHT_ONLY: "new",
    }

    def __init__(self, styles: Optional[Mapping[str, Style]] = None) -> None:
        chosen = dict(self.DEFAULTS)
        chosen.update({key: style for key, style in (styles or {}).items() if style})
        self.sequences: dict[Kind, str] = {
            kind: sgr_sequence(chosen[key]) for kind, key in self.KEYS.items()
        }

    def paint(self, kind: Kind, text: str) -> str:
        return f"{self.sequences[kind]}{text}{RESET}"
