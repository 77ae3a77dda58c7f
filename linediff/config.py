from __future__ import annotations

import logging
import re
from collections import defaultdict
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Pattern, Sequence, TextIO, TypeAlias, cast

from linediff.color import is_style_name
from linediff.lcs import DEFAULT_MAX_CELLS

log = logging.getLogger(__name__)

ConfigValue: TypeAlias = bool | int | str

SECTION_LINE: Pattern[str] = re.compile(
    r'^\s*\[([a-z0-9-]+)( "(.+)")?\]\s*(?:$|#|;)', re.I
)
VARIABLE_LINE: Pattern[str] = re.compile(
    r"^\s*([a-z][a-z0-9-]*)\s*=\s*(.*?)\s*(?:$|#|;)", re.I | re.M
)
BLANK_LINE: Pattern[str] = re.compile(r"^\s*(?:$|#|;)")
INTEGER: Pattern[str] = re.compile(r"^-?(0|[1-9][0-9]*)$")

GLOBAL_CONFIG = Path("~/.linediffconfig").expanduser()
SYSTEM_CONFIG = Path("/etc/linediffconfig")

ALGORITHMS = ("optimal", "anchored")
FORMATS = ("text", "html")
COLOR_MODES = ("auto", "always", "never")


class ParseError(Exception):
    pass


class ConfigError(Exception):
    pass


def section_key(name: Sequence[str]) -> tuple[str, str]:
    return (name[0].lower(), ".".join(name[1:]))


class ConfigFile:
    def __init__(self, path: Path) -> None:
        self.path: Path = path
        self.values: Optional[dict[tuple[str, str, str], list[ConfigValue]]] = None

    def open(self) -> None:
        if self.values is None:
            self.read_config_file()

    def get(self, key: Sequence[str]) -> ConfigValue | None:
        values = self.get_all(key)
        return values[-1] if values else None

    def get_all(self, key: Sequence[str]) -> list[ConfigValue]:
        self.open()
        values = cast(dict[tuple[str, str, str], list[ConfigValue]], self.values)
        return list(values.get(self.split_key(key), []))

    @staticmethod
    def split_key(key: Sequence[str]) -> tuple[str, str, str]:
        parts = [str(k) for k in key]
        if len(parts) < 2:
            raise ConfigError(f"key does not contain a section: {'.'.join(parts)}")
        head, sub = section_key(parts[:-1])
        return (head, sub, parts[-1].lower())

    def read_config_file(self) -> None:
        self.values = defaultdict(list)

        try:
            with self.path.open("r", encoding="utf-8") as fh:
                self.read(fh)
        except FileNotFoundError:
            log.debug(f"no config file at {self.path}")

    def read(self, fh: TextIO) -> None:
        if self.values is None:
            self.values = defaultdict(list)

        section: Optional[tuple[str, str]] = None
        number = 0

        while True:
            try:
                raw = self.read_line(fh)
            except EOFError:
                break

            number += 1
            raw = raw.replace("\\\n", "")

            if m := SECTION_LINE.match(raw):
                name = [m.group(1)] + ([m.group(3)] if m.group(3) else [])
                section = section_key(name)
            elif m := VARIABLE_LINE.match(raw):
                if section is None:
                    raise ParseError(
                        f"variable outside a section on line {number} in file {self.path}"
                    )
                var = m.group(1).lower()
                self.values[(*section, var)].append(self.parse_value(m.group(2)))
            elif not BLANK_LINE.match(raw):
                raise ParseError(f"bad config line {number} in file {self.path}")

    @staticmethod
    def read_line(fh: TextIO) -> str:
        buffer = ""
        while True:
            chunk = fh.readline()
            if chunk == "":
                if buffer:
                    return buffer
                raise EOFError
            buffer += chunk
            if not buffer.endswith("\\\n"):
                return buffer

    @staticmethod
    def parse_value(value: str) -> ConfigValue:
        lower = value.lower()
        if lower in {"yes", "on", "true"}:
            return True
        if lower in {"no", "off", "false"}:
            return False
        if INTEGER.match(value):
            return int(value)
        return value


class ConfigStack:
    def __init__(self, path: Optional[Path] = None) -> None:
        self.configs: dict[str, ConfigFile] = {
            "system": ConfigFile(SYSTEM_CONFIG),
            "global": ConfigFile(GLOBAL_CONFIG),
        }
        if path is not None:
            self.configs["file"] = ConfigFile(path)

    def get(self, key: Sequence[str]) -> ConfigValue | None:
        values = self.get_all(key)
        return values[-1] if values else None

    def get_all(self, key: Sequence[str]) -> list[ConfigValue]:
        values: list[ConfigValue] = []
        for cfg in self.configs.values():
            values.extend(cfg.get_all(key))
        return values


@dataclass
class DiffConfig:
    algorithm: str = "optimal"
    recursive: bool = False
    max_cells: Optional[int] = DEFAULT_MAX_CELLS
    format: str = "text"
    color: str = "auto"
    styles: dict[str, list[str]] = field(
        default_factory=lambda: {
            "context": ["normal"],
            "old": ["red"],
            "new": ["green"],
        }
    )

    @classmethod
    def from_config(cls, config: ConfigStack | ConfigFile) -> DiffConfig:
        result = cls()

        algorithm = config.get(["diff", "algorithm"])
        if algorithm is not None:
            result.algorithm = _choice("diff.algorithm", algorithm, ALGORITHMS)

        recursive = config.get(["diff", "recursive"])
        if recursive is not None:
            if not isinstance(recursive, bool):
                raise ConfigError(f"diff.recursive must be a boolean, got {recursive!r}")
            result.recursive = recursive

        max_cells = config.get(["diff", "maxCells"])
        if max_cells is not None:
            if isinstance(max_cells, bool) or not isinstance(max_cells, int):
                raise ConfigError(f"diff.maxCells must be an integer, got {max_cells!r}")
            if max_cells < 0:
                raise ConfigError(f"diff.maxCells must not be negative, got {max_cells}")
            result.max_cells = max_cells or None

        fmt = config.get(["diff", "format"])
        if fmt is not None:
            result.format = _choice("diff.format", fmt, FORMATS)

        color = config.get(["color", "ui"])
        if color is True:
            result.color = "always"
        elif color is False:
            result.color = "never"
        elif color is not None:
            result.color = _choice("color.ui", color, COLOR_MODES)

        for name in result.styles:
            style = config.get(["color", "diff", name])
            if style is not None:
                names = str(style).split()
                unknown = [n for n in names if not is_style_name(n)]
                if unknown:
                    raise ConfigError(
                        f"color.diff.{name}: unknown style {', '.join(unknown)}"
                    )
                result.styles[name] = names

        return result


def _choice(name: str, value: ConfigValue, choices: Sequence[str]) -> str:
    text = str(value).lower()
    if text not in choices:
        raise ConfigError(f"{name} must be one of {', '.join(choices)}, got {value!r}")
    return text
