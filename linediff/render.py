from __future__ import annotations

import html as html_lib
from typing import Iterable, Mapping, Optional

from linediff.color import Palette, Style
from linediff.record import SYMBOLS, DiffRecord, Kind

PP_LINE = " %2d, %2d %s |%s"


def pp(
    records: Iterable[DiffRecord],
    style: Optional[Mapping[str, Style]] = None,
) -> str:
    """
    Plain-text view: one line per record with both indices, the change
    sign and the payload. With a style mapping (keys ``context``, ``old``
    and ``new``) every line is wrapped in SGR escape codes.
    """
    palette = Palette(style) if style is not None else None
    out: list[str] = []

    for record in records:
        line = PP_LINE % (
            record.left_index,
            record.right_index,
            SYMBOLS[record.kind],
            record.payload,
        )
        if palette is not None:
            line = palette.paint(record.kind, line)
        out.append(line + "\n")

    return "".join(out)


def html(records: Iterable[DiffRecord]) -> str:
    return "".join(_html_row(record) for record in records)


def _html_row(record: DiffRecord) -> str:
    text = f"<pre>{html_lib.escape(str(record.payload), quote=False)}</pre>"
    left_num = f"{record.left_index + 1}"
    right_num = f"{record.right_index + 1}"

    match record.kind:
        case Kind.LEFT_ONLY:
            left = f'<td class="line-num">{left_num}</td><td class="deleted">{text}</td>'
            right = '<td></td><td class="line-num"></td>'
        case Kind.RIGHT_ONLY:
            left = '<td class="line-num"></td><td></td>'
            right = f'<td class="added">{text}</td><td class="line-num">{right_num}</td>'
        case _:
            left = f'<td class="line-num">{left_num}</td><td>{text}</td>'
            right = f'<td>{text}</td><td class="line-num">{right_num}</td>'

    return f"<tr>{left}{right}</tr>\n"
