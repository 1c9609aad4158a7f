"""Plain-text table rendering with UTF-8 box drawing characters."""

from __future__ import annotations

from collections.abc import Sequence


def utf8_table(header: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
    """Render *header* and *rows* as a box-drawn table.

    Columns are as wide as their widest cell. Rows shorter than the widest
    row are padded with empty cells.
    """
    ncols = max([len(header), *(len(row) for row in rows)])
    if ncols == 0:
        return ""

    def _pad(row: Sequence[str]) -> list[str]:
        return [str(cell) for cell in row] + [""] * (ncols - len(row))

    body = [_pad(row) for row in rows]
    head = _pad(header)
    widths = [max(len(r[i]) for r in [head, *body]) for i in range(ncols)]

    def _rule(left: str, mid: str, right: str) -> str:
        return left + mid.join("─" * (w + 2) for w in widths) + right

    def _line(cells: list[str]) -> str:
        return "│" + "│".join(f" {c.ljust(w)} " for c, w in zip(cells, widths, strict=True)) + "│"

    lines = [_rule("┌", "┬", "┐")]
    if header:
        lines.append(_line(head))
        lines.append(_rule("├", "┼", "┤"))
    lines.extend(_line(r) for r in body)
    lines.append(_rule("└", "┴", "┘"))
    return "\n".join(lines) + "\n"
