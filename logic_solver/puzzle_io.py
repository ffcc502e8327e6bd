"""Reading puzzles (.sdk / .csv), writing solved grids as CSV, and a text dump of the candidate grid."""

# puzzle_io.py
# .sdk: one row per line, digits for givens and '.' for unknowns. Lines
#       starting with '#' (comments) or '[' (section headers) are skipped.
# .csv: 9 lines of 9 comma-separated fields; empty or 0 is unknown.

from __future__ import annotations

from pathlib import Path

from .errors import PuzzleFormatError
from .solver_core import Grid

CELL_WIDTH = 18


def _require_81(cells: list[int], source: str) -> list[int]:
    if len(cells) < 81:
        raise PuzzleFormatError(f"{source}: expected 81 cells, found {len(cells)}")
    return cells[:81]


def parse_sdk(text: str, source: str = "<sdk>") -> list[int]:
    cells: list[int] = []
    for line in text.splitlines():
        if line.startswith(("#", "[")):
            continue
        for ch in line:
            if ch in " \t\r":
                continue
            if ch == ".":
                cells.append(0)
            elif ch.isdigit():
                cells.append(int(ch))
            else:
                raise PuzzleFormatError(f"{source}: unexpected character {ch!r}")
            if len(cells) == 81:
                return cells
    return _require_81(cells, source)


def parse_csv(text: str, source: str = "<csv>") -> list[int]:
    cells: list[int] = []
    for line in text.splitlines():
        if not line.strip():
            continue
        for field in line.split(","):
            field = field.strip()
            if not field or field[0] == "0":
                cells.append(0)
            elif field[0].isdigit():
                cells.append(int(field[0]))
            else:
                raise PuzzleFormatError(f"{source}: unexpected field {field!r}")
    return _require_81(cells, source)


def load_puzzle(path: str | Path) -> Grid:
    """Read a puzzle file into a fresh Grid; the suffix picks the format."""
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix == ".sdk":
        parse = parse_sdk
    elif suffix == ".csv":
        parse = parse_csv
    else:
        raise PuzzleFormatError(f"{path}: unsupported puzzle format {suffix or '(none)'!r}")
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise PuzzleFormatError(f"{path}: {e}") from e
    return Grid.from_givens(parse(text, source=str(path)))


def default_output_path(puzzle_path: str | Path) -> Path:
    return Path(f"{puzzle_path}.solution.csv")


def write_csv(grid: Grid, path: str | Path) -> Path:
    path = Path(path)
    rows = grid.values().tolist()
    path.write_text("\n".join(",".join(str(v) for v in row) for row in rows) + "\n", encoding="utf-8")
    return path


def render_grid(grid: Grid) -> str:
    out = []
    for r, row in enumerate(grid.rows):
        if r % 3 == 0:
            out.append("-" * (11 * CELL_WIDTH - 20))
        parts = []
        for c, cell in enumerate(row):
            parts.append("  |  " if c and c % 3 == 0 else "  ")
            parts.append(",".join(str(v) for v in cell.candidates).ljust(CELL_WIDTH - 1))
        out.append("".join(parts).rstrip())
    return "\n".join(out)
