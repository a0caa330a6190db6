import io
import re
import time
from collections.abc import Mapping
from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional, Tuple

import numpy as np
from rich import box
from rich.color import Color, ColorParseError
from rich.console import Console
from rich.table import Table
from rich.text import Text

from timestats.tree import Node

# threshold (seconds) -> color token
DEFAULT_COLOR_SCHEMA = {
    0.01: "aaaa00",
    0.05: "FFFF00",
    0.1: "aa0000",
    0.5: "FF0000",
}

UNKNOWN = "??"
_HEX_COLOR = re.compile(r"^(?:[0-9a-fA-F]{3}){1,2}$")


@dataclass
class Row:
    """One report line: a node flattened out of the timing tree."""

    depth: int
    label: str
    elapsed: Optional[float]
    is_scope: bool
    color: Optional[str] = None
    elapsed_display: str = UNKNOWN
    share_display: str = UNKNOWN

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


def normalize_color_schema(color_schema: Any) -> Tuple[np.ndarray, List[str]]:
    """
    Validate a threshold -> color mapping and return it sorted by threshold.

    Keys may be numbers or numeric strings ("0.01").
    """
    if not isinstance(color_schema, Mapping):
        raise TypeError(f"color_schema must be a mapping, got {type(color_schema).__name__}")

    pairs = []
    for key, color in color_schema.items():
        try:
            threshold = float(key)
        except (TypeError, ValueError):
            raise ValueError(f"color_schema threshold {key!r} is not a number") from None
        pairs.append((threshold, color))
    pairs.sort(key=lambda p: p[0])

    thresholds = np.array([p[0] for p in pairs], dtype=np.float64)
    return thresholds, [p[1] for p in pairs]


def severity_color(elapsed: Optional[float], thresholds: np.ndarray, colors: List[str]) -> Optional[str]:
    """Color of the largest threshold <= elapsed, None below the smallest one."""
    if elapsed is None or len(thresholds) == 0:
        return None
    idx = int(np.searchsorted(thresholds, float(elapsed), side="right")) - 1
    return colors[idx] if idx >= 0 else None


def format_label(action: str, comment: str) -> str:
    if action and comment:
        return f"{action} - {comment}"
    return action or comment or ""


def format_elapsed(elapsed: Optional[float]) -> str:
    # Truncated to 8 characters so long durations don't widen the column
    if elapsed is None:
        return UNKNOWN
    return f"{float(elapsed):f}"[:8] + "s"


def format_share(elapsed: Optional[float], total: float) -> str:
    if elapsed is None:
        return UNKNOWN
    if total <= 0:
        return "0.0%"
    return f"{float(elapsed) * 100 / total:2.1f}%"


def rich_color(token: Any) -> Optional[str]:
    """
    Map a schema color token to a color rich can draw.

    Hex tokens ("aa0000", "fa0") become "#aa0000" / "#ffaa00"; rich color
    names and "#rrggbb" pass through. Tokens rich cannot parse (such as the
    single-letter "Y" / "R" keys some schemas use) give None: the row is
    drawn without a background.
    """
    if token is None:
        return None
    token = str(token).strip()
    if _HEX_COLOR.match(token):
        if len(token) == 3:
            token = "".join(c * 2 for c in token)
        token = f"#{token}"
    try:
        Color.parse(token)
    except ColorParseError:
        return None
    return token


class ReportGenerator:
    """
    Turns a profiler's timing tree into report rows and an ASCII table.

    Args:
        profiler: Object exposing ``tree`` (a TimingTree) and ``color_schema``.
        color_schema (dict): Overrides the profiler's color schema.
    """

    def __init__(self, profiler, color_schema: Optional[Mapping] = None):
        self.profiler = profiler
        schema = color_schema if color_schema is not None else profiler.color_schema
        self.thresholds, self.colors = normalize_color_schema(schema)

    def build_rows(self) -> List[Row]:
        """Pre-order rows for every node below the root (top-level nodes have depth 1)."""
        root = self.profiler.tree.root
        total_duration = time.time() - root.start_time

        rows = []
        for node in self.profiler.tree.nodes():
            rows.append(self._make_row(node, total_duration))
        return rows

    def _make_row(self, node: Node, total_duration: float) -> Row:
        elapsed = node.elapsed
        return Row(
            depth=node.depth,
            label=format_label(node.action, node.comment),
            elapsed=elapsed,
            is_scope=node.is_scope,
            color=severity_color(elapsed, self.thresholds, self.colors),
            elapsed_display=format_elapsed(elapsed),
            share_display=format_share(elapsed, total_duration),
        )

    def render_table(self, width: Optional[int] = None, color: bool = True) -> str:
        """Render the rows as an ASCII grid; row background reflects severity."""
        table = Table(box=box.ASCII, show_lines=False)
        table.add_column("Action", no_wrap=True)
        table.add_column("Time", justify="right")
        table.add_column("%", justify="right")

        for row in self.build_rows():
            background = rich_color(row.color)
            style = f"on {background}" if background else None
            table.add_row(Text(" " * row.depth + row.label), row.elapsed_display, row.share_display,
                          style=style)

        buffer = io.StringIO()
        console = Console(
            file=buffer,
            width=width,
            force_terminal=color,
            no_color=not color,
            color_system="truecolor" if color else None,
            highlight=False,
        )
        console.print(table)
        return buffer.getvalue()
