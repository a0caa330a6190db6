"""
Hierarchical wall-clock profiler.

Usage:
    ts = Profiler()

    ts.profile(begin="load")
    load()
    ts.profile("parsed")            # checkpoint inside "load"
    ts.profile(end="load")

    with ts.track("train"):
        train()

    print(ts.render_table())

A Profiler is not thread-safe: one logical thread of control must own each
instance, or the caller must serialize access to it.
"""
import contextlib
import time
from collections.abc import Mapping
from typing import Any, Dict, List, Optional

from timestats.report import DEFAULT_COLOR_SCHEMA, ReportGenerator, Row, normalize_color_schema
from timestats.tree import Node, TimingTree
from utils.arg_tools import parse_profile_args


def normalize_elapsed(elapsed: Any) -> Any:
    """Turn externally serialized durations such as "0.12s" into floats ("" and "s" mean unknown)."""
    if isinstance(elapsed, str):
        elapsed = elapsed.strip()
        if elapsed.endswith("s"):
            elapsed = elapsed[:-1]
        return float(elapsed) if elapsed else None
    return elapsed


class Profiler:
    """
    Collects timing events into a tree and reports on them.

    Args:
        enable (bool): When False every ``profile`` call is a no-op. Defaults to True.
        color_schema (dict): Threshold (seconds) -> color token used by reports.
    """

    def __init__(self, enable: bool = True, color_schema: Optional[Mapping] = None):
        if color_schema is None:
            color_schema = dict(DEFAULT_COLOR_SCHEMA)
        normalize_color_schema(color_schema)  # fail fast on a bad schema

        self.enable = enable
        self.color_schema = color_schema
        self.tree = TimingTree(Node(start_time=time.time()))
        self.stack: List[Node] = [self.tree.root]

    @classmethod
    def from_config(cls, cfg: Dict[str, Any]) -> "Profiler":
        """Build a profiler from a loaded config dict (see ``utils.arg_tools.load_config``)."""
        return cls(
            enable=cfg.get("enable", True),
            color_schema=cfg.get("color_schema") or None,
        )

    @property
    def root(self) -> Node:
        return self.tree.root

    @property
    def depth(self) -> int:
        """Number of currently open scopes."""
        return len(self.stack) - 1

    def profile(self, *args, **kwargs):
        """
        Record a timing event and return the uid of the node it touched.

        ``begin`` opens a scope, ``end`` closes the innermost open scope with
        that label, anything else records a checkpoint. New nodes are timed
        relative to the previous sibling (or the parent when there is none);
        closing a scope replaces that with the scope's own duration.

        Returns None when disabled or when an explicit ``parent`` uid does
        not resolve.
        """
        if not self.enable:
            return None

        now = time.time()
        params = parse_profile_args(args, kwargs)
        stack = self.stack

        if params["end"]:
            # innermost first, never the root
            for i in range(len(stack) - 1, 0, -1):
                if stack[i].action == params["end"]:
                    node = stack.pop(i)
                    node.elapsed = now - node.start_time
                    return node.uid
            # no open partner: recorded as a plain event below

        if params["parent"] is not None:
            parent = prev = self._get_by_uid(params["parent"])
            if parent is None:
                return None
        else:
            parent = stack[-1]
            prev = parent.last_child() or parent

        node = Node(
            action=params["begin"] or "",
            comment=params["comment"],
            start_time=now,
            elapsed=now - prev.start_time,  # a scope opener is re-timed by its end
            uid=params["uid"],
        )
        self.tree.add_child(parent, node)
        if params["begin"]:
            stack.append(node)

        return node.uid

    @contextlib.contextmanager
    def track(self, label: str, comment: str = ""):
        """Scope the body of a ``with`` block as ``label``."""
        self.profile(begin=label, comment=comment)
        try:
            yield self
        finally:
            self.profile(end=label)

    def created(self) -> float:
        return self.tree.root.start_time

    def elapsed(self) -> float:
        """Seconds since the profiler was constructed."""
        return time.time() - self.tree.root.start_time

    def _get_by_uid(self, uid) -> Optional[Node]:
        return self.tree.find_by_uid(uid)

    # ---- merging externally collected timings ------------------------------
    def add_child(self, node: Node) -> Node:
        """Attach an externally built node (and its subtree) under the root."""
        node.elapsed = normalize_elapsed(node.elapsed)
        return self.tree.add_child(self.tree.root, node)

    def set_node_value(self, record: Dict[str, Any]):
        """Replace the root's value record wholesale."""
        record = dict(record)
        record["elapsed"] = normalize_elapsed(record.get("elapsed"))
        self.tree.root.set_value(record)

    def get_node_value(self) -> float:
        # Only the start time, not the whole record: callers read timestamps through this.
        return self.tree.root.value["start_time"]

    # ---- reporting ----------------------------------------------------------
    def report(self, color_schema: Optional[Mapping] = None) -> ReportGenerator:
        return ReportGenerator(self, color_schema)

    def collect_rows(self) -> List[Row]:
        return self.report().build_rows()

    def render_table(self, width: Optional[int] = None, color: bool = True) -> str:
        return self.report().render_table(width=width, color=color)
