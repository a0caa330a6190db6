import itertools
import time
import weakref
from typing import Any, Callable, Dict, Iterator, List, Optional


class Node:
    """
    A single timing record plus its child records.

    Children are owned by their parent; the parent is only referenced weakly,
    so dropping the root releases the whole tree.

    Args:
        action (str): Scope label (empty for point events).
        comment (str): Free-text annotation.
        start_time (float): Wall-clock timestamp. Defaults to now.
        elapsed (float): Duration in seconds, ``None`` when unknown.
        uid: Optional identifier. Assigned by the tree when missing.
    """

    def __init__(
        self,
        action: str = "",
        comment: str = "",
        start_time: Optional[float] = None,
        elapsed: Optional[float] = None,
        uid: Any = None,
    ):
        self.action = action
        self.comment = comment
        self.start_time = time.time() if start_time is None else start_time
        self.elapsed = elapsed
        self.uid = uid
        self.children: List["Node"] = []
        self._parent: Optional[weakref.ReferenceType] = None

    @property
    def parent(self) -> Optional["Node"]:
        return self._parent() if self._parent is not None else None

    @property
    def depth(self) -> int:
        """Distance from the root (the root itself is 0)."""
        depth, node = 0, self.parent
        while node is not None:
            depth += 1
            node = node.parent
        return depth

    @property
    def is_scope(self) -> bool:
        return bool(self.action)

    @property
    def value(self) -> Dict[str, Any]:
        return {
            "start_time": self.start_time,
            "elapsed": self.elapsed,
            "action": self.action,
            "comment": self.comment,
        }

    def set_value(self, record: Dict[str, Any]):
        """Replace the whole value record; missing keys fall back to defaults."""
        self.start_time = record.get("start_time", time.time())
        self.elapsed = record.get("elapsed")
        self.action = record.get("action", "")
        self.comment = record.get("comment", "")

    def append(self, child: "Node") -> "Node":
        """Attach ``child`` as the last child. Used to build detached subtrees too."""
        if child.parent is not None:
            raise ValueError(f"Node {child.uid!r} is already attached to a parent")
        child._parent = weakref.ref(self)
        self.children.append(child)
        return child

    def last_child(self) -> Optional["Node"]:
        return self.children[-1] if self.children else None

    def walk(self) -> Iterator["Node"]:
        """Pre-order walk over descendants (self excluded)."""
        for child in self.children:
            yield child
            yield from child.walk()

    def __repr__(self):
        return (f"Node(uid={self.uid!r}, action={self.action!r}, "
                f"comment={self.comment!r}, elapsed={self.elapsed!r})")


class TimingTree:
    """Owns the root node and hands out uids unique within the tree."""

    def __init__(self, root: Optional[Node] = None):
        self._counter = itertools.count(1)
        self._taken = set()
        self.root = root if root is not None else Node()
        self._assign_uid(self.root)

    def _assign_uid(self, node: Node):
        if node.uid is None:
            uid = next(self._counter)
            while uid in self._taken:
                uid = next(self._counter)
            node.uid = uid
        try:
            self._taken.add(node.uid)
        except TypeError:
            # unhashable explicit uids (lists, dicts) never equal an auto int uid
            pass

    def add_child(self, parent: Node, node: Node) -> Node:
        """Append ``node`` (with any subtree it carries) as the last child of ``parent``."""
        parent.append(node)
        self._assign_uid(node)
        for descendant in node.walk():
            self._assign_uid(descendant)
        return node

    def find_by_uid(self, uid: Any) -> Optional[Node]:
        """Pre-order search from the root; first match wins."""
        if self.root.uid == uid:
            return self.root
        for node in self.root.walk():
            if node.uid == uid:
                return node
        return None

    def nodes(self) -> Iterator[Node]:
        return self.root.walk()

    def traverse(self, callback: Callable[[Node], Any]):
        for node in self.nodes():
            callback(node)
