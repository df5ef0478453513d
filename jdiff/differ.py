"""Three-way deep comparison of JSON values."""

from __future__ import annotations

from typing import Any, Generator, Optional

from .models import (
    ComparisonResult,
    DiffEntry,
    DiffType,
    JsonKind,
    JsonValue,
    Summary,
)
from .utils import build_path, copy_value, get_kind


# Marks "no content for this output" while a subtree is being merged.
# None cannot serve, since null is a legitimate JSON value.
_MISSING: Any = object()

_CONTAINERS = {
    JsonKind.OBJECT: dict,
    JsonKind.ARRAY: list,
}

# (equal, diff_lr, diff_rl) for one position
Triple = tuple[Any, Any, Any]
# A container comparison in progress: yields (left, right, path) requests
# for its children and is sent back each child's Triple.
Merge = Generator[tuple[Any, Any, Optional[str]], Triple, Triple]


class Differ:
    """
    Splits a pair of JSON documents into equal, left-to-right and
    right-to-left trees in a single traversal.

    Handles:
    - Scalars of the same kind (equal value, or a [left, right] pair)
    - Kind mismatches, including container vs scalar (always a pair)
    - Objects by key, left key order first
    - Arrays by position, without any alignment search

    Containers are merged by generators driven from an explicit stack, so
    nesting depth is bounded by memory only, not by the interpreter's
    recursion limit.

    Each instance also records a classified DiffEntry per difference and
    Summary counters for the comparison it ran. Use a fresh instance per
    comparison.
    """

    def __init__(self, collect_statistics: bool = True):
        self.collect_statistics = collect_statistics

        self.entries: list[DiffEntry] = []
        self.summary = Summary()

    def compare(self, left: JsonValue, right: JsonValue) -> ComparisonResult:
        """
        Compare two documents at their root.

        Args:
            left: The first document (read only)
            right: The second document (read only)

        Returns:
            ComparisonResult with freshly built equal, diff_lr and diff_rl
        """
        equal, diff_lr, diff_rl = self._compare(left, right)

        # An empty root output keeps the container kind both roots share
        left_kind = get_kind(left)
        empty = None
        if left_kind == get_kind(right) and left_kind in _CONTAINERS:
            empty = _CONTAINERS[left_kind]

        def root(value: Any) -> JsonValue:
            if value is not _MISSING:
                return value
            return empty() if empty else None

        return ComparisonResult(
            equal=root(equal),
            diff_lr=root(diff_lr),
            diff_rl=root(diff_rl),
        )

    def _compare(self, left: Any, right: Any) -> Triple:
        """Drive the traversal depth-first with a stack of pending merges."""
        outcome = self._visit(left, right, self._root_path())
        if isinstance(outcome, tuple):
            return outcome

        stack: list[Merge] = [outcome]
        sent: Optional[Triple] = None
        while stack:
            try:
                request = stack[-1].send(sent)
            except StopIteration as done:
                stack.pop()
                sent = done.value
                continue

            outcome = self._visit(*request)
            if isinstance(outcome, tuple):
                sent = outcome
            else:
                stack.append(outcome)
                sent = None

        return sent

    def _visit(self, left: Any, right: Any, path: Optional[str]) -> Triple | Merge:
        left_kind = get_kind(left)
        right_kind = get_kind(right)

        if left_kind != right_kind:
            self._count_leaf()
            self._add_entry(path, DiffType.TYPE_CHANGED, left, right)
            return _MISSING, _pair(left, right), _pair(right, left)

        if left_kind == JsonKind.OBJECT:
            return self._compare_objects(left, right, path)
        elif left_kind == JsonKind.ARRAY:
            return self._compare_arrays(left, right, path)
        else:
            return self._compare_scalars(left, right, path)

    def _compare_scalars(self, left: Any, right: Any, path: Optional[str]) -> Triple:
        """Compare two scalars of the same kind; 1 and 1.0 are equal."""
        self._count_leaf()

        if left == right:
            if self.collect_statistics:
                self.summary.unchanged += 1
            return left, _MISSING, _MISSING

        self._add_entry(path, DiffType.VALUE_CHANGED, left, right)
        return _MISSING, [left, right], [right, left]

    def _compare_objects(self, left: dict, right: dict, path: Optional[str]) -> Merge:
        """Compare two objects key by key."""
        equal: dict = {}
        diff_lr: dict = {}
        common: dict = {}

        # equal and diff_lr follow the left key order
        for key, left_value in left.items():
            child_path = self._child_path(path, key)

            if key not in right:
                self._add_entry(child_path, DiffType.REMOVED, left_value, None)
                diff_lr[key] = copy_value(left_value)
                continue

            sub_equal, sub_lr, sub_rl = yield left_value, right[key], child_path
            common[key] = sub_rl
            if sub_equal is not _MISSING:
                equal[key] = sub_equal
            if sub_lr is not _MISSING:
                diff_lr[key] = sub_lr

        # diff_rl follows the right key order
        diff_rl: dict = {}
        for key, right_value in right.items():
            if key in common:
                if common[key] is not _MISSING:
                    diff_rl[key] = common[key]
                continue

            self._add_entry(self._child_path(path, key), DiffType.ADDED, None, right_value)
            diff_rl[key] = copy_value(right_value)

        return _resolve(equal, diff_lr, diff_rl)

    def _compare_arrays(self, left: list, right: list, path: Optional[str]) -> Merge:
        """Compare two arrays index by index."""
        equal: list = []
        diff_lr: list = []
        diff_rl: list = []

        for i in range(max(len(left), len(right))):
            child_path = self._child_path(path, i)

            if i >= len(right):
                self._add_entry(child_path, DiffType.REMOVED, left[i], None)
                diff_lr.append(copy_value(left[i]))
                continue

            if i >= len(left):
                self._add_entry(child_path, DiffType.ADDED, None, right[i])
                diff_rl.append(copy_value(right[i]))
                continue

            sub_equal, sub_lr, sub_rl = yield left[i], right[i], child_path
            if sub_equal is not _MISSING:
                equal.append(sub_equal)
            if sub_lr is not _MISSING:
                diff_lr.append(sub_lr)
            if sub_rl is not _MISSING:
                diff_rl.append(sub_rl)

        return _resolve(equal, diff_lr, diff_rl)

    # Paths only feed DiffEntry, so they are not built without statistics.
    def _root_path(self) -> Optional[str]:
        return "$" if self.collect_statistics else None

    def _child_path(self, path: Optional[str], key: str | int) -> Optional[str]:
        return build_path(path, key) if path is not None else None

    def _count_leaf(self):
        if self.collect_statistics:
            self.summary.fields_checked += 1

    def _add_entry(
        self,
        path: Optional[str],
        diff_type: DiffType,
        left_value: Any,
        right_value: Any
    ):
        """Record a classified difference if statistics are enabled."""
        if not self.collect_statistics:
            return

        self.entries.append(DiffEntry(
            path=path,
            type=diff_type,
            left_value=copy_value(left_value),
            right_value=copy_value(right_value),
        ))

        if diff_type == DiffType.VALUE_CHANGED:
            self.summary.changed += 1
        elif diff_type == DiffType.TYPE_CHANGED:
            self.summary.type_changed += 1
        elif diff_type == DiffType.REMOVED:
            self.summary.removed += 1
        else:
            self.summary.added += 1


def _pair(first: Any, second: Any) -> list:
    return [copy_value(first), copy_value(second)]


def _resolve(equal: Any, diff_lr: Any, diff_rl: Any) -> Triple:
    """
    Prune empty containers from a merged subtree.

    A container without differences is kept whole in equal, even when it
    is empty itself.
    """
    if not diff_lr and not diff_rl:
        return equal, _MISSING, _MISSING

    return (
        equal if equal else _MISSING,
        diff_lr if diff_lr else _MISSING,
        diff_rl if diff_rl else _MISSING,
    )


def compare(left: JsonValue, right: JsonValue) -> ComparisonResult:
    """
    Compare two JSON documents.

    Pure function: inputs are not modified and the returned trees share no
    containers with them.

    Args:
        left: The first document
        right: The second document

    Returns:
        ComparisonResult with the equal, diff_lr and diff_rl trees
    """
    return Differ(collect_statistics=False).compare(left, right)
