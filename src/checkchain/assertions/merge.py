"""Message merge policies used when combining assertions."""

from __future__ import annotations

from enum import Enum
from typing import Callable


class MergePolicy(str, Enum):
    """How the failure messages of two combined assertions are merged.

    Calling a member with ``(left, right, connector)`` returns the merged
    message. ``connector`` is the word describing the combination
    (``"And"`` or ``"Or"``) and is only used by ``CONCAT``.
    """

    REPLACE = "replace"
    RETAIN_LEFT = "retain_left"
    RETAIN_ORIGINAL = "retain_left"
    CONCAT = "concat"

    def __call__(self, left: str, right: str, connector: str) -> str:
        return _MERGE_FUNCTIONS[self](left, right, connector)


_MERGE_FUNCTIONS: dict[MergePolicy, Callable[[str, str, str], str]] = {
    MergePolicy.REPLACE: lambda left, right, connector: right,
    MergePolicy.RETAIN_LEFT: lambda left, right, connector: left,
    MergePolicy.CONCAT: lambda left, right, connector: f"{left} {connector} {right}",
}
