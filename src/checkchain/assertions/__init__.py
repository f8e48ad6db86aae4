"""Composable deferred assertions."""

from checkchain.assertions.base import (
    Assertion,
    Combined,
    Condition,
    Expression,
    Operator,
    combine,
)
from checkchain.assertions.checks import (
    command_fails,
    command_succeeds,
    env_set,
    file_contains,
    file_exists,
)
from checkchain.assertions.merge import MergePolicy

__all__ = [
    "Assertion",
    "Combined",
    "Condition",
    "Expression",
    "MergePolicy",
    "Operator",
    "combine",
    "command_fails",
    "command_succeeds",
    "env_set",
    "file_contains",
    "file_exists",
]
