"""Composable deferred assertions and ordered assertion batches."""

from checkchain.assertions import Assertion, MergePolicy
from checkchain.suite import AssertionBatch, BatchResult

__all__ = ["Assertion", "AssertionBatch", "BatchResult", "MergePolicy"]
