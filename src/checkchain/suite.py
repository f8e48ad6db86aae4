"""Ordered batches of assertions executed with stop-at-first-failure."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Iterator, NamedTuple

from checkchain.assertions.base import Assertion


class BatchResult(NamedTuple):
    """Outcome of :meth:`AssertionBatch.exec_all`.

    ``message`` is the failing assertion's message, or None when every
    assertion passed.
    """

    success: bool
    message: str | None = None


class AssertionBatch:
    """Append-only sequence of assertions, executed in insertion order.

    Items may be given as :class:`Assertion` instances, bare callables or
    ``(expression, message)`` pairs::

        batch = AssertionBatch([
            (lambda: x > 5, "x too small"),
            (lambda: x < 10, "x too large"),
        ])
        ok, message = batch.exec_all()
    """

    def __init__(self, assertions: Iterable[Any] = ()):
        self._assertions: list[Assertion] = [Assertion.of(a) for a in assertions]

    def add(self, assertion: Any) -> None:
        self._assertions.append(Assertion.of(assertion))

    def __iter__(self) -> Iterator[Assertion]:
        return iter(tuple(self._assertions))

    def __len__(self) -> int:
        return len(self._assertions)

    def __repr__(self) -> str:
        return f"AssertionBatch({len(self._assertions)} assertions)"

    def exec_all(self, logger: logging.Logger | None = None) -> BatchResult:
        """Execute each assertion in order and stop at the first one that fails.

        Exceptions raised while evaluating an assertion propagate immediately
        and the remaining assertions are not run.
        """
        if logger is None:
            logger = logging.getLogger(__name__)

        total = len(self._assertions)
        for index, assertion in enumerate(self._assertions, start=1):
            logger.debug(f"Executing assertion {index}/{total}: {assertion.describe()}")
            if not assertion.execute():
                logger.info(
                    f"Assertion {index}/{total} failed: {assertion.message or '<no message>'}"
                )
                return BatchResult(success=False, message=assertion.message)

        logger.debug(f"All {total} assertion(s) passed")
        return BatchResult(success=True, message=None)
