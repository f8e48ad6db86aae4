"""Deferred assertions and the expression tree they evaluate.

An :class:`Assertion` pairs a boolean expression with a failure message.
The expression is kept as data (:class:`Condition` leaves joined by
:class:`Combined` nodes) so that assertions built independently of each
other can be merged into a single tree and evaluated as a unit. Nothing is
evaluated until :meth:`Assertion.execute` is called, and every call
evaluates again.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Union

from checkchain.assertions.merge import MergePolicy


class Operator(str, Enum):
    AND = "And"
    OR = "Or"


@dataclass(frozen=True)
class Condition:
    """Leaf expression wrapping a zero-argument callable."""

    func: Callable[[], Any]
    label: str | None = None

    def __post_init__(self) -> None:
        if not callable(self.func):
            raise TypeError(
                f"condition must be a zero-argument callable, got {type(self.func).__name__}"
            )

    def evaluate(self) -> bool:
        return bool(self.func())

    def describe(self) -> str:
        if self.label is not None:
            return self.label
        return getattr(self.func, "__name__", repr(self.func))


@dataclass(frozen=True)
class Combined:
    """Short-circuiting AND/OR over two or more expressions, left to right."""

    operator: Operator
    operands: tuple[Expression, ...]

    def __post_init__(self) -> None:
        if len(self.operands) < 2:
            raise ValueError("a combined expression needs at least two operands")

    def evaluate(self) -> bool:
        # all()/any() stop pulling from the generator once the result is known
        results = (operand.evaluate() for operand in self.operands)
        if self.operator is Operator.AND:
            return all(results)
        return any(results)

    def describe(self) -> str:
        joiner = f" {self.operator.name.lower()} "
        return "(" + joiner.join(op.describe() for op in self.operands) + ")"


Expression = Union[Condition, Combined]


def combine(operator: Operator, left: Expression, right: Expression) -> Combined:
    """Join two expressions under ``operator``.

    Operands that are already combined with the same operator are flattened
    into the new node, so chains of ``and_`` calls stay one level deep.
    """
    operands: list[Expression] = []
    for side in (left, right):
        if isinstance(side, Combined) and side.operator is operator:
            operands.extend(side.operands)
        else:
            operands.append(side)
    return Combined(operator, tuple(operands))


@dataclass(frozen=True)
class Assertion:
    """A deferred boolean check plus the message reported when it fails.

    Attributes:
        expression: Expression tree evaluated by :meth:`execute`. A bare
            zero-argument callable is accepted and wrapped in a
            :class:`Condition`.
        message: Human-readable description of the failure.
    """

    expression: Expression
    message: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.expression, (Condition, Combined)):
            if self.expression is None or not callable(self.expression):
                raise TypeError(
                    "assertion expression must be a zero-argument callable, "
                    f"got {type(self.expression).__name__}"
                )
            object.__setattr__(self, "expression", Condition(self.expression))
        if not isinstance(self.message, str):
            raise TypeError(
                f"assertion message must be a string, got {type(self.message).__name__}"
            )

    @classmethod
    def of(cls, value: Any) -> Assertion:
        """Build an Assertion from an ``(expression, message)`` pair or a callable.

        Existing assertions are returned as they are.
        """
        if isinstance(value, Assertion):
            return value
        if isinstance(value, tuple):
            if len(value) != 2:
                raise TypeError(
                    f"expected an (expression, message) pair, got a tuple of {len(value)}"
                )
            expression, message = value
            return cls(expression, message)
        if callable(value) or isinstance(value, (Condition, Combined)):
            return cls(value)
        raise TypeError(f"cannot build an Assertion from {type(value).__name__}")

    def execute(self) -> bool:
        return self.expression.evaluate()

    def describe(self) -> str:
        return self.expression.describe()

    def with_message(self, message: str) -> Assertion:
        return Assertion(self.expression, message)

    def and_(
        self,
        other: Assertion | Callable[[], Any],
        merge: MergePolicy | str | None = None,
        message: str | None = None,
    ) -> Assertion:
        """Return an assertion that passes when both this one and ``other`` pass.

        ``other`` is only evaluated when this assertion passes. Messages are
        merged with ``merge(self.message, other.message, "And")``.

        ``other`` may be a raw callable, in which case ``message`` is its
        failure message. Without an explicit ``merge`` the policy is
        ``REPLACE``, except for a raw callable given without a message, which
        keeps this assertion's message (``RETAIN_LEFT``).
        """
        return self._combine(Operator.AND, other, merge, message)

    def or_(
        self,
        other: Assertion | Callable[[], Any],
        merge: MergePolicy | str | None = None,
        message: str | None = None,
    ) -> Assertion:
        """Return an assertion that passes when this one or ``other`` passes.

        ``other`` is only evaluated when this assertion fails. Defaults as
        for :meth:`and_`, with ``"Or"`` as the connector.
        """
        return self._combine(Operator.OR, other, merge, message)

    def __and__(self, other: Any) -> Assertion:
        if not isinstance(other, Assertion) and not callable(other):
            return NotImplemented
        return self.and_(other)

    def __or__(self, other: Any) -> Assertion:
        if not isinstance(other, Assertion) and not callable(other):
            return NotImplemented
        return self.or_(other)

    def _combine(
        self,
        operator: Operator,
        other: Assertion | Callable[[], Any],
        merge: MergePolicy | str | None,
        message: str | None,
    ) -> Assertion:
        if isinstance(other, Assertion):
            if message is not None:
                raise TypeError(
                    "message can only be given when combining with a raw expression"
                )
            default = MergePolicy.REPLACE
        elif message is None:
            other = Assertion(other)
            default = MergePolicy.RETAIN_LEFT
        else:
            other = Assertion(other, message)
            default = MergePolicy.REPLACE

        policy = default if merge is None else MergePolicy(merge)
        return Assertion(
            combine(operator, self.expression, other.expression),
            policy(self.message, other.message, operator.value),
        )
