"""Expression arena, node records and the ``Expr`` handle type.

An objective function is stored as a DAG inside an :class:`ExpressionPool`.
Nodes are immutable records addressed by integer handle; a node's arguments
always carry smaller handles than the node itself, so ascending handle order
is a topological order of any sub-graph. Identical nodes are interned and
share a handle.

Example
-------
>>> from symopt.expr import VariableVector, exp
>>> x = VariableVector(2)
>>> f = (x[0] - 1) ** 2 + exp(x[1])
>>> str(f)
'(((x[0] - 1.0) ** 2.0) + exp(x[1]))'
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Iterable, List, NamedTuple, Optional, Tuple, Union, overload

import numpy as np

Number = Union[int, float]


class NodeKind(Enum):
    """Variants of expression nodes."""

    CONSTANT = "constant"
    VARIABLE = "variable"
    UNARY = "unary"
    BINARY = "binary"


class Node(NamedTuple):
    """Immutable node record stored in an :class:`ExpressionPool`."""

    kind: NodeKind
    op: str = ""
    args: Tuple[int, ...] = ()
    value: float = 0.0
    index: int = -1


@dataclass(frozen=True)
class Operator:
    """Elementary operation with its numpy implementation.

    Attributes:
        name: Registry key, also used as the function name when rendering.
        arity: 1 for unary functions, 2 for binary operators.
        fn: Vectorized numpy implementation.
        symbol: Infix symbol for binary operators.
    """

    name: str
    arity: int
    fn: Callable[..., np.ndarray]
    symbol: Optional[str] = None


def _sigmoid(a):
    return 1.0 / (1.0 + np.exp(-a))


def _log_sigmoid(a):
    return -np.logaddexp(0.0, -a)


def _ramp(a):
    return np.maximum(a, 0.0)


def _unit_step(a):
    return np.heaviside(a, 1.0)


OPERATORS: Dict[str, Operator] = {
    op.name: op
    for op in (
        Operator("neg", 1, np.negative),
        Operator("sqr", 1, np.square),
        Operator("sqrt", 1, np.sqrt),
        Operator("exp", 1, np.exp),
        Operator("log", 1, np.log),
        Operator("sin", 1, np.sin),
        Operator("cos", 1, np.cos),
        Operator("tan", 1, np.tan),
        Operator("asin", 1, np.arcsin),
        Operator("acos", 1, np.arccos),
        Operator("atan", 1, np.arctan),
        Operator("sigmoid", 1, _sigmoid),
        Operator("log_sigmoid", 1, _log_sigmoid),
        Operator("ramp", 1, _ramp),
        Operator("unit_step", 1, _unit_step),
        Operator("add", 2, np.add, "+"),
        Operator("sub", 2, np.subtract, "-"),
        Operator("mul", 2, np.multiply, "*"),
        Operator("div", 2, np.true_divide, "/"),
        Operator("pow", 2, np.power, "**"),
    )
}


def _apply(op: str, *values: float) -> float:
    with np.errstate(all="ignore"):
        return float(OPERATORS[op].fn(*values))


class ExpressionPool:
    """Append-only arena of interned expression nodes.

    The pool also hosts the derivative cache used by
    :func:`symopt.expr.differentiate`, keyed by ``(handle, variable_index)``.
    """

    def __init__(self) -> None:
        self._nodes: List[Node] = []
        self._lookup: Dict[Node, int] = {}
        self.derivatives: Dict[Tuple[int, int], int] = {}

    def __len__(self) -> int:
        return len(self._nodes)

    def node(self, handle: int) -> Node:
        return self._nodes[handle]

    def _intern(self, node: Node) -> int:
        handle = self._lookup.get(node)
        if handle is None:
            handle = len(self._nodes)
            self._nodes.append(node)
            self._lookup[node] = handle
        return handle

    def constant(self, value: Number) -> int:
        return self._intern(Node(NodeKind.CONSTANT, value=float(value)))

    def variable(self, index: int) -> int:
        if index < 0:
            raise ValueError("Variable index must be non-negative.")
        return self._intern(Node(NodeKind.VARIABLE, index=int(index)))

    def is_constant(self, handle: int, value: Optional[float] = None) -> bool:
        node = self._nodes[handle]
        if node.kind is not NodeKind.CONSTANT:
            return False
        return value is None or node.value == value

    def unary(self, op: str, a: int) -> int:
        """Create (or reuse) ``op(a)``, folding constant arguments."""
        if OPERATORS[op].arity != 1:
            raise ValueError(f"Operator '{op}' is not unary.")
        arg = self._nodes[a]
        if arg.kind is NodeKind.CONSTANT:
            return self.constant(_apply(op, arg.value))
        if op == "neg" and arg.kind is NodeKind.UNARY and arg.op == "neg":
            return arg.args[0]
        return self._intern(Node(NodeKind.UNARY, op, (a,)))

    def binary(self, op: str, a: int, b: int) -> int:
        """Create (or reuse) ``a op b`` after algebraic simplification."""
        if OPERATORS[op].arity != 2:
            raise ValueError(f"Operator '{op}' is not binary.")
        left, right = self._nodes[a], self._nodes[b]
        if left.kind is NodeKind.CONSTANT and right.kind is NodeKind.CONSTANT:
            return self.constant(_apply(op, left.value, right.value))
        zero_a, zero_b = self.is_constant(a, 0.0), self.is_constant(b, 0.0)
        one_a, one_b = self.is_constant(a, 1.0), self.is_constant(b, 1.0)
        if op == "add":
            if zero_a:
                return b
            if zero_b:
                return a
        elif op == "sub":
            if zero_b:
                return a
            if zero_a:
                return self.unary("neg", b)
        elif op == "mul":
            if zero_a or zero_b:
                return self.constant(0.0)
            if one_a:
                return b
            if one_b:
                return a
        elif op == "div":
            if one_b:
                return a
            if zero_a:
                return self.constant(0.0)
        elif op == "pow":
            if one_b:
                return a
            if zero_b:
                return self.constant(1.0)
        return self._intern(Node(NodeKind.BINARY, op, (a, b)))

    def reachable(self, roots: Iterable[int]) -> List[int]:
        """Return every handle reachable from ``roots`` in ascending order."""
        seen = set()
        stack = list(roots)
        while stack:
            handle = stack.pop()
            if handle in seen:
                continue
            seen.add(handle)
            stack.extend(self._nodes[handle].args)
        return sorted(seen)

    def to_string(self, handle: int) -> str:
        rendered: Dict[int, str] = {}
        for h in self.reachable([handle]):
            node = self._nodes[h]
            if node.kind is NodeKind.CONSTANT:
                rendered[h] = repr(node.value)
            elif node.kind is NodeKind.VARIABLE:
                rendered[h] = f"x[{node.index}]"
            elif node.kind is NodeKind.UNARY:
                inner = rendered[node.args[0]]
                rendered[h] = f"-{inner}" if node.op == "neg" else f"{node.op}({inner})"
            else:
                symbol = OPERATORS[node.op].symbol
                rendered[h] = f"({rendered[node.args[0]]} {symbol} {rendered[node.args[1]]})"
        return rendered[handle]


class Expr:
    """Handle to a node in an :class:`ExpressionPool`.

    Arithmetic on ``Expr`` objects (and on mixes of ``Expr`` and plain numbers)
    builds new nodes in the same pool. Two ``Expr`` objects compare equal when
    they refer to the same interned node.
    """

    __slots__ = ("pool", "handle")

    def __init__(self, pool: ExpressionPool, handle: int) -> None:
        self.pool = pool
        self.handle = handle

    @property
    def node(self) -> Node:
        return self.pool.node(self.handle)

    def is_constant(self) -> bool:
        return self.pool.is_constant(self.handle)

    def _lift(self, other: Union["Expr", Number]) -> int:
        if isinstance(other, Expr):
            if other.pool is not self.pool:
                raise ValueError("Cannot combine expressions from different pools.")
            return other.handle
        if isinstance(other, (int, float, np.integer, np.floating)) and not isinstance(other, bool):
            return self.pool.constant(other)
        return NotImplemented

    def _binary(self, op: str, other, reflected: bool = False):
        handle = self._lift(other)
        if handle is NotImplemented:
            return NotImplemented
        a, b = (handle, self.handle) if reflected else (self.handle, handle)
        return Expr(self.pool, self.pool.binary(op, a, b))

    def __add__(self, other):
        return self._binary("add", other)

    def __radd__(self, other):
        return self._binary("add", other, reflected=True)

    def __sub__(self, other):
        return self._binary("sub", other)

    def __rsub__(self, other):
        return self._binary("sub", other, reflected=True)

    def __mul__(self, other):
        return self._binary("mul", other)

    def __rmul__(self, other):
        return self._binary("mul", other, reflected=True)

    def __truediv__(self, other):
        return self._binary("div", other)

    def __rtruediv__(self, other):
        return self._binary("div", other, reflected=True)

    def __pow__(self, other):
        return self._binary("pow", other)

    def __rpow__(self, other):
        return self._binary("pow", other, reflected=True)

    def __neg__(self) -> "Expr":
        return Expr(self.pool, self.pool.unary("neg", self.handle))

    def __pos__(self) -> "Expr":
        return self

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Expr):
            return NotImplemented
        return self.pool is other.pool and self.handle == other.handle

    def __hash__(self) -> int:
        return hash((id(self.pool), self.handle))

    def __str__(self) -> str:
        return self.pool.to_string(self.handle)

    def __repr__(self) -> str:
        return f"Expr({self})"


def as_expr(pool: ExpressionPool, value: Union[Expr, Number]) -> Expr:
    """Return ``value`` as an expression in ``pool``."""
    if isinstance(value, Expr):
        if value.pool is not pool:
            raise ValueError("Expression belongs to a different pool.")
        return value
    if isinstance(value, bool) or not isinstance(value, (int, float, np.integer, np.floating)):
        raise TypeError(f"Expected Expr or real number, got {type(value).__name__}.")
    return Expr(pool, pool.constant(value))


class VariableVector(Sequence):
    """Ordered placeholder variables ``x[0] .. x[dim - 1]``.

    Each vector owns a fresh :class:`ExpressionPool`, so graphs built for
    separate optimization runs never share state.
    """

    def __init__(self, dim: int, pool: Optional[ExpressionPool] = None) -> None:
        if dim < 1:
            raise ValueError("Dimension must be at least 1.")
        self.pool = pool if pool is not None else ExpressionPool()
        self._vars = [Expr(self.pool, self.pool.variable(i)) for i in range(dim)]

    @property
    def dim(self) -> int:
        return len(self._vars)

    def __len__(self) -> int:
        return len(self._vars)

    @overload
    def __getitem__(self, index: int) -> Expr: ...

    @overload
    def __getitem__(self, index: slice) -> List[Expr]: ...

    def __getitem__(self, index):
        return self._vars[index]

    def __repr__(self) -> str:
        return f"VariableVector(dim={self.dim})"


__all__ = [
    "Expr",
    "ExpressionPool",
    "Node",
    "NodeKind",
    "OPERATORS",
    "Operator",
    "VariableVector",
    "as_expr",
]
