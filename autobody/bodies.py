"""Iterative superposition of many bodies.

Chaining ``a + b + c + ...`` builds a tree of :class:`~autobody.body.Union`
objects whose evaluation depth grows with the number of bodies.
:class:`AutoBodies` stores the bodies in a flat list together with one
operator per consecutive pair and folds them left to right in a loop, so
evaluation cost is linear and stack depth is constant.

Only union and difference are supported in the fold.
"""

from __future__ import annotations

import enum
from typing import Sequence, Tuple, Union as _Union

from ._common import _F, MapFunc, SDFFunc
from .body import AbstractBody
from .errors import ConfigurationError

__all__ = ["Op", "AutoBodies", "sdf_map_d"]


class Op(enum.Enum):
    """How a body is folded into the running superposition."""

    UNION = "union"
    DIFFERENCE = "difference"

    @classmethod
    def parse(cls, op: _Union[Op, str]) -> Op:
        """Convert ``Op`` members, ``"union"``/``"difference"`` or ``"+"``/``"-"``."""
        if isinstance(op, cls):
            return op
        if isinstance(op, str):
            found = _OP_ALIASES.get(op.strip().lower())
            if found is not None:
                return found
        raise ConfigurationError(
            f"unsupported superposition operator {op!r}; use Op.UNION or Op.DIFFERENCE"
        )


_OP_ALIASES = {
    "union": Op.UNION,
    "+": Op.UNION,
    "difference": Op.DIFFERENCE,
    "-": Op.DIFFERENCE,
}


def _negated(func: SDFFunc) -> SDFFunc:
    def _neg(x: _F, t: float) -> float:
        return -func(x, t)

    return _neg


class AutoBodies(AbstractBody):
    """Superposition of *bodies* according to *ops*.

    Parameters
    ----------
    bodies:
        Non-empty sequence of bodies.
    ops:
        ``ops[i]`` folds ``bodies[i + 1]`` into the result of
        ``bodies[:i + 1]``.  ``None`` means union throughout; a single
        operator is repeated for every pair.

    Raises
    ------
    ConfigurationError
        For an empty *bodies*, a non-body element, an unsupported operator,
        or ``len(ops) != len(bodies) - 1``.
    """

    def __init__(
        self,
        bodies: Sequence[AbstractBody],
        ops: _Union[None, Op, str, Sequence[_Union[Op, str]]] = None,
    ) -> None:
        bodies = tuple(bodies)
        if not bodies:
            raise ConfigurationError("AutoBodies needs at least one body")
        for body in bodies:
            if not isinstance(body, AbstractBody):
                raise ConfigurationError(f"expected an AbstractBody, got {type(body).__name__}")

        if ops is None:
            ops = [Op.UNION] * (len(bodies) - 1)
        elif isinstance(ops, (Op, str)):
            ops = [ops] * (len(bodies) - 1)
        ops = tuple(Op.parse(op) for op in ops)
        if len(ops) != len(bodies) - 1:
            raise ConfigurationError(
                f"len(ops) must be len(bodies) - 1 = {len(bodies) - 1}, got {len(ops)}"
            )

        self._bodies = bodies
        self._ops = ops

    @property
    def bodies(self) -> Tuple[AbstractBody, ...]:
        return self._bodies

    @property
    def ops(self) -> Tuple[Op, ...]:
        return self._ops

    def __len__(self) -> int:
        return len(self._bodies)

    def __repr__(self) -> str:
        ops = ", ".join(op.value for op in self._ops)
        return f"AutoBodies({len(self._bodies)} bodies, ops=[{ops}])"

    def sdf_map_d(self, x: _F, t: float) -> Tuple[SDFFunc, MapFunc, float]:
        """Return the active ``sdf`` and ``map`` at ``(x, t)`` and ``d = sdf(x, t)``.

        A later body replaces the running result only on a strict
        improvement, so ties stay with the earlier body.
        """
        first = self._bodies[0]
        sdf_func, map_func, d = first.sdf, first.map, first.sdf(x, t)
        for op, body in zip(self._ops, self._bodies[1:]):
            db = body.sdf(x, t)
            if op is Op.UNION and db < d:
                sdf_func, map_func, d = body.sdf, body.map, db
            elif op is Op.DIFFERENCE and -db > d:
                sdf_func, map_func, d = _negated(body.sdf), body.map, -db
        return sdf_func, map_func, d

    def sdf(self, x: _F, t: float) -> float:
        return self.sdf_map_d(x, t)[2]

    def map(self, x: _F, t: float) -> _F:
        return self.sdf_map_d(x, t)[1](x, t)

    def resolve(self, x: _F, t: float) -> Tuple[SDFFunc, MapFunc]:
        sdf_func, map_func, _ = self.sdf_map_d(x, t)
        return sdf_func, map_func


def sdf_map_d(bodies: AutoBodies, x: _F, t: float) -> Tuple[SDFFunc, MapFunc, float]:
    """Functional form of :meth:`AutoBodies.sdf_map_d`."""
    return bodies.sdf_map_d(x, t)
