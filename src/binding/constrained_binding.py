"""Bindings: the only write path from a control surface to scene properties.

``write(role, value)`` applies the value, repairs coupled properties when an
invariant breaks, pushes one-way mirrors and returns the resulting state.
Writing to the underlying owner directly bypasses all of this.
"""

from __future__ import annotations

import logging
import math
import numbers
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from binding.bound_property import BoundProperty
from core.errors import InvariantViolationUnrepairable

logger = logging.getLogger(__name__)

State = Dict[str, Any]
Coerce = Callable[[Any], Any]
Predicate = Callable[[State], bool]
Repair = Callable[["ConstrainedBinding", str], None]

# Slack for float rounding in separation checks (upper - s can round down)
_EPSILON = 1e-9


class Binding:
    """A set of BoundProperty instances addressed by role.

    Mirrors are one-way: after a write to ``role`` its new value is copied
    to each mirror sink. Nothing flows back from a sink, and writing to a
    sink never touches the source.
    """

    def __init__(self, name: str, properties: Sequence[BoundProperty]) -> None:
        if not properties:
            raise ValueError(f"binding '{name}' needs at least one property")
        self.name = name
        self._props: Dict[str, BoundProperty] = {}
        self._coerce: Dict[str, Coerce] = {}
        self._mirrors: Dict[str, List[Tuple[BoundProperty, str]]] = {}
        self.enabled = True
        for prop in properties:
            self.add_property(prop)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r}, roles={self.roles})"

    # ------------------------------------------------------------------
    def add_property(self, prop: BoundProperty, coerce: Optional[Coerce] = None) -> None:
        if prop.role in self._props:
            raise ValueError(f"binding '{self.name}' already has role '{prop.role}'")
        self._props[prop.role] = prop
        if coerce is not None:
            self._coerce[prop.role] = coerce

    def add_mirror(self, role: str, sink: BoundProperty, note: str) -> None:
        """Copy ``role`` onto ``sink`` after every write (one-way).

        ``note`` documents why the mirror exists; it shows up in logs and
        in ``describe()``.
        """
        self._prop(role)
        self._mirrors.setdefault(role, []).append((sink, note))
        sink.set(self.read(role))

    @property
    def roles(self) -> List[str]:
        return list(self._props)

    def describe(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "roles": self.roles,
            "enabled": self.enabled,
            "mirrors": {
                role: [f"{sink!r}: {note}" for sink, note in sinks]
                for role, sinks in self._mirrors.items()
            },
        }

    # ------------------------------------------------------------------
    def read(self, role: str) -> Any:
        return self._prop(role).get()

    def state(self) -> State:
        return {role: prop.get() for role, prop in self._props.items()}

    def write(self, role: str, value: Any) -> State:
        prop = self._prop(role)
        if not self.enabled:
            raise InvariantViolationUnrepairable(self.name, self.state())
        coerce = self._coerce.get(role)
        if coerce is not None:
            value = coerce(value)
        before = self.state()
        prop.set(value)
        self._after_write(role, before)
        for sink, _ in self._mirrors.get(role, ()):
            sink.set(prop.get())
        return self.state()

    def _after_write(self, role: str, before: State) -> None:
        pass

    def _prop(self, role: str) -> BoundProperty:
        try:
            return self._props[role]
        except KeyError:
            raise KeyError(f"binding '{self.name}' has no role '{role}'") from None


class ConstrainedBinding(Binding):
    """Binding over 2+ properties that keeps an invariant after every write.

    When ``predicate(state)`` fails after a write to one of the constructor's
    properties, ``repair(binding, role)`` adjusts the others. The write itself
    is never rejected. If the predicate still fails after repair, the owner
    gets its pre-write values back, the binding disables itself and raises
    InvariantViolationUnrepairable.

    Roles added later with ``add_property`` ride along (one ``on_change``,
    one state) but are outside the invariant: writing them never repairs.

    A starting state that breaks the invariant is repaired once here, driven
    by the first role; if that fails the constructor raises.
    """

    def __init__(
        self,
        name: str,
        properties: Sequence[BoundProperty],
        predicate: Predicate,
        repair: Repair,
    ) -> None:
        if len(properties) < 2:
            raise ValueError(f"constrained binding '{name}' needs at least two properties")
        super().__init__(name, properties)
        self.predicate = predicate
        self.repair = repair
        self.constrained_roles = frozenset(self.roles)
        if not self.holds():
            before = self.state()
            self._repair_start()
            if not self.holds():
                broken = self.state()
                self._restore(before)
                raise InvariantViolationUnrepairable(name, broken)
            logger.warning(
                "Binding '%s' started outside its invariant; repaired %s -> %s",
                name, before, self.state(),
            )

    def holds(self) -> bool:
        return bool(self.predicate(self.state()))

    def set_raw(self, role: str, value: Any) -> None:
        """Write one property without repair or mirrors (for repair functions)."""
        self._prop(role).set(value)

    def _repair_start(self) -> None:
        self.repair(self, self.roles[0])

    def _restore(self, state: State) -> None:
        for role, value in state.items():
            self._prop(role).set(value)

    def _after_write(self, role: str, before: State) -> None:
        if role not in self.constrained_roles or self.holds():
            return
        self.repair(self, role)
        if not self.holds():
            self.enabled = False
            broken = self.state()
            self._restore(before)
            logger.error(
                "Binding '%s' disabled; invariant unrepairable: %s (kept %s)",
                self.name, broken, before,
            )
            raise InvariantViolationUnrepairable(self.name, broken)


def finite_number(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise TypeError(f"expected a number, got {value!r}")
    value = float(value)
    if not math.isfinite(value):
        raise ValueError(f"expected a finite number, got {value!r}")
    return value


class OrderedPairBinding(ConstrainedBinding):
    """Keeps ``upper - lower >= min_separation`` (and both inside ``domain``).

    Raising lower past upper pushes upper to ``lower + min_separation``;
    dropping upper below lower pulls lower to ``upper - min_separation``.
    Written values are clamped to ``domain`` first. If the pushed partner
    would leave the domain it stops at the edge and the written value gives
    way instead.
    """

    def __init__(
        self,
        lower: BoundProperty,
        upper: BoundProperty,
        *,
        min_separation: float = 0.0,
        domain: Optional[Tuple[float, float]] = None,
        name: Optional[str] = None,
    ) -> None:
        if min_separation < 0:
            raise ValueError(f"min_separation must be >= 0, got {min_separation}")
        if domain is not None and domain[0] > domain[1]:
            raise ValueError(f"empty domain {domain}")
        self.lower_role = lower.role
        self.upper_role = upper.role
        self.min_separation = float(min_separation)
        self.domain = domain
        super().__init__(
            name or f"{lower.role}/{upper.role}",
            [lower, upper],
            self._ordered,
            self._push_partner,
        )
        self._coerce[self.lower_role] = self._clamp
        self._coerce[self.upper_role] = self._clamp

    def _clamp(self, value: Any) -> float:
        value = finite_number(value)
        if self.domain is None:
            return value
        low, high = self.domain
        return max(low, min(high, value))

    def _ordered(self, state: State) -> bool:
        lo = state[self.lower_role]
        hi = state[self.upper_role]
        if hi - lo < self.min_separation - _EPSILON:
            return False
        if self.domain is not None:
            low, high = self.domain
            if lo < low - _EPSILON or hi > high + _EPSILON:
                return False
        return True

    def _push_partner(self, _binding: ConstrainedBinding, role: str) -> None:
        s = self.min_separation
        low, high = self.domain if self.domain is not None else (-math.inf, math.inf)
        if role == self.lower_role:
            lo = self.read(self.lower_role)
            hi = lo + s
            if hi > high:
                hi = high
                self.set_raw(self.lower_role, hi - s)
            self.set_raw(self.upper_role, hi)
        elif role == self.upper_role:
            hi = self.read(self.upper_role)
            lo = hi - s
            if lo < low:
                lo = low
                self.set_raw(self.upper_role, lo + s)
            self.set_raw(self.lower_role, lo)

    def _repair_start(self) -> None:
        # Pull both ends into the domain, then push only if still out of order
        for role in (self.lower_role, self.upper_role):
            self.set_raw(role, self._clamp(self.read(role)))
        if not self.holds():
            self._push_partner(self, self.lower_role)

    @property
    def lower(self) -> float:
        return self.read(self.lower_role)

    @property
    def upper(self) -> float:
        return self.read(self.upper_role)


__all__ = ["Binding", "ConstrainedBinding", "OrderedPairBinding", "finite_number"]
