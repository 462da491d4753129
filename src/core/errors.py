"""Error taxonomy for the loading, binding and scheduling layers.

Every failure here is local to one unit (a load group, a binding or a
single tick); callers catch them at that unit's boundary so the frame loop
keeps running.
"""

from __future__ import annotations

from typing import Optional


class KernelError(Exception):
    """Base class for all errors raised by the scene kernel."""


class OverCompletion(KernelError):
    """A load group received more completions than its registered total."""

    def __init__(self, group_id: str, total: int, identifier: Optional[str] = None):
        self.group_id = group_id
        self.total = total
        self.identifier = identifier
        msg = f"load group '{group_id}' already completed all {total} item(s)"
        if identifier is not None:
            msg += f" (extra report for '{identifier}')"
        super().__init__(msg)


class InvalidTick(KernelError):
    """Timestamp was non-numeric, not finite, or earlier than the last tick."""

    def __init__(self, timestamp: object, reason: str):
        self.timestamp = timestamp
        self.reason = reason
        super().__init__(f"invalid tick {timestamp!r}: {reason}")


class AssetLoadFailure(KernelError):
    def __init__(self, identifier: str, cause: Optional[BaseException] = None):
        self.identifier = identifier
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"failed to load asset '{identifier}'{detail}")


class AssetStateError(KernelError):
    """An asset handle was resolved or failed a second time."""


class InvariantViolationUnrepairable(KernelError):
    """A binding's repair step could not restore its invariant.

    This is a configuration bug (e.g. a separation wider than the domain);
    the binding disables itself after raising it.
    """

    def __init__(self, binding_name: str, state: dict):
        self.binding_name = binding_name
        self.state = dict(state)
        super().__init__(
            f"binding '{binding_name}' cannot satisfy its invariant (state={self.state})"
        )


__all__ = [
    "KernelError",
    "OverCompletion",
    "InvalidTick",
    "AssetLoadFailure",
    "AssetStateError",
    "InvariantViolationUnrepairable",
]
