"""Handle for one in-flight asset load."""

from __future__ import annotations

import weakref
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional

from core.errors import AssetStateError

if TYPE_CHECKING:
    from loading.load_group import LoadGroup


class LoadState(Enum):
    PENDING = "pending"
    LOADED = "loaded"
    FAILED = "failed"


class AssetHandle:
    """Tracks one asset from request to its single terminal state.

    The handle only keeps a weak reference to its group: the group owns
    its handles, never the other way around.
    """

    __slots__ = ("identifier", "_state", "_payload", "_error", "_group_ref", "__weakref__")

    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        self._state = LoadState.PENDING
        self._payload: Any = None
        self._error: Optional[BaseException] = None
        self._group_ref: Optional["weakref.ReferenceType[LoadGroup]"] = None

    def __repr__(self) -> str:
        return f"AssetHandle({self.identifier!r}, {self._state.value})"

    # ------------------------------------------------------------------
    def attach(self, group: "LoadGroup") -> None:
        if self._group_ref is not None and self._group_ref() is not None:
            raise AssetStateError(f"asset '{self.identifier}' already belongs to a load group")
        self._group_ref = weakref.ref(group)

    @property
    def group(self) -> Optional["LoadGroup"]:
        return self._group_ref() if self._group_ref is not None else None

    @property
    def state(self) -> LoadState:
        return self._state

    @property
    def payload(self) -> Any:
        return self._payload

    @property
    def error(self) -> Optional[BaseException]:
        return self._error

    @property
    def is_pending(self) -> bool:
        return self._state is LoadState.PENDING

    # ------------------------------------------------------------------
    def resolve(self, payload: Any) -> None:
        self._transition(LoadState.LOADED)
        self._payload = payload
        group = self.group
        if group is not None:
            group.handle_resolved(self)

    def fail(self, error: Optional[BaseException] = None) -> None:
        self._transition(LoadState.FAILED)
        self._error = error
        group = self.group
        if group is not None:
            group.handle_failed(self)

    def _transition(self, new_state: LoadState) -> None:
        if self._state is not LoadState.PENDING:
            raise AssetStateError(
                f"asset '{self.identifier}' is already {self._state.value}; "
                f"cannot become {new_state.value}"
            )
        self._state = new_state


__all__ = ["AssetHandle", "LoadState"]
