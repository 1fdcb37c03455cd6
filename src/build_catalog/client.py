"""Injectable store client backed by Get/Update closures."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol

from build_catalog.fixtures import NamespacedName
from build_catalog.variants import VariantLike

GetFunc = Callable[[NamespacedName, VariantLike], Any]
UpdateFunc = Callable[[Any], None]


def _acknowledge(obj: Any) -> None:
    return None


class StatusWriter(Protocol):
    def update(self, obj: Any) -> None: ...


class StoreClient(Protocol):
    """The client surface a reconciliation controller should accept to be testable."""

    def get(self, key: NamespacedName, kind: VariantLike) -> Any: ...

    def update(self, obj: Any) -> None: ...

    def status(self) -> StatusWriter: ...


@dataclass(frozen=True)
class _FakeStatusWriter:
    update_func: UpdateFunc

    def update(self, obj: Any) -> None:
        self.update_func(obj)


@dataclass(frozen=True)
class FakeClient:
    """A ``StoreClient`` whose operations are plain functions.

    ``update_func`` handles writes of the whole object; ``status_update_func``
    handles writes to the status subresource. Both default to acknowledging
    every write without checks.
    """

    get_func: GetFunc
    update_func: UpdateFunc = _acknowledge
    status_update_func: UpdateFunc = _acknowledge

    def get(self, key: NamespacedName, kind: VariantLike) -> Any:
        return self.get_func(key, kind)

    def update(self, obj: Any) -> None:
        self.update_func(obj)

    def status(self) -> StatusWriter:
        return _FakeStatusWriter(self.status_update_func)
