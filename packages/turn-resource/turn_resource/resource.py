"""Resource - a single allocatable unit."""
from __future__ import annotations

from typing import TYPE_CHECKING

from turn_resource.types import AllocationError, ResourceType

if TYPE_CHECKING:
    from turn_resource.sink import ResourceSink


class Resource:
    """One unit of a resource type, held by at most one sink at a time."""

    def __init__(self, resource_type: ResourceType = ResourceType.ANY, name: str = "") -> None:
        self.resource_type = resource_type
        self.name = name
        self._sink: ResourceSink | None = None
        self._allocation_type: ResourceType | None = None

    @property
    def sink(self) -> ResourceSink | None:
        return self._sink

    @property
    def allocation_type(self) -> ResourceType | None:
        """Type the holding sink allocated this as, or None when free."""
        return self._allocation_type

    @property
    def is_allocated(self) -> bool:
        return self._sink is not None

    def allocate(self, sink: ResourceSink, allocation_type: ResourceType) -> None:
        if self._sink is not None and self._sink is not sink:
            raise AllocationError(f"{self!r} is already allocated to another sink")
        self._sink = sink
        self._allocation_type = allocation_type

    def free(self) -> None:
        self._sink = None
        self._allocation_type = None

    def __repr__(self) -> str:
        label = self.name or self.resource_type.name
        state = "allocated" if self._sink is not None else "free"
        return f"<Resource {label} {state}>"
