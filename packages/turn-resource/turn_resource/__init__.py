"""turn-resource - Resource allocation sinks for the turn engine."""
from turn_resource.resource import Resource
from turn_resource.sink import AmountCallback, ResourceSink
from turn_resource.types import (
    AllocationError,
    ResourceSinkData,
    ResourceType,
)

__all__ = [
    "AllocationError",
    "AmountCallback",
    "Resource",
    "ResourceSink",
    "ResourceSinkData",
    "ResourceType",
]
