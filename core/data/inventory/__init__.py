"""
core/data/inventory - GCP resource discovery

Maps each ResourceType to a fetch strategy, runs it against a listing client
and normalizes the results into ResourceHandles with stable identifiers.

Classes:
    - DiscoveryRegistry: immutable ResourceType -> FetchStrategy table
    - InventoryCollector: discovers several types in parallel

Usage:
    from core.context import DiscoveryContext
    from core.data.inventory import ResourceType, build_registry

    registry = build_registry()
    ctx = DiscoveryContext(project="my-project", client=reader)
    disks = registry.discover(ctx, ResourceType.COMPUTE_DISK)
"""

from .collector import CollectionResult, InventoryCollector, TaskResult
from .identifiers import IdScheme, build_identifier, parse_identifier
from .registry import DiscoveryRegistry, FetchStrategy, build_registry
from .types import ListedItem, ResourceHandle, ResourceType, ZonedCollection

__all__ = [
    # Registry
    "DiscoveryRegistry",
    "FetchStrategy",
    "build_registry",
    # Collector
    "InventoryCollector",
    "CollectionResult",
    "TaskResult",
    # Identifiers
    "IdScheme",
    "build_identifier",
    "parse_identifier",
    # Types
    "ListedItem",
    "ResourceHandle",
    "ResourceType",
    "ZonedCollection",
]
