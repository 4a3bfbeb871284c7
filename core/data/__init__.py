"""
core/data - Data Services Layer

Modules:
    - inventory: resource discovery registry and parallel collector

Usage:
    from core.data.inventory import InventoryCollector, build_registry
"""

from .inventory import InventoryCollector, build_registry

__all__ = [
    "InventoryCollector",
    "build_registry",
]
