"""
core/data/inventory/collector.py - Unified Inventory Collector

Runs independent discover() calls for several resource types on a thread
pool sharing one read-only context, and gathers per-type results and errors.

Usage:
    collector = InventoryCollector(ctx, registry)
    result = collector.collect([ResourceType.COMPUTE_DISK, ResourceType.DNS_RECORD_SET])

    handles = result.get_flat_data()
    if result.error_count:
        print(result.get_error_summary())
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, as_completed, wait
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from core.config import settings
from core.exceptions import DiscoveryError

from .registry import DiscoveryRegistry
from .types import ResourceHandle, ResourceType

if TYPE_CHECKING:
    from core.context import DiscoveryContext
    from core.filter import FilterSpec

logger = logging.getLogger(__name__)


@dataclass
class TaskResult:
    """Outcome of discovering one resource type

    Attributes:
        resource_type: discovered type
        handles: discovered handles (empty on failure)
        error: failure, if any
        duration_ms: wall time of the discover() call
    """

    resource_type: ResourceType
    handles: list[ResourceHandle] = field(default_factory=list)
    error: DiscoveryError | None = None
    duration_ms: float = 0.0

    @property
    def success(self) -> bool:
        return self.error is None


@dataclass
class CollectionResult:
    """Results of one collect() call, in the order the types were requested"""

    results: list[TaskResult] = field(default_factory=list)

    @property
    def success_count(self) -> int:
        return sum(1 for r in self.results if r.success)

    @property
    def error_count(self) -> int:
        return sum(1 for r in self.results if not r.success)

    def get_flat_data(self) -> list[ResourceHandle]:
        """All handles of the successful types"""
        flattened: list[ResourceHandle] = []
        for result in self.results:
            flattened.extend(result.handles)
        return flattened

    def get_errors(self) -> list[DiscoveryError]:
        return [r.error for r in self.results if r.error is not None]

    def by_type(self) -> dict[ResourceType, list[ResourceHandle]]:
        return {r.resource_type: r.handles for r in self.results if r.success}

    def get_error_summary(self) -> str:
        lines = [f"{len(self.get_errors())} resource type(s) failed:"]
        for result in self.results:
            if result.error is not None:
                lines.append(f"  - {result.resource_type}: {result.error}")
        return "\n".join(lines)


class InventoryCollector:
    """Discovers several resource types in parallel

    Example:
        collector = InventoryCollector(ctx, build_registry(), max_workers=4)
        result = collector.collect(registry.types())
    """

    def __init__(
        self,
        ctx: DiscoveryContext,
        registry: DiscoveryRegistry,
        max_workers: int | None = None,
    ):
        """Initialize collector

        Args:
            ctx: shared execution context
            registry: registry used for every discover() call
            max_workers: thread pool size (settings.DEFAULT_MAX_WORKERS if None)
        """
        self._ctx = ctx
        self._registry = registry
        self._max_workers = settings.DEFAULT_MAX_WORKERS if max_workers is None else max_workers
        if self._max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {self._max_workers}")

    def collect(
        self,
        resource_types: Iterable[ResourceType],
        filters: FilterSpec | None = None,
        fail_fast: bool = False,
    ) -> CollectionResult:
        """Discover every requested type

        Args:
            resource_types: types to discover
            filters: tag predicates passed to every discover() call
            fail_fast: cancel the context and re-raise on the first failure

        Returns:
            CollectionResult in request order

        Raises:
            DiscoveryError: first failure, only when fail_fast is set
        """
        types = list(dict.fromkeys(resource_types))
        if not types:
            logger.warning("no resource types to collect")
            return CollectionResult()

        # Unsupported types fail before any worker is started
        for resource_type in types:
            self._registry.strategy(resource_type)

        logger.info(f"collecting {len(types)} resource type(s), max_workers={self._max_workers}")
        start_time = time.monotonic()

        with ThreadPoolExecutor(max_workers=min(self._max_workers, len(types))) as executor:
            futures = {executor.submit(self._discover_one, t, filters): t for t in types}

            if fail_fast:
                done, _ = wait(futures, return_when=FIRST_EXCEPTION)
                failed = [f for f in done if f.exception() is not None]
                if failed:
                    self._ctx.cancel()
                    for future in futures:
                        future.cancel()
                    first = failed[0].exception()
                    if isinstance(first, DiscoveryError):
                        raise first
                    raise self._unexpected(futures[failed[0]], first) from first  # type: ignore[arg-type]

            by_type: dict[ResourceType, TaskResult] = {}
            for future in as_completed(futures):
                resource_type = futures[future]
                try:
                    by_type[resource_type] = future.result()
                except DiscoveryError as e:
                    logger.error(f"{resource_type}: {e}")
                    by_type[resource_type] = TaskResult(resource_type=resource_type, error=e)
                except Exception as e:
                    error = self._unexpected(resource_type, e)
                    by_type[resource_type] = TaskResult(resource_type=resource_type, error=error)

        result = CollectionResult(results=[by_type[t] for t in types])
        total_time = (time.monotonic() - start_time) * 1000
        logger.info(
            f"collection finished: {result.success_count} succeeded, {result.error_count} failed, {total_time:.0f}ms"
        )
        return result

    def _unexpected(self, resource_type: ResourceType, cause: Exception) -> DiscoveryError:
        logger.error(f"{resource_type}: unexpected error", exc_info=cause)
        return DiscoveryError(f"unexpected error discovering {resource_type}", resource_type, cause=cause)

    def _discover_one(self, resource_type: ResourceType, filters: FilterSpec | None) -> TaskResult:
        start_time = time.monotonic()
        handles = self._registry.discover(self._ctx, resource_type, filters)
        return TaskResult(
            resource_type=resource_type,
            handles=handles,
            duration_ms=(time.monotonic() - start_time) * 1000,
        )
