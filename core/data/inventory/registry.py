"""
core/data/inventory/registry.py - Discovery registry

Dispatch table from ResourceType to FetchStrategy. A strategy is plain data:
which client listing method to call, what argument to pass it, whether the
answer is partitioned by scope, and how to build identifiers. The registry
executes strategies and normalizes results into ResourceHandles.

Usage:
    from core.data.inventory import build_registry

    registry = build_registry()
    handles = registry.discover(ctx, ResourceType.COMPUTE_DISK)
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from core.exceptions import (
    DependencyError,
    DiscoveryCancelledError,
    DiscoveryError,
    ListingError,
    UnsupportedResourceTypeError,
)
from core.filter import NO_FILTER, FilterSpec, compile_filter

from .identifiers import IdScheme, build_identifier
from .types import ResourceHandle, ResourceType

if TYPE_CHECKING:
    from core.context import DiscoveryContext

logger = logging.getLogger(__name__)

ArgumentBuilder = Callable[["DiscoveryContext", "FilterSpec | None"], Any]


# =========================================================================
# Listing arguments
# =========================================================================


def no_filter(ctx: DiscoveryContext, filters: FilterSpec | None) -> str:
    """Unfiltered listing"""
    return NO_FILTER


def tag_filter(ctx: DiscoveryContext, filters: FilterSpec | None) -> str:
    """Listing filtered by the caller's tags"""
    return compile_filter(filters)


def project_path(ctx: DiscoveryContext, filters: FilterSpec | None) -> str:
    """Listing scoped to ``projects/<project>``"""
    return f"projects/{ctx.project}"


# =========================================================================
# Strategy
# =========================================================================


@dataclass(frozen=True)
class FetchStrategy:
    """How to discover one resource type

    Attributes:
        method: name of the client listing method
        label: what is listed, used in error messages ("unable to list <label>")
        id_scheme: identifier scheme of the produced handles
        zoned: the listing returns a scope key -> items mapping
        argument: builds the listing argument; None calls the method with
            the context only
        depends_on: type whose identifiers are passed as the listing
            argument (two-stage discovery)
    """

    method: str
    label: str
    id_scheme: IdScheme = IdScheme.NAME
    zoned: bool = False
    argument: ArgumentBuilder | None = no_filter
    depends_on: ResourceType | None = None

    def __post_init__(self) -> None:
        if self.id_scheme.scoped and not self.zoned:
            raise ValueError(f"{self.method}: scheme {self.id_scheme.value} needs a zoned listing")

    @property
    def filtered(self) -> bool:
        return self.argument is tag_filter


# =========================================================================
# Registry
# =========================================================================


class DiscoveryRegistry:
    """Immutable ResourceType -> FetchStrategy dispatch table

    Holds no per-run state: the same registry can serve any number of
    contexts, from any number of threads.
    """

    def __init__(self, strategies: Mapping[ResourceType, FetchStrategy]):
        table = dict(strategies)
        for resource_type, strategy in table.items():
            if strategy.depends_on is not None and strategy.depends_on not in table:
                raise ValueError(f"{resource_type} depends on unregistered type {strategy.depends_on}")
        self._strategies: Mapping[ResourceType, FetchStrategy] = MappingProxyType(table)

    def __contains__(self, resource_type: object) -> bool:
        return resource_type in self._strategies

    def __len__(self) -> int:
        return len(self._strategies)

    def types(self) -> list[ResourceType]:
        """Supported types in declaration order"""
        return sorted(self._strategies)

    def strategy(self, resource_type: ResourceType) -> FetchStrategy:
        """Strategy bound to a type

        Raises:
            UnsupportedResourceTypeError: no strategy is bound
        """
        try:
            return self._strategies[resource_type]
        except KeyError:
            raise UnsupportedResourceTypeError(resource_type) from None

    def discover(
        self,
        ctx: DiscoveryContext,
        resource_type: ResourceType,
        filters: FilterSpec | None = None,
    ) -> list[ResourceHandle]:
        """Discover every resource of one type

        Args:
            ctx: execution context (project, client, cancellation)
            resource_type: type to discover
            filters: tag predicates, ignored by types that do not filter

        Returns:
            Handles in listing order

        Raises:
            UnsupportedResourceTypeError: type has no strategy (no client call made)
            ListingError: the client listing failed
            DependencyError: the first stage of a two-stage type failed
            DiscoveryCancelledError: the context was cancelled
        """
        strategy = self.strategy(resource_type)
        ctx.raise_if_cancelled()

        if strategy.depends_on is not None:
            argument: Any = self._resolve_dependency(ctx, resource_type, strategy, filters)
        elif strategy.argument is not None:
            argument = strategy.argument(ctx, filters)
        else:
            argument = None

        listing = self._list(ctx, resource_type, strategy, argument)
        handles = self._normalize(ctx, resource_type, strategy, listing)

        logger.debug(f"{resource_type}: {len(handles)} resource(s)")
        return handles

    # =========================================================================
    # Internal Methods
    # =========================================================================

    def _resolve_dependency(
        self,
        ctx: DiscoveryContext,
        resource_type: ResourceType,
        strategy: FetchStrategy,
        filters: FilterSpec | None,
    ) -> list[str]:
        dependency: ResourceType = strategy.depends_on  # type: ignore[assignment]
        try:
            parents = self.discover(ctx, dependency, filters)
        except DiscoveryCancelledError:
            raise
        except DiscoveryError as e:
            if ctx.stopped:
                raise ctx.cancellation_error(resource_type) from e
            label = self._strategies[dependency].label
            raise DependencyError(resource_type, dependency, label, cause=e) from e
        return [parent.id for parent in parents]

    def _list(
        self,
        ctx: DiscoveryContext,
        resource_type: ResourceType,
        strategy: FetchStrategy,
        argument: Any,
    ) -> Any:
        ctx.raise_if_cancelled()
        logger.debug(f"{resource_type}: {strategy.method}({argument!r})")
        try:
            method = getattr(ctx.client, strategy.method)
            if strategy.argument is None and strategy.depends_on is None:
                return method(ctx)
            return method(ctx, argument)
        except DiscoveryCancelledError:
            raise
        except Exception as e:
            # a call cut short by the deadline fails with the client's own timeout error
            if ctx.stopped:
                raise ctx.cancellation_error(resource_type) from e
            raise ListingError(resource_type, strategy.label, cause=e) from e

    def _normalize(
        self,
        ctx: DiscoveryContext,
        resource_type: ResourceType,
        strategy: FetchStrategy,
        listing: Any,
    ) -> list[ResourceHandle]:
        if strategy.zoned:
            pairs: Iterable[tuple[str, Any]] = (
                (scope, item) for scope, items in listing.items() for item in items
            )
        else:
            pairs = (("", item) for item in listing)

        return [
            ResourceHandle(
                id=build_identifier(strategy.id_scheme, item, project=ctx.project, scope=scope),
                resource_type=resource_type,
                provider=ctx,
            )
            for scope, item in pairs
        ]


def build_registry(
    extra: Mapping[ResourceType, FetchStrategy] | None = None,
) -> DiscoveryRegistry:
    """Build a registry with every built-in strategy

    Args:
        extra: strategies added to (or replacing) the built-in ones

    Returns:
        A new DiscoveryRegistry
    """
    from .services import COMPUTE_STRATEGIES, DNS_STRATEGIES, IAM_STRATEGIES, STORAGE_STRATEGIES

    strategies: dict[ResourceType, FetchStrategy] = {}
    for table in (COMPUTE_STRATEGIES, DNS_STRATEGIES, IAM_STRATEGIES, STORAGE_STRATEGIES):
        strategies.update(table)
    if extra:
        strategies.update(extra)
    return DiscoveryRegistry(strategies)
