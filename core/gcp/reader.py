"""
core/gcp/reader.py - Google Cloud listing client

Concrete listing capability used by the discovery registry. One method per
resource kind; zonal kinds return a zone -> items mapping, the rest an
ordered list. Pagination is left to the client libraries' pagers.

Every call checks the context for cancellation between items and passes the
remaining deadline as the per-request timeout where the library accepts one.

Example:
    from core.gcp.reader import GCPReader, load_credentials

    reader = GCPReader("my-project", credentials=load_credentials("key.json"), region="us-central1")
    ctx = DiscoveryContext(project="my-project", client=reader)
    zones = reader.list_managed_zones(ctx)
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, Any

from google.cloud import compute_v1, dns, iam_admin_v1, storage
from google.oauth2 import service_account
from googleapiclient import discovery

from core.data.inventory.types import ListedItem, ZonedCollection

if TYPE_CHECKING:
    from google.auth.credentials import Credentials

    from core.context import DiscoveryContext

logger = logging.getLogger(__name__)

SQLADMIN_API_VERSION = "v1beta4"


def load_credentials(path: str | None) -> Credentials | None:
    """Load service account credentials from a key file

    Returns None when no path is given, letting the client libraries fall
    back to Application Default Credentials.
    """
    if not path:
        return None
    return service_account.Credentials.from_service_account_file(path)  # type: ignore[no-untyped-call]


def _scope_name(key: str) -> str:
    # aggregated list keys look like "zones/us-central1-a"
    return key.rsplit("/", 1)[-1]


class GCPReader:
    """Listing client for one project

    Regional resources (forwarding rules) are listed in ``region`` only.
    Library clients are created on first use and shared by every thread.
    """

    def __init__(self, project: str, credentials: Credentials | None = None, region: str | None = None):
        self.project = project
        self.region = region
        self._credentials = credentials
        self._clients: dict[str, Any] = {}
        self._lock = threading.Lock()

    # =========================================================================
    # Compute: zonal
    # =========================================================================

    def list_instances(self, ctx: DiscoveryContext, filter: str) -> ZonedCollection:
        return self._aggregated(
            ctx,
            compute_v1.InstancesClient,
            compute_v1.AggregatedListInstancesRequest,
            "instances",
            filter,
        )

    def list_instance_groups(self, ctx: DiscoveryContext, filter: str) -> ZonedCollection:
        return self._aggregated(
            ctx,
            compute_v1.InstanceGroupsClient,
            compute_v1.AggregatedListInstanceGroupsRequest,
            "instance_groups",
            filter,
        )

    def list_disks(self, ctx: DiscoveryContext, filter: str) -> ZonedCollection:
        return self._aggregated(
            ctx,
            compute_v1.DisksClient,
            compute_v1.AggregatedListDisksRequest,
            "disks",
            filter,
        )

    # =========================================================================
    # Compute: global
    # =========================================================================

    def list_firewalls(self, ctx: DiscoveryContext, filter: str) -> list[ListedItem]:
        return self._global(ctx, compute_v1.FirewallsClient, compute_v1.ListFirewallsRequest, filter)

    def list_networks(self, ctx: DiscoveryContext, filter: str) -> list[ListedItem]:
        return self._global(ctx, compute_v1.NetworksClient, compute_v1.ListNetworksRequest, filter)

    def list_health_checks(self, ctx: DiscoveryContext, filter: str) -> list[ListedItem]:
        return self._global(ctx, compute_v1.HealthChecksClient, compute_v1.ListHealthChecksRequest, filter)

    def list_backend_services(self, ctx: DiscoveryContext, filter: str) -> list[ListedItem]:
        return self._global(ctx, compute_v1.BackendServicesClient, compute_v1.ListBackendServicesRequest, filter)

    def list_backend_buckets(self, ctx: DiscoveryContext, filter: str) -> list[ListedItem]:
        return self._global(ctx, compute_v1.BackendBucketsClient, compute_v1.ListBackendBucketsRequest, filter)

    def list_ssl_certificates(self, ctx: DiscoveryContext, filter: str) -> list[ListedItem]:
        return self._global(ctx, compute_v1.SslCertificatesClient, compute_v1.ListSslCertificatesRequest, filter)

    def list_target_http_proxies(self, ctx: DiscoveryContext, filter: str) -> list[ListedItem]:
        return self._global(ctx, compute_v1.TargetHttpProxiesClient, compute_v1.ListTargetHttpProxiesRequest, filter)

    def list_target_https_proxies(self, ctx: DiscoveryContext, filter: str) -> list[ListedItem]:
        return self._global(
            ctx, compute_v1.TargetHttpsProxiesClient, compute_v1.ListTargetHttpsProxiesRequest, filter
        )

    def list_url_maps(self, ctx: DiscoveryContext, filter: str) -> list[ListedItem]:
        return self._global(ctx, compute_v1.UrlMapsClient, compute_v1.ListUrlMapsRequest, filter)

    def list_global_forwarding_rules(self, ctx: DiscoveryContext, filter: str) -> list[ListedItem]:
        return self._global(
            ctx, compute_v1.GlobalForwardingRulesClient, compute_v1.ListGlobalForwardingRulesRequest, filter
        )

    def list_forwarding_rules(self, ctx: DiscoveryContext, filter: str) -> list[ListedItem]:
        """Forwarding rules of the reader's region

        Rule names are only unique within a region, so the listing is scoped
        to one region rather than aggregated.

        Raises:
            ValueError: no region configured
        """
        if not self.region:
            raise ValueError("forwarding rules are regional, no region configured")
        client = self._compute(compute_v1.ForwardingRulesClient)
        request = self._request(compute_v1.ListForwardingRulesRequest, filter, region=self.region)
        return self._collect(ctx, client.list(request=request, **self._timeout(ctx)))

    # =========================================================================
    # Storage / SQL
    # =========================================================================

    def list_buckets(self, ctx: DiscoveryContext) -> list[ListedItem]:
        client = self._client("storage", lambda: storage.Client(project=self.project, credentials=self._credentials))
        return self._collect(ctx, client.list_buckets(**self._timeout(ctx)))

    def list_storage_instances(self, ctx: DiscoveryContext, filter: str) -> list[ListedItem]:
        """Cloud SQL instances (sqladmin has no GAPIC client, so this goes through discovery)"""
        service = self._client(
            "sqladmin",
            lambda: discovery.build(
                "sqladmin",
                SQLADMIN_API_VERSION,
                credentials=self._credentials,
                cache_discovery=False,
            ),
        )
        kwargs: dict[str, Any] = {"project": self.project}
        if filter:
            kwargs["filter"] = filter

        items: list[ListedItem] = []
        request = service.instances().list(**kwargs)
        while request is not None:
            ctx.raise_if_cancelled()
            response = request.execute()
            for data in response.get("items", []):
                items.append(ListedItem(name=data.get("name", ""), raw=data))
            request = service.instances().list_next(previous_request=request, previous_response=response)
        return items

    # =========================================================================
    # DNS
    # =========================================================================

    def list_managed_zones(self, ctx: DiscoveryContext) -> list[ListedItem]:
        return self._collect(ctx, self._dns().list_zones(**self._timeout(ctx)))

    def list_resource_record_sets(self, ctx: DiscoveryContext, zones: Iterable[str]) -> ZonedCollection:
        client = self._dns()
        result: ZonedCollection = {}
        for zone in zones:
            ctx.raise_if_cancelled()
            records = []
            for record in client.zone(zone).list_resource_record_sets(**self._timeout(ctx)):
                ctx.raise_if_cancelled()
                records.append(ListedItem(name=record.name, type=record.record_type, raw=record))
            result[zone] = records
        return result

    # =========================================================================
    # IAM
    # =========================================================================

    def list_project_iam_custom_roles(self, ctx: DiscoveryContext, parent: str) -> list[ListedItem]:
        client = self._client("iam", lambda: iam_admin_v1.IAMClient(credentials=self._credentials))
        request = iam_admin_v1.ListRolesRequest(parent=parent)
        return self._collect(ctx, client.list_roles(request=request, **self._timeout(ctx)))

    # =========================================================================
    # Internal Methods
    # =========================================================================

    def _client(self, key: str, factory: Callable[[], Any]) -> Any:
        with self._lock:
            client = self._clients.get(key)
            if client is None:
                logger.debug(f"creating {key} client for {self.project}")
                client = factory()
                self._clients[key] = client
            return client

    def _compute(self, client_cls: type) -> Any:
        return self._client(client_cls.__name__, lambda: client_cls(credentials=self._credentials))

    def _dns(self) -> Any:
        return self._client("dns", lambda: dns.Client(project=self.project, credentials=self._credentials))

    def _timeout(self, ctx: DiscoveryContext) -> dict[str, float]:
        remaining = ctx.remaining()
        return {} if remaining is None else {"timeout": remaining}

    def _request(self, request_cls: type, filter: str, **fields: Any) -> Any:
        if filter:
            fields["filter"] = filter
        return request_cls(project=self.project, **fields)

    def _collect(self, ctx: DiscoveryContext, pager: Iterable[Any]) -> list[ListedItem]:
        items = []
        for obj in pager:
            ctx.raise_if_cancelled()
            items.append(ListedItem(name=obj.name, raw=obj))
        return items

    def _global(self, ctx: DiscoveryContext, client_cls: type, request_cls: type, filter: str) -> list[ListedItem]:
        client = self._compute(client_cls)
        pager = client.list(request=self._request(request_cls, filter), **self._timeout(ctx))
        return self._collect(ctx, pager)

    def _aggregated(
        self,
        ctx: DiscoveryContext,
        client_cls: type,
        request_cls: type,
        field_name: str,
        filter: str,
    ) -> ZonedCollection:
        client = self._compute(client_cls)
        pager = client.aggregated_list(request=self._request(request_cls, filter), **self._timeout(ctx))

        result: ZonedCollection = {}
        for key, scoped_list in pager:
            ctx.raise_if_cancelled()
            objs = getattr(scoped_list, field_name, None)
            if not objs:
                continue
            result[_scope_name(key)] = [ListedItem(name=obj.name, raw=obj) for obj in objs]
        return result
