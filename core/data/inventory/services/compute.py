"""
core/data/inventory/services/compute.py - Compute Engine strategies

Instances, instance groups and disks are listed per zone. The instance IAM
policy type reuses the instance listing but is addressed by its full
resource path. Every other compute type is a flat, global listing.
"""

from __future__ import annotations

from ..identifiers import IdScheme
from ..registry import FetchStrategy, tag_filter
from ..types import ResourceType

STRATEGIES: dict[ResourceType, FetchStrategy] = {
    # Zoned
    ResourceType.COMPUTE_INSTANCE: FetchStrategy(
        method="list_instances",
        label="instances",
        id_scheme=IdScheme.PROJECT_ZONE_NAME,
        zoned=True,
        argument=tag_filter,
    ),
    ResourceType.COMPUTE_INSTANCE_GROUP: FetchStrategy(
        method="list_instance_groups",
        label="instance groups",
        id_scheme=IdScheme.PROJECT_ZONE_NAME,
        zoned=True,
    ),
    # Disk identifiers carry no project segment, unlike instances and groups
    ResourceType.COMPUTE_DISK: FetchStrategy(
        method="list_disks",
        label="disks",
        id_scheme=IdScheme.ZONE_NAME,
        zoned=True,
        argument=tag_filter,
    ),
    ResourceType.COMPUTE_INSTANCE_IAM_POLICY: FetchStrategy(
        method="list_instances",
        label="compute instances",
        id_scheme=IdScheme.INSTANCE_PATH,
        zoned=True,
        argument=tag_filter,
    ),
    # Networking
    ResourceType.COMPUTE_FIREWALL: FetchStrategy(method="list_firewalls", label="firewalls"),
    ResourceType.COMPUTE_NETWORK: FetchStrategy(method="list_networks", label="networks"),
    # Load balancing
    ResourceType.COMPUTE_HEALTH_CHECK: FetchStrategy(method="list_health_checks", label="health checks"),
    ResourceType.COMPUTE_BACKEND_SERVICE: FetchStrategy(method="list_backend_services", label="backend services"),
    ResourceType.COMPUTE_BACKEND_BUCKET: FetchStrategy(method="list_backend_buckets", label="backend buckets"),
    ResourceType.COMPUTE_SSL_CERTIFICATE: FetchStrategy(method="list_ssl_certificates", label="SSL certificates"),
    ResourceType.COMPUTE_TARGET_HTTP_PROXY: FetchStrategy(
        method="list_target_http_proxies",
        label="target http proxies",
    ),
    ResourceType.COMPUTE_TARGET_HTTPS_PROXY: FetchStrategy(
        method="list_target_https_proxies",
        label="target https proxies",
    ),
    ResourceType.COMPUTE_URL_MAP: FetchStrategy(method="list_url_maps", label="URL maps"),
    ResourceType.COMPUTE_GLOBAL_FORWARDING_RULE: FetchStrategy(
        method="list_global_forwarding_rules",
        label="global forwarding rules",
        argument=tag_filter,
    ),
    ResourceType.COMPUTE_FORWARDING_RULE: FetchStrategy(
        method="list_forwarding_rules",
        label="forwarding rules",
        argument=tag_filter,
    ),
}
