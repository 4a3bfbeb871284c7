"""
core/data/inventory/services/dns.py - Cloud DNS strategies

Record sets can only be listed per managed zone, so their discovery first
resolves the managed zones through the registry and then lists record sets
for those zones.
"""

from __future__ import annotations

from ..identifiers import IdScheme
from ..registry import FetchStrategy
from ..types import ResourceType

STRATEGIES: dict[ResourceType, FetchStrategy] = {
    ResourceType.DNS_MANAGED_ZONE: FetchStrategy(
        method="list_managed_zones",
        label="managed zones",
        argument=None,
    ),
    ResourceType.DNS_RECORD_SET: FetchStrategy(
        method="list_resource_record_sets",
        label="resource record sets",
        id_scheme=IdScheme.ZONE_NAME_TYPE,
        zoned=True,
        depends_on=ResourceType.DNS_MANAGED_ZONE,
    ),
}
