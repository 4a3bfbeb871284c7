"""
core/data/inventory/types.py - Inventory types

ResourceType is the closed vocabulary of discoverable resource kinds (named
after the Terraform resource types they import into). ResourceHandle is the
normalized result of a discovery call.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

TYPE_PREFIX = "google_"


class ResourceType(Enum):
    """Discoverable GCP resource types

    Members compare in declaration order.
    """

    COMPUTE_INSTANCE = "google_compute_instance"
    COMPUTE_FIREWALL = "google_compute_firewall"
    COMPUTE_NETWORK = "google_compute_network"
    # An HTTP(S) load balancer is made of three parts:
    # backend (instance group, backend service, health check),
    # host and path rules (url map),
    # frontend (target http(s) proxy, global forwarding rule)
    COMPUTE_HEALTH_CHECK = "google_compute_health_check"
    COMPUTE_INSTANCE_GROUP = "google_compute_instance_group"
    COMPUTE_INSTANCE_IAM_POLICY = "google_compute_instance_iam_policy"
    COMPUTE_BACKEND_BUCKET = "google_compute_backend_bucket"
    COMPUTE_BACKEND_SERVICE = "google_compute_backend_service"
    COMPUTE_SSL_CERTIFICATE = "google_compute_ssl_certificate"
    COMPUTE_TARGET_HTTP_PROXY = "google_compute_target_http_proxy"
    COMPUTE_TARGET_HTTPS_PROXY = "google_compute_target_https_proxy"
    COMPUTE_URL_MAP = "google_compute_url_map"
    COMPUTE_GLOBAL_FORWARDING_RULE = "google_compute_global_forwarding_rule"
    COMPUTE_FORWARDING_RULE = "google_compute_forwarding_rule"
    COMPUTE_DISK = "google_compute_disk"
    DNS_MANAGED_ZONE = "google_dns_managed_zone"
    DNS_RECORD_SET = "google_dns_record_set"
    PROJECT_IAM_CUSTOM_ROLE = "google_project_iam_custom_role"
    STORAGE_BUCKET = "google_storage_bucket"
    STORAGE_BUCKET_IAM_POLICY = "google_storage_bucket_iam_policy"
    SQL_DATABASE_INSTANCE = "google_sql_database_instance"

    def __str__(self) -> str:
        return self.value

    @property
    def _position(self) -> int:
        return list(type(self)).index(self)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, ResourceType):
            return NotImplemented
        return self._position < other._position

    def __le__(self, other: object) -> bool:
        if not isinstance(other, ResourceType):
            return NotImplemented
        return self._position <= other._position

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, ResourceType):
            return NotImplemented
        return self._position > other._position

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, ResourceType):
            return NotImplemented
        return self._position >= other._position

    @classmethod
    def from_string(cls, name: str) -> ResourceType:
        """Parse a type name, with or without the ``google_`` prefix

        Raises:
            ValueError: unknown name
        """
        key = name.strip().lower()
        if not key.startswith(TYPE_PREFIX):
            key = TYPE_PREFIX + key
        return cls(key)

    @classmethod
    def names(cls) -> list[str]:
        return [member.value for member in cls]


@dataclass(frozen=True)
class ListedItem:
    """One item returned by a client listing call

    Attributes:
        name: resource name
        type: record type, only set for DNS record sets
        raw: untouched upstream object, for callers fetching details later
    """

    name: str
    type: str = ""
    raw: Any = field(default=None, compare=False, repr=False)


# scope key (zone, region or managed zone) -> items listed under it
ZonedCollection = dict[str, list[ListedItem]]


@dataclass(frozen=True)
class ResourceHandle:
    """Normalized discovery result

    Attributes:
        id: identifier synthesized by the type's identifier scheme
        resource_type: the type this handle was discovered as
        provider: the DiscoveryContext it came from (not owned, not compared)
    """

    id: str
    resource_type: ResourceType
    provider: Any = field(default=None, compare=False, repr=False)

    def to_dict(self) -> dict[str, str]:
        return {"id": self.id, "type": self.resource_type.value}
