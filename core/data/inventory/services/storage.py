"""
core/data/inventory/services/storage.py - Cloud Storage and Cloud SQL strategies

A bucket IAM policy is a resource of its own, one per bucket, so the policy
type walks the same bucket listing as the bucket type.
"""

from __future__ import annotations

from ..registry import FetchStrategy
from ..types import ResourceType

STRATEGIES: dict[ResourceType, FetchStrategy] = {
    ResourceType.STORAGE_BUCKET: FetchStrategy(
        method="list_buckets",
        label="storage buckets",
        argument=None,
    ),
    ResourceType.STORAGE_BUCKET_IAM_POLICY: FetchStrategy(
        method="list_buckets",
        label="bucket IAM policies",
        argument=None,
    ),
    ResourceType.SQL_DATABASE_INSTANCE: FetchStrategy(
        method="list_storage_instances",
        label="SQL database instances",
    ),
}
