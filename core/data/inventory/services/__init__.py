"""
core/data/inventory/services - Per-service fetch strategies

Each service module declares the strategies of its resource types as a
STRATEGIES table; build_registry() merges them.
"""

from .compute import STRATEGIES as COMPUTE_STRATEGIES
from .dns import STRATEGIES as DNS_STRATEGIES
from .iam import STRATEGIES as IAM_STRATEGIES
from .storage import STRATEGIES as STORAGE_STRATEGIES

__all__ = [
    "COMPUTE_STRATEGIES",
    "DNS_STRATEGIES",
    "IAM_STRATEGIES",
    "STORAGE_STRATEGIES",
]
