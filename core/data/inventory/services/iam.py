"""
core/data/inventory/services/iam.py - IAM strategies

Custom roles are listed under the ``projects/<project>`` parent.
"""

from __future__ import annotations

from ..registry import FetchStrategy, project_path
from ..types import ResourceType

STRATEGIES: dict[ResourceType, FetchStrategy] = {
    ResourceType.PROJECT_IAM_CUSTOM_ROLE: FetchStrategy(
        method="list_project_iam_custom_roles",
        label="project IAM custom roles",
        argument=project_path,
    ),
}
