"""
core/data/inventory/identifiers.py - Resource identifier schemes

Each fetch strategy declares the scheme its handles are identified with.
The identifier is the only correlation key downstream consumers get, so the
formats below must stay stable:

    NAME               <name>
    ZONE_NAME          <zone>/<name>
    PROJECT_ZONE_NAME  <project>/<zone>/<name>
    INSTANCE_PATH      projects/<project>/zones/<zone>/instances/<name>
    ZONE_NAME_TYPE     <zone>/<name>/<type>
"""

from __future__ import annotations

from enum import Enum

from core.exceptions import ValidationError

from .types import ListedItem


class IdScheme(Enum):
    """Identifier synthesis policy"""

    NAME = "name"
    ZONE_NAME = "zone_name"
    PROJECT_ZONE_NAME = "project_zone_name"
    INSTANCE_PATH = "instance_path"
    ZONE_NAME_TYPE = "zone_name_type"

    @property
    def scoped(self) -> bool:
        """Whether the scheme needs a scope key"""
        return self is not IdScheme.NAME


def build_identifier(scheme: IdScheme, item: ListedItem, project: str = "", scope: str = "") -> str:
    """Synthesize the identifier of one listed item

    Args:
        scheme: identifier scheme of the strategy
        item: listed item
        project: owning project ID
        scope: scope key the item was listed under (zone or managed zone)

    Returns:
        The identifier string
    """
    if scheme is IdScheme.NAME:
        return item.name
    if scheme is IdScheme.ZONE_NAME:
        return f"{scope}/{item.name}"
    if scheme is IdScheme.PROJECT_ZONE_NAME:
        return f"{project}/{scope}/{item.name}"
    if scheme is IdScheme.INSTANCE_PATH:
        return f"projects/{project}/zones/{scope}/instances/{item.name}"
    if scheme is IdScheme.ZONE_NAME_TYPE:
        return f"{scope}/{item.name}/{item.type}"
    raise ValueError(f"unknown identifier scheme: {scheme}")


def parse_identifier(scheme: IdScheme, identifier: str) -> dict[str, str]:
    """Split an identifier back into its parts

    Returns a dict with the keys the scheme embeds among
    ``project``, ``zone``, ``name`` and ``type``.

    Raises:
        ValidationError: identifier does not match the scheme
    """
    if scheme is IdScheme.NAME:
        return {"name": identifier}

    parts = identifier.split("/")
    if scheme is IdScheme.ZONE_NAME and len(parts) == 2:
        return {"zone": parts[0], "name": parts[1]}
    if scheme is IdScheme.PROJECT_ZONE_NAME and len(parts) == 3:
        return {"project": parts[0], "zone": parts[1], "name": parts[2]}
    if (
        scheme is IdScheme.INSTANCE_PATH
        and len(parts) == 6
        and (parts[0], parts[2], parts[4]) == ("projects", "zones", "instances")
    ):
        return {"project": parts[1], "zone": parts[3], "name": parts[5]}
    if scheme is IdScheme.ZONE_NAME_TYPE and len(parts) == 3:
        return {"zone": parts[0], "name": parts[1], "type": parts[2]}

    raise ValidationError("identifier", identifier, _FORMATS[scheme])


_FORMATS = {
    IdScheme.NAME: "<name>",
    IdScheme.ZONE_NAME: "<zone>/<name>",
    IdScheme.PROJECT_ZONE_NAME: "<project>/<zone>/<name>",
    IdScheme.INSTANCE_PATH: "projects/<project>/zones/<zone>/instances/<name>",
    IdScheme.ZONE_NAME_TYPE: "<zone>/<name>/<type>",
}
