"""
Declarative capability metadata for host applications.

A host reads this description to know which data fields the histogram
accepts and which properties it persists. Nothing in the binner or the
planner depends on it.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from .host import DEFAULT_BUCKET_COUNT, DEFAULT_FILL_COLOR


class RoleKind(str, Enum):
    GROUPING = "grouping"
    MEASURE = "measure"


class PropertyType(str, Enum):
    COLOR = "color"
    NUMERIC = "numeric"


@dataclass(frozen=True)
class DataRole:
    """A data field the visual binds to."""
    name: str
    kind: RoleKind
    display_name: str


@dataclass(frozen=True)
class PersistedProperty:
    """A formatting property the host stores for the visual."""
    name: str
    type: PropertyType
    display_name: str
    object_name: str = "general"
    default: Any = None


@dataclass(frozen=True)
class VisualCapabilities:
    """
    What the labeled histogram consumes and persists.

    Attributes
    ----------
    data_roles : list of DataRole
        Bindable fields.
    properties : list of PersistedProperty
        Persisted formatting properties.
    category_reduction : str
        Row reduction the host applies to the category field.
    """
    data_roles: List[DataRole] = field(default_factory=list)
    properties: List[PersistedProperty] = field(default_factory=list)
    category_reduction: str = "top"

    def role(self, name: str) -> Optional[DataRole]:
        return next((r for r in self.data_roles if r.name == name), None)

    def persisted(self, name: str) -> Optional[PersistedProperty]:
        return next((p for p in self.properties if p.name == name), None)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a dictionary with enum members replaced by their values."""
        data = asdict(self)
        for role in data["data_roles"]:
            role["kind"] = role["kind"].value
        for prop in data["properties"]:
            prop["type"] = prop["type"].value
        return data


HISTOGRAM_CAPABILITIES = VisualCapabilities(
    data_roles=[
        DataRole(name="category", kind=RoleKind.GROUPING, display_name="Category"),
        DataRole(name="measure", kind=RoleKind.MEASURE, display_name="Measure"),
    ],
    properties=[
        PersistedProperty(
            name="fill",
            type=PropertyType.COLOR,
            display_name="Columns Fill",
            default=DEFAULT_FILL_COLOR,
        ),
        PersistedProperty(
            name="size",
            type=PropertyType.NUMERIC,
            display_name="Bucket Count",
            default=DEFAULT_BUCKET_COUNT,
        ),
    ],
)


__all__ = [
    'RoleKind',
    'PropertyType',
    'DataRole',
    'PersistedProperty',
    'VisualCapabilities',
    'HISTOGRAM_CAPABILITIES',
]
