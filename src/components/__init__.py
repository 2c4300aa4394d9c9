"""Component governance formatting.

Turns collected package information (OS packages, language packages, git
checkouts) into component manifest records keyed by ecosystem type.
"""

from .base import (
    Component,
    ComponentPayload,
    ComponentType,
    DistroInfo,
    PackageInfo,
)
from .formatters import manual_component_formatter
from .registry import ComponentFormatter, NON_COMPONENT_TAGS

__all__ = [
    "Component",
    "ComponentFormatter",
    "ComponentPayload",
    "ComponentType",
    "DistroInfo",
    "NON_COMPONENT_TAGS",
    "PackageInfo",
    "manual_component_formatter",
]
