"""Typed records for component governance formatting.

Defines the input records handed over by package collectors, the ambient
distribution identity, and the tagged output variant (one payload class per
ecosystem) that serializes to the component manifest JSON shape.
"""

import json
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, ClassVar, Dict, Mapping, Optional, Union


# Case variants of the flag that drops a component from the manifest
SKIP_FLAG_KEYS = ("cgIgnore", "CgIgnore", "CGIgnore")

# Display-only flag used by other report formatters, stripped from manual records
DISPLAY_FLAG_KEYS = ("markdownIgnore", "MarkdownIgnore")

# Collector record keys -> PackageInfo attribute names
PACKAGE_INFO_ALIASES: Dict[str, str] = {
    "name": "name",
    "version": "version",
    "poolUrl": "pool_url",
    "poolKeyUrl": "pool_key_url",
    "repositoryUrl": "repository_url",
    "commitHash": "commit_hash",
    "downloadUrl": "download_url",
}


def _require_mapping(data: Any, kind: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise TypeError(f"{kind} must be built from a mapping, got {type(data).__name__}")
    return data


@dataclass(frozen=True)
class PackageInfo:
    """A package as reported by a collector (lockfile, OS database, git checkout)."""

    name: Optional[str] = None
    version: Optional[str] = None
    cg_ignore: bool = False
    pool_url: Optional[str] = None  # linux only
    pool_key_url: Optional[str] = None  # linux only
    repository_url: Optional[str] = None  # git only
    commit_hash: Optional[str] = None  # git only
    download_url: Optional[str] = None  # other/languages only

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PackageInfo":
        """Build a PackageInfo from a loosely typed collector record.

        Both the collectors' camelCase keys and the attribute names are
        accepted. Unknown keys are ignored and missing ones stay None.

        Args:
            data: Collector record

        Returns:
            PackageInfo instance

        Raises:
            TypeError: If data is not a mapping
        """
        data = _require_mapping(data, "PackageInfo")
        attribute_names = {f.name for f in fields(cls)}

        values: Dict[str, Any] = {}
        for key, value in data.items():
            if key in PACKAGE_INFO_ALIASES:
                values[PACKAGE_INFO_ALIASES[key]] = value
            elif key in attribute_names and key != "cg_ignore":
                values.setdefault(key, value)

        values["cg_ignore"] = bool(data.get("cg_ignore")) or any(
            data.get(key) for key in SKIP_FLAG_KEYS
        )
        return cls(**values)

    @classmethod
    def from_object(cls, obj: Any) -> "PackageInfo":
        """Build a PackageInfo from an attribute-style record.

        Collector objects (dataclasses, namespaces) are read through the
        same keys as mappings; attributes the object lacks stay None.

        Args:
            obj: Collector object

        Returns:
            PackageInfo instance
        """
        keys = (
            list(PACKAGE_INFO_ALIASES)
            + [f.name for f in fields(cls)]
            + list(SKIP_FLAG_KEYS)
        )
        data = {}
        for key in keys:
            value = getattr(obj, key, None)
            if value is not None:
                data[key] = value
        return cls.from_dict(data)

    @classmethod
    def coerce(cls, info: Any) -> "PackageInfo":
        """Return info as a PackageInfo, converting mappings and objects."""
        if isinstance(info, cls):
            return info
        if isinstance(info, Mapping):
            return cls.from_dict(info)
        return cls.from_object(info)


@dataclass(frozen=True)
class DistroInfo:
    """Identity of the Linux distribution the packages were collected from."""

    id: Optional[str] = None
    version_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DistroInfo":
        """Build from a mapping using distro-info or os-release style keys.

        Values are converted to strings, so an unquoted YAML release such
        as 10 is reported as "10".
        """
        data = _require_mapping(data, "DistroInfo")
        version_id = None
        for key in ("versionId", "version_id", "VERSION_ID"):
            if data.get(key) is not None:
                version_id = str(data[key])
                break
        distro_id = data.get("id", data.get("ID"))
        return cls(
            id=str(distro_id) if distro_id is not None else None,
            version_id=version_id,
        )


class ComponentType(str, Enum):
    """Discriminator values written to the Type field.

    Pip and RubyGems are capitalized unlike their siblings; downstream
    consumers match on these exact strings.
    """

    LINUX = "linux"
    NPM = "npm"
    PIP = "Pip"
    RUBYGEMS = "RubyGems"
    CARGO = "cargo"
    GO = "go"
    GIT = "git"
    OTHER = "other"


@dataclass(frozen=True)
class ComponentPayload:
    """Base class for the per-ecosystem payload of a component record."""

    component_type: ClassVar[ComponentType]
    payload_key: ClassVar[str]
    # attribute name -> output key, in output order
    output_keys: ClassVar[Dict[str, str]]

    def to_dict(self) -> Dict[str, Any]:
        """Return the payload with its output keys, leaving out absent fields."""
        payload = {}
        for attribute, key in self.output_keys.items():
            value = getattr(self, attribute)
            if value is not None:
                payload[key] = value
        return payload


@dataclass(frozen=True)
class LinuxPayload(ComponentPayload):
    component_type: ClassVar[ComponentType] = ComponentType.LINUX
    payload_key: ClassVar[str] = "Linux"
    output_keys: ClassVar[Dict[str, str]] = {
        "name": "Name",
        "version": "Version",
        "distribution": "Distribution",
        "release": "Release",
        "pool_url": "Pool-URL",
        "key_url": "Key-URL",
    }

    name: Optional[str] = None
    version: Optional[str] = None
    distribution: Optional[str] = None
    release: Optional[str] = None
    pool_url: Optional[str] = None
    key_url: Optional[str] = None


@dataclass(frozen=True)
class VersionedPayload(ComponentPayload):
    """Payload holding only a name and a version."""

    output_keys: ClassVar[Dict[str, str]] = {"name": "Name", "version": "Version"}

    name: Optional[str] = None
    version: Optional[str] = None


@dataclass(frozen=True)
class NpmPayload(VersionedPayload):
    component_type: ClassVar[ComponentType] = ComponentType.NPM
    payload_key: ClassVar[str] = "Npm"


@dataclass(frozen=True)
class PipPayload(VersionedPayload):
    component_type: ClassVar[ComponentType] = ComponentType.PIP
    payload_key: ClassVar[str] = "Pip"


@dataclass(frozen=True)
class RubyGemsPayload(VersionedPayload):
    component_type: ClassVar[ComponentType] = ComponentType.RUBYGEMS
    payload_key: ClassVar[str] = "RubyGems"


@dataclass(frozen=True)
class CargoPayload(VersionedPayload):
    component_type: ClassVar[ComponentType] = ComponentType.CARGO
    payload_key: ClassVar[str] = "Cargo"


@dataclass(frozen=True)
class GoPayload(VersionedPayload):
    component_type: ClassVar[ComponentType] = ComponentType.GO
    payload_key: ClassVar[str] = "Go"


@dataclass(frozen=True)
class GitPayload(ComponentPayload):
    component_type: ClassVar[ComponentType] = ComponentType.GIT
    payload_key: ClassVar[str] = "Git"
    output_keys: ClassVar[Dict[str, str]] = {
        "name": "Name",
        "repository_url": "repositoryUrl",
        "commit_hash": "commitHash",
    }

    name: Optional[str] = None
    repository_url: Optional[str] = None
    commit_hash: Optional[str] = None


@dataclass(frozen=True)
class OtherPayload(ComponentPayload):
    component_type: ClassVar[ComponentType] = ComponentType.OTHER
    payload_key: ClassVar[str] = "Other"
    output_keys: ClassVar[Dict[str, str]] = {
        "name": "Name",
        "version": "Version",
        "download_url": "DownloadUrl",
    }

    name: Optional[str] = None
    version: Optional[str] = None
    download_url: Optional[str] = None


@dataclass(frozen=True)
class Component:
    """A single component manifest entry wrapping exactly one payload."""

    payload: ComponentPayload

    @property
    def type(self) -> str:
        """Return the Type discriminator string."""
        return self.payload.component_type.value

    @property
    def payload_key(self) -> str:
        """Return the key holding the payload (e.g. 'Npm', 'RubyGems')."""
        return self.payload.payload_key

    def to_dict(self) -> Dict[str, Any]:
        """Return the manifest record, e.g. {"Component": {"Type": "npm", "Npm": {...}}}."""
        return {
            "Component": {
                "Type": self.type,
                self.payload_key: self.payload.to_dict(),
            }
        }

    def to_json(self, indent: Optional[int] = None) -> str:
        """Serialize the manifest record.

        Args:
            indent: Indentation for pretty output; compact when None

        Returns:
            JSON string
        """
        if indent is None:
            return json.dumps(self.to_dict(), separators=(",", ":"))
        return json.dumps(self.to_dict(), indent=indent)
