"""Per-ecosystem component formatters.

Each formatter maps one collected package onto its component manifest record,
or returns None when the package is flagged to be left out of the manifest.
Formatters never raise for missing fields; absent values are simply absent
from the output.
"""

from typing import Any, Mapping, MutableMapping, Optional, Type, Union

from ..common.logger import get_logger
from .base import (
    CargoPayload,
    Component,
    DISPLAY_FLAG_KEYS,
    DistroInfo,
    GitPayload,
    GoPayload,
    LinuxPayload,
    NpmPayload,
    OtherPayload,
    PackageInfo,
    PipPayload,
    RubyGemsPayload,
    SKIP_FLAG_KEYS,
    VersionedPayload,
)

logger = get_logger("component.formatters")

# PackageInfo, collector mapping or collector object with the same attribute names
PackageInput = Union[PackageInfo, Mapping[str, Any], object]


def _included(package_info: PackageInfo, ecosystem: str) -> bool:
    if package_info.cg_ignore:
        logger.debug(f"Skipping ignored {ecosystem} component: {package_info.name}")
        return False
    return True


def _versioned_component(
    payload_cls: Type[VersionedPayload], package_info: PackageInput
) -> Optional[Component]:
    info = PackageInfo.coerce(package_info)
    if not _included(info, payload_cls.component_type.value):
        return None
    return Component(payload_cls(name=info.name, version=info.version))


def linux_component_formatter(
    package_info: PackageInput, distro_info: DistroInfo
) -> Optional[Component]:
    """Format a Linux package, e.g.

    {"Component": {"Type": "linux", "Linux": {"Name": "yarn", "Version": "1.22.5-1",
     "Distribution": "Debian", "Release": "10",
     "Pool-URL": "https://dl.yarnpkg.com/debian",
     "Key-URL": "https://dl.yarnpkg.com/debian/pubkey.gpg"}}}

    Distribution and Release always come from distro_info.
    """
    info = PackageInfo.coerce(package_info)
    if not _included(info, "linux"):
        return None
    return Component(
        LinuxPayload(
            name=info.name,
            version=info.version,
            distribution=distro_info.id,
            release=distro_info.version_id,
            pool_url=info.pool_url,
            key_url=info.pool_key_url,
        )
    )


def npm_component_formatter(package_info: PackageInput) -> Optional[Component]:
    """Format an npm package, e.g. {"Type": "npm", "Npm": {"Name": "eslint", "Version": "7.7.0"}}."""
    return _versioned_component(NpmPayload, package_info)


def pip_component_formatter(package_info: PackageInput) -> Optional[Component]:
    """Format a pip or pipx package, e.g. {"Type": "Pip", "Pip": {"Name": "pylint", ...}}."""
    return _versioned_component(PipPayload, package_info)


def gem_component_formatter(package_info: PackageInput) -> Optional[Component]:
    """Format a Ruby gem, e.g. {"Type": "RubyGems", "RubyGems": {"Name": "rake", ...}}."""
    return _versioned_component(RubyGemsPayload, package_info)


def cargo_component_formatter(package_info: PackageInput) -> Optional[Component]:
    """Format a cargo crate, e.g. {"Type": "cargo", "Cargo": {"Name": "rustfmt", ...}}."""
    return _versioned_component(CargoPayload, package_info)


def go_component_formatter(package_info: PackageInput) -> Optional[Component]:
    """Format a Go module, e.g. {"Type": "go", "Go": {"Name": "golang.org/x/tools/gopls", ...}}."""
    return _versioned_component(GoPayload, package_info)


def git_component_formatter(repository_info: PackageInput) -> Optional[Component]:
    """Format a git checkout.

    Git components have no version; the commit hash identifies them:

    {"Component": {"Type": "git", "Git": {"Name": "Oh My Zsh!",
     "repositoryUrl": "https://github.com/ohmyzsh/ohmyzsh.git",
     "commitHash": "cddac7177abc358f44efb469af43191922273705"}}}
    """
    info = PackageInfo.coerce(repository_info)
    if not _included(info, "git"):
        return None
    return Component(
        GitPayload(
            name=info.name,
            repository_url=info.repository_url,
            commit_hash=info.commit_hash,
        )
    )


def other_component_formatter(component_info: PackageInput) -> Optional[Component]:
    """Format a component installed from a download URL (also used for languages)."""
    info = PackageInfo.coerce(component_info)
    if not _included(info, "other"):
        return None
    return Component(
        OtherPayload(
            name=info.name,
            version=info.version,
            download_url=info.download_url,
        )
    )


def manual_component_formatter(
    component: MutableMapping[str, Any],
) -> Optional[MutableMapping[str, Any]]:
    """Pass through a hand-written component record.

    The record is modified in place: display-only flags meant for other
    report formatters are removed. Everything else is left untouched.

    Args:
        component: Complete component record of any shape

    Returns:
        The same record, or None if it carries a skip flag
    """
    if any(component.get(key) for key in SKIP_FLAG_KEYS):
        logger.debug("Skipping ignored manual component")
        return None
    for key in DISPLAY_FLAG_KEYS:
        component.pop(key, None)
    return component
