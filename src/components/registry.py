"""Ecosystem tag dispatch for component formatting.

Maps each ecosystem tag reported by the collectors (linux, npm, pip, ...) to
the formatter producing its component manifest record.
"""

from functools import partial
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from ..common.logger import get_logger
from .base import Component, DistroInfo
from .formatters import (
    cargo_component_formatter,
    gem_component_formatter,
    git_component_formatter,
    go_component_formatter,
    linux_component_formatter,
    manual_component_formatter,
    npm_component_formatter,
    other_component_formatter,
    pip_component_formatter,
)

logger = get_logger("component.registry")

# Handlers return a typed Component, a ready-made record (manual) or None
ComponentHandler = Callable[[Any], Union[Component, Dict[str, Any], None]]

# Tags that take no ambient state. linux is bound per ComponentFormatter.
DEFAULT_HANDLERS: Dict[str, ComponentHandler] = {
    "npm": npm_component_formatter,
    "pip": pip_component_formatter,
    "pipx": pip_component_formatter,
    "gem": gem_component_formatter,
    "cargo": cargo_component_formatter,
    "go": go_component_formatter,
    "git": git_component_formatter,
    "other": other_component_formatter,
    "languages": other_component_formatter,
    "manual": manual_component_formatter,
}

# Report sections that never become component records
NON_COMPONENT_TAGS = ("image", "distro")


class ComponentFormatter:
    """Formatter producing component manifest records per ecosystem tag.

    The distribution identity is given once and reused for every linux
    package. Apart from that the formatter holds no state, so one instance
    can be shared between threads as long as the handler table is not
    changed concurrently.
    """

    def __init__(self, distro_info: Union[DistroInfo, Mapping[str, Any], None] = None):
        if distro_info is None:
            distro_info = DistroInfo()
        elif not isinstance(distro_info, DistroInfo):
            distro_info = DistroInfo.from_dict(distro_info)
        self.distro_info = distro_info

        self._handlers: Dict[str, ComponentHandler] = dict(DEFAULT_HANDLERS)
        self._handlers["linux"] = partial(
            linux_component_formatter, distro_info=self.distro_info
        )

    @classmethod
    def from_config(cls, config) -> "ComponentFormatter":
        """Create a formatter from a loaded CgManifestConfig."""
        return cls(config.distro)

    def register(self, tag: str, handler: ComponentHandler) -> None:
        """Register a handler for an ecosystem tag.

        Args:
            tag: Ecosystem tag (e.g., 'npm', 'pip')
            handler: Callable returning a component record or None
        """
        if tag in self._handlers:
            logger.warning(f"Overwriting existing component handler for tag: {tag}")
        self._handlers[tag] = handler
        logger.debug(f"Registered component handler: {tag}")

    def unregister(self, tag: str) -> None:
        """Remove the handler for an ecosystem tag, if any."""
        if tag in self._handlers:
            del self._handlers[tag]
            logger.debug(f"Unregistered component handler: {tag}")

    def get_handler(self, tag: str) -> Optional[ComponentHandler]:
        """Get the handler for a tag, or None if the tag is not supported."""
        return self._handlers.get(tag)

    def list_tags(self) -> List[str]:
        """List all tags with a registered handler."""
        return list(self._handlers.keys())

    def supports(self, tag: str) -> bool:
        """Check whether format() accepts tag, including non-component tags."""
        return tag in self._handlers or tag in NON_COMPONENT_TAGS

    def format(self, tag: str, record: Any) -> Optional[Dict[str, Any]]:
        """Format a record with the handler registered for tag.

        Typed components are returned in their dict form, so results of
        every tag (manual included) can be serialized together.

        Args:
            tag: Ecosystem tag of the record
            record: PackageInfo, collector mapping or object (any mapping for 'manual')

        Returns:
            Component record such as {"Component": {...}}, or None when the
            record is to be left out

        Raises:
            ValueError: If no handler is registered for tag
        """
        handler = self._handlers.get(tag)
        if handler is None:
            if tag in NON_COMPONENT_TAGS:
                return None
            raise ValueError(
                f"Unsupported ecosystem tag: {tag}. "
                f"Must be one of: {', '.join(sorted(self._handlers))}"
            )
        result = handler(record)
        if isinstance(result, Component):
            return result.to_dict()
        return result

    def image(self, image_info: Any = None) -> Optional[Dict[str, Any]]:
        return self.format("image", image_info)

    def distro(self, distro_info: Any = None) -> Optional[Dict[str, Any]]:
        return self.format("distro", distro_info)

    def linux(self, package_info) -> Optional[Dict[str, Any]]:
        return self.format("linux", package_info)

    def npm(self, package_info) -> Optional[Dict[str, Any]]:
        return self.format("npm", package_info)

    def pip(self, package_info) -> Optional[Dict[str, Any]]:
        return self.format("pip", package_info)

    def pipx(self, package_info) -> Optional[Dict[str, Any]]:
        return self.format("pipx", package_info)

    def gem(self, package_info) -> Optional[Dict[str, Any]]:
        return self.format("gem", package_info)

    def cargo(self, package_info) -> Optional[Dict[str, Any]]:
        return self.format("cargo", package_info)

    def go(self, package_info) -> Optional[Dict[str, Any]]:
        return self.format("go", package_info)

    def git(self, repository_info) -> Optional[Dict[str, Any]]:
        return self.format("git", repository_info)

    def other(self, component_info) -> Optional[Dict[str, Any]]:
        return self.format("other", component_info)

    def languages(self, component_info) -> Optional[Dict[str, Any]]:
        return self.format("languages", component_info)

    def manual(self, component: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        return self.format("manual", component)
