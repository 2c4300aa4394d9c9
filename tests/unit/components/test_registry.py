"""Tests for ecosystem tag dispatch."""

import json
import logging
from types import SimpleNamespace

import pytest

from src.common.config import CgManifestConfig
from src.components.base import DistroInfo
from src.components.registry import (
    ComponentFormatter,
    DEFAULT_HANDLERS,
    NON_COMPONENT_TAGS,
)

ALL_TAGS = [
    "linux",
    "npm",
    "pip",
    "pipx",
    "gem",
    "cargo",
    "go",
    "git",
    "other",
    "languages",
    "manual",
]

EXPECTED_SHAPES = {
    "linux": ("linux", "Linux"),
    "npm": ("npm", "Npm"),
    "pip": ("Pip", "Pip"),
    "pipx": ("Pip", "Pip"),
    "gem": ("RubyGems", "RubyGems"),
    "cargo": ("cargo", "Cargo"),
    "go": ("go", "Go"),
    "git": ("git", "Git"),
    "other": ("other", "Other"),
    "languages": ("other", "Other"),
}


class TestComponentFormatter:
    """Tests for ComponentFormatter dispatch."""

    def setup_method(self):
        """Set up test fixtures."""
        self.formatter = ComponentFormatter(DistroInfo(id="Debian", version_id="10"))

    def test_all_tags_registered(self):
        """Test every ecosystem tag has a handler."""
        assert sorted(self.formatter.list_tags()) == sorted(ALL_TAGS)

    @pytest.mark.parametrize("tag", sorted(EXPECTED_SHAPES))
    def test_type_and_payload_key(self, tag):
        """Test each tag produces its Type and payload key."""
        component = self.formatter.format(tag, {"name": "pkg", "version": "1.0"})
        component_type, payload_key = EXPECTED_SHAPES[tag]

        assert isinstance(component, dict)
        record = component["Component"]
        assert record["Type"] == component_type
        assert list(record) == ["Type", payload_key]

    @pytest.mark.parametrize("tag", sorted(EXPECTED_SHAPES))
    def test_skip_flag(self, tag):
        """Test every tag honours the skip flag."""
        assert self.formatter.format(tag, {"name": "pkg", "cgIgnore": True}) is None

    @pytest.mark.parametrize("tag", sorted(EXPECTED_SHAPES))
    def test_named_methods_match_format(self, tag):
        """Test named methods route through the dispatch table."""
        record = {"name": "pkg", "version": "1.0"}
        method = getattr(self.formatter, tag)
        assert method(record) == self.formatter.format(tag, record)

    def test_linux_uses_distro(self, yarn_package):
        """Test linux records get the formatter's distribution identity."""
        payload = self.formatter.linux(yarn_package)["Component"]["Linux"]

        assert payload["Distribution"] == "Debian"
        assert payload["Release"] == "10"

    def test_distro_bound_per_formatter(self, yarn_package):
        """Test separate formatters keep their own identity."""
        alpine = ComponentFormatter({"id": "alpine", "versionId": "3.12"})

        debian_payload = self.formatter.linux(yarn_package)["Component"]["Linux"]
        alpine_payload = alpine.linux(yarn_package)["Component"]["Linux"]

        assert debian_payload["Distribution"] == "Debian"
        assert alpine_payload["Distribution"] == "alpine"
        assert alpine_payload["Release"] == "3.12"

    def test_default_distro(self, yarn_package):
        """Test formatter without distro identity."""
        formatter = ComponentFormatter()

        assert formatter.distro_info == DistroInfo()
        assert "Release" not in formatter.linux(yarn_package)["Component"]["Linux"]

    def test_pip_and_pipx_identical(self):
        """Test pipx packages are reported as pip."""
        record = {"name": "pylint", "version": "2.6.0"}
        assert self.formatter.pip(record) == self.formatter.pipx(record)

    def test_languages_reported_as_other(self, xdebug_component):
        """Test language runtimes use the Other shape."""
        assert self.formatter.languages(xdebug_component) == self.formatter.other(
            xdebug_component
        )

    def test_manual(self):
        """Test manual records pass through."""
        record = {"Component": {"Type": "npm"}, "MarkdownIgnore": True}

        assert self.formatter.manual(record) is record
        assert "MarkdownIgnore" not in record
        assert self.formatter.manual({"CgIgnore": True}) is None

    @pytest.mark.parametrize("tag", NON_COMPONENT_TAGS)
    def test_non_component_tags(self, tag):
        """Test image and distro sections produce no component."""
        assert self.formatter.format(tag, {"name": "debian"}) is None
        assert getattr(self.formatter, tag)({"name": "debian"}) is None
        assert self.formatter.supports(tag)

    def test_unknown_tag(self):
        """Test unknown tags are a caller error."""
        assert not self.formatter.supports("maven")
        with pytest.raises(ValueError, match="Unsupported ecosystem tag: maven"):
            self.formatter.format("maven", {"name": "junit"})

    def test_register_new_tag(self):
        """Test registering a handler for a new tag."""
        self.formatter.register("maven", lambda record: {"maven": record["name"]})

        assert self.formatter.supports("maven")
        assert self.formatter.format("maven", {"name": "junit"}) == {"maven": "junit"}

    def test_register_overwrite_warns(self, caplog):
        """Test overwriting a handler logs a warning."""
        with caplog.at_level(logging.WARNING, logger="component.registry"):
            self.formatter.register("npm", lambda record: None)

        assert "Overwriting" in caplog.text
        assert self.formatter.npm({"name": "eslint"}) is None

    def test_register_does_not_leak(self):
        """Test registering on one formatter leaves defaults intact."""
        self.formatter.register("npm", lambda record: None)

        assert DEFAULT_HANDLERS["npm"] is not self.formatter.get_handler("npm")
        assert ComponentFormatter().npm({"name": "eslint"}) is not None

    def test_unregister(self):
        """Test handler removal."""
        self.formatter.unregister("go")

        assert self.formatter.get_handler("go") is None
        with pytest.raises(ValueError):
            self.formatter.go({"name": "gopls"})

    def test_unregister_unknown(self):
        """Test removing an unknown tag is a no-op."""
        self.formatter.unregister("maven")
        assert sorted(self.formatter.list_tags()) == sorted(ALL_TAGS)

    def test_from_config(self, yarn_package):
        """Test building from typed configuration."""
        config = CgManifestConfig(distro=DistroInfo(id="Ubuntu", version_id="20.04"))
        formatter = ComponentFormatter.from_config(config)

        payload = formatter.linux(yarn_package)["Component"]["Linux"]
        assert payload["Distribution"] == "Ubuntu"
        assert payload["Release"] == "20.04"

    def test_results_are_new_objects(self):
        """Test two calls do not share output records."""
        record = {"name": "eslint", "version": "7.7.0"}
        first = self.formatter.npm(record)
        second = self.formatter.npm(record)

        first["Component"]["Npm"]["Name"] = "changed"
        assert second["Component"]["Npm"]["Name"] == "eslint"
        assert record["name"] == "eslint"

    def test_mixed_results_serialize(self):
        """Test typed and manual records serialize together."""
        records = [
            self.formatter.npm({"name": "eslint", "version": "7.7.0"}),
            self.formatter.manual(
                {"Component": {"Type": "other", "Other": {"Name": "Docker CLI"}}}
            ),
        ]

        assert json.dumps(records, separators=(",", ":")) == (
            '[{"Component":{"Type":"npm","Npm":{"Name":"eslint","Version":"7.7.0"}}},'
            '{"Component":{"Type":"other","Other":{"Name":"Docker CLI"}}}]'
        )

    @pytest.mark.parametrize("tag", NON_COMPONENT_TAGS)
    def test_registered_non_component_tag(self, tag):
        """Test a handler registered for image or distro is used."""
        self.formatter.register(tag, lambda record: {"Component": {"Type": tag}})

        assert self.formatter.format(tag, {"name": "debian"}) == {"Component": {"Type": tag}}
        assert getattr(self.formatter, tag)({"name": "debian"}) == {"Component": {"Type": tag}}

    def test_attribute_record(self):
        """Test collector objects are read through their attributes."""
        package = SimpleNamespace(name="eslint", version="7.7.0", cgIgnore=False)

        assert self.formatter.npm(package) == {
            "Component": {"Type": "npm", "Npm": {"Name": "eslint", "Version": "7.7.0"}}
        }
        assert self.formatter.npm(SimpleNamespace(name="eslint", cgIgnore=True)) is None
