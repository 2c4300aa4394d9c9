"""Pytest configuration and shared fixtures."""

import pytest

from src.components.base import DistroInfo


@pytest.fixture
def distro_info():
    """Debian 10 distribution identity."""
    return DistroInfo(id="Debian", version_id="10")


@pytest.fixture
def yarn_package():
    """Linux package record as reported by the apt collector."""
    return {
        "name": "yarn",
        "version": "1.22.5-1",
        "poolUrl": "https://dl.yarnpkg.com/debian",
        "poolKeyUrl": "https://dl.yarnpkg.com/debian/pubkey.gpg",
    }


@pytest.fixture
def ohmyzsh_repository():
    """Git checkout record."""
    return {
        "name": "Oh My Zsh!",
        "repositoryUrl": "https://github.com/ohmyzsh/ohmyzsh.git",
        "commitHash": "cddac7177abc358f44efb469af43191922273705",
        "path": "/home/vscode/.oh-my-zsh",
    }


@pytest.fixture
def xdebug_component():
    """Component installed from a download URL."""
    return {
        "name": "Xdebug",
        "version": "2.9.6",
        "downloadUrl": "https://pecl.php.net/get/xdebug-2.9.6.tgz",
    }


@pytest.fixture
def sample_config():
    """Sample configuration dictionary."""
    return {
        "distro": {
            "id": "Debian",
            "version_id": "10",
        },
        "logging": {
            "level": "DEBUG",
            "log_dir": "/tmp/cgmanifest-logs",
            "file_logging": False,
        },
    }
