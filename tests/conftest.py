"""Shared fixtures for slatemark tests."""

from __future__ import annotations

import logging

import pytest
import structlog

from slatemark.registry import PluginRegistry


class TemplatePlugin:
    """Shortcode plugin that renders ``{{< name key="value" >}}``."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.calls: list = []

    def to_block(self, data):
        self.calls.append(data)
        attrs = " ".join(f'{key}="{value}"' for key, value in sorted((data or {}).items()))
        return f"{{{{< {self.name} {attrs} >}}}}"


@pytest.fixture
def make_plugin():
    return TemplatePlugin


@pytest.fixture
def youtube_plugin() -> TemplatePlugin:
    return TemplatePlugin("youtube")


@pytest.fixture
def registry(youtube_plugin: TemplatePlugin) -> PluginRegistry:
    return PluginRegistry({"youtube": youtube_plugin})


@pytest.fixture(autouse=True)
def _reset_logging():
    """CLI tests reconfigure logging against CliRunner streams; undo that."""
    yield
    structlog.reset_defaults()
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.setLevel(logging.WARNING)
