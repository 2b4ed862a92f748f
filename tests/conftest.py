"""Shared fixtures for the Tessera test suite."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

import pytest

from tessera.config import reset_compile_config
from tessera.tree import VirtualTreeAdapter


class RecordingAdapter(VirtualTreeAdapter):
    """Virtual tree adapter that logs every mutation made by parts."""

    __slots__ = ("calls",)

    def __init__(self) -> None:
        self.calls: list[tuple[Any, ...]] = []

    def set_text(self, node: Any, text: str) -> None:
        self.calls.append(("set_text", node, text))
        super().set_text(node, text)

    def set_attribute(self, node: Any, name: str, value: str) -> None:
        self.calls.append(("set_attribute", node, name, value))
        super().set_attribute(node, name, value)

    def toggle_attribute(self, node: Any, name: str, force: bool) -> None:
        self.calls.append(("toggle_attribute", node, name, force))
        super().toggle_attribute(node, name, force)

    def set_property(self, node: Any, name: str, value: Any) -> None:
        self.calls.append(("set_property", node, name, value))
        super().set_property(node, name, value)

    def reset(self) -> None:
        self.calls.clear()


@pytest.fixture
def recorder() -> RecordingAdapter:
    return RecordingAdapter()


@pytest.fixture(autouse=True)
def _default_compile_config() -> Iterator[None]:
    """Every test starts and ends with the default CompileConfig."""
    reset_compile_config()
    yield
    reset_compile_config()
