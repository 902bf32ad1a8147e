"""Unit tests for the versioned selector registry."""

import dataclasses

import pytest

from cfweb.infrastructure.selectors import (
    SELECTOR_HISTORY,
    SELECTORS_2024_12,
    current_selectors,
    selector_version,
)


def test_current_selectors_is_latest_history_entry():
    assert current_selectors() is SELECTOR_HISTORY[-1]
    assert current_selectors() is SELECTORS_2024_12


def test_selector_version_metadata():
    version = selector_version()

    assert version.version == "2024.12"
    assert version.valid_from == "2024-12-01"
    assert version.description


@pytest.mark.parametrize("group", ["problem", "login", "submit", "contest", "status"])
def test_every_selector_is_non_empty(group):
    selectors = getattr(current_selectors(), group)

    for field in dataclasses.fields(selectors):
        assert getattr(selectors, field.name), f"{group}.{field.name} is empty"


def test_selector_sets_are_immutable():
    with pytest.raises(dataclasses.FrozenInstanceError):
        current_selectors().problem.title = ".changed"  # type: ignore[misc]
