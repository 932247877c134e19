"""Shared pytest fixtures."""

from __future__ import annotations

import pytest

from richtext import Format, Value


@pytest.fixture
def em() -> Format:
    return Format("em")


@pytest.fixture
def one_two_three(em: Format) -> Value:
    """``"one two three"`` with ``two`` emphasised, sharing one ``em`` instance."""

    formats = [None] * 13
    for index in (4, 5, 6):
        formats[index] = [em]
    return Value(text="one two three", formats=formats)
