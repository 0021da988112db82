"""Shared pytest fixtures for the full configtree test suite."""

from __future__ import annotations

from collections.abc import Iterator
import io

import pytest

from configtree.telemetry.logger import ParseLogger


SAMPLE_INI_TEXT = (
    "x1 = 1 # comment\n"
    "x2 = hallo\n"
    "x3 = no\n"
    "array = 1   2 3 4 5\t6 7 8\n"
    "\n"
    "[Foo]\n"
    "peng = ligapokal\n"
)

FRUIT_SALAD_INI_TEXT = """\
# this file configures fruit colors in fruitsalad

#these are no fruit but could also appear in fruit salad
honeydewmelon = yellow
watermelon = green

fruit.tropicalfruit.orange = orange

[fruit]
strawberry = red
pomegranate = red

[fruit.pipfruit]
apple = green/red/yellow
pear = green

[fruit.stonefruit]
cherry = red
plum = purple
"""


@pytest.fixture
def sample_ini_text() -> str:
    """Provide the small mixed-type INI sample used across reader tests."""

    return SAMPLE_INI_TEXT


@pytest.fixture
def fruit_salad_ini_text() -> str:
    """Provide a multi-section INI sample with nested section prefixes."""

    return FRUIT_SALAD_INI_TEXT


@pytest.fixture
def reader_log() -> Iterator[tuple[ParseLogger, io.StringIO]]:
    """Provide a debug-level reader logger writing into an in-memory buffer."""

    buffer = io.StringIO()
    logger = ParseLogger(sink=buffer, level="DEBUG")
    yield logger, buffer
    logger.close()
