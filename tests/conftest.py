from __future__ import annotations

from collections.abc import Generator

import pytest
from _pytest.logging import LogCaptureFixture
from layered_config_tree import LayeredConfigTree
from loguru import logger

from seedbed import samplers
from seedbed.capability import KeyCapability
from seedbed.configuration import build_configuration
from seedbed.keys import IntegerKey
from seedbed.seed import Seed
from tests.helpers import VALUE_1, VALUE_2, ValueKey


@pytest.fixture
def caplog(caplog: LogCaptureFixture) -> Generator[LogCaptureFixture, None, None]:
    handler_id = logger.add(caplog.handler, format="{message}")
    yield caplog
    logger.remove(handler_id)


@pytest.fixture
def base_config(
    monkeypatch: pytest.MonkeyPatch, tmp_path_factory: pytest.TempPathFactory
) -> LayeredConfigTree:
    # Keep a developer's ~/seedbed.yaml out of the tests.
    monkeypatch.setattr(
        "seedbed.configuration.USER_CONFIGURATION_PATH",
        tmp_path_factory.mktemp("home") / "seedbed.yaml",
    )
    return build_configuration()


@pytest.fixture
def seed() -> Seed:
    return Seed.from_text("value test")


@pytest.fixture
def value_1() -> KeyCapability[ValueKey, float]:
    return VALUE_1


@pytest.fixture
def value_2() -> KeyCapability[ValueKey, float]:
    return VALUE_2


@pytest.fixture(params=[0, 1, 8, 16])
def raw_capability(request: pytest.FixtureRequest) -> KeyCapability[IntegerKey, int]:
    return KeyCapability(
        IntegerKey,
        "raw",
        constant=0xA5A5_0000_FFFF_1234,
        advance_exponent=request.param,
        sampler=samplers.raw_bits(),
    )
