from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from intentcore.context import FuzzConfig, FuzzContext
from intentcore.logging import Logger
from intentcore.pools import ValuePool


@pytest.fixture
def make_ctx():
    def _make_ctx(
        components,
        package_name="com.test",
        component_filter=None,
        seed=7,
        count=5,
        bound=100,
        verbose=False,
        pool=None,
    ):
        config = FuzzConfig(
            component_filter=component_filter,
            verbose=verbose,
            seed=seed,
            count=count,
            bound=bound,
        )
        return FuzzContext(
            package_name=package_name,
            components=components,
            config=config,
            pool=pool or ValuePool(seed=seed),
            logger=Logger(verbose=verbose),
        )

    return _make_ctx
