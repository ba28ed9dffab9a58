from __future__ import annotations

import logging

import matplotlib

# Tests never open windows
matplotlib.use("Agg")

import pytest

from mobjectwrapper.model.mobject import Mobject


@pytest.fixture(autouse=True)
def _reset_package_logger():
    # The CLI configures handlers bound to the captured stdout of one test
    yield
    logger = logging.getLogger("mobjectwrapper")
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def square() -> Mobject:
    return Mobject.square(2.0, name="square")


@pytest.fixture
def circle() -> Mobject:
    return Mobject.circle(1.0, name="circle")
