"""Configures pytest further."""
import pytest

from blockrsa import randomness


def pytest_addoption(parser):
    parser.addoption("--skip-slow", action="store_true", default=False, help="skip slower tests")
    parser.addoption("--run-extreme", action="store_true", default=False, help="run extreme value extremely slow tests")
    parser.addoption("--seed", action="store", type=int, default=20250317, help="seed for the randomness fixtures")


def pytest_collection_modifyitems(config, items):
    skipdict = {}
    if config.getoption("--skip-slow"):
        skipdict["slow"] = pytest.mark.skip(reason="Slow test: needs no --skip-slow option")
    if not config.getoption("--run-extreme"):
        skipdict["extreme"] = pytest.mark.skip(reason="Extreme test: needs --run-extreme option")
    if not skipdict:
        return
    for item in items:
        for k, v in skipdict.items():
            if k in item.keywords:
                item.add_marker(v)


@pytest.fixture
def rng(request) -> randomness.RandomSource:
    """A freshly seeded, reproducible Randomness Source."""
    return randomness.RandomSource(request.config.getoption("--seed"))


@pytest.fixture(autouse=True)
def _isolated_default_source(request):
    """Every test starts from its own seeded process-wide source."""
    randomness.reset_default_source(randomness.RandomSource(request.config.getoption("--seed")))
    yield
    randomness.reset_default_source()
