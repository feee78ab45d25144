import os
import sys

import pytest

# Ensure repository root is on sys.path before importing project modules.
repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if repo_root not in sys.path:
    sys.path.insert(0, repo_root)

from casper_mcp.metrics import default_metrics  # noqa: E402


@pytest.fixture(autouse=True)
def reset_metrics():
    default_metrics.reset()
    yield
    default_metrics.reset()


class StubResource:
    """Answers any ``endpoint.<resource>.<method>(...)`` call from a canned table."""

    def __init__(self, owner, name):
        self._owner = owner
        self._name = name

    def __getattr__(self, method):
        key = f"{self._name}.{method}"

        async def call(*args, **kwargs):
            self._owner.calls.append((key, args, kwargs))
            result = self._owner.responses.get(key, self._owner.default)
            if isinstance(result, BaseException):
                raise result
            return result

        return call


class StubEndpoint:
    def __init__(self, responses=None, *, default=None, is_testnet=False):
        self.responses = responses or {}
        self.default = default
        self.calls = []
        self.is_testnet = is_testnet

    def __getattr__(self, name):
        return StubResource(self, name)


@pytest.fixture
def stub_endpoint():
    return StubEndpoint
