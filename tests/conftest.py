import pytest

from ctxerror import configure, set_default_handler


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture(autouse=True)
def _reset_process_defaults():
    """Process-wide fallback and config must not leak between tests"""
    yield
    set_default_handler(None)
    configure(None)


class Recorder:
    """Handler that records every call"""

    def __init__(self):
        self.calls = []

    def __call__(self, ctx, err, msg):
        self.calls.append((ctx, err, msg))

    @property
    def errors(self):
        return [err for _, err, _ in self.calls]

    @property
    def messages(self):
        return [msg for _, _, msg in self.calls]


@pytest.fixture
def recorder():
    return Recorder()
