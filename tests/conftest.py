import pytest

from kava.diagnostics import reset_formatter


@pytest.fixture(autouse=True)
def fresh_formatter():
    """Each test starts with a default global diagnostic formatter."""
    reset_formatter()
    yield
    reset_formatter()
