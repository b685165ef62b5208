import pytest

from ctortrace.counter import reset_counter


@pytest.fixture(autouse=True)
def fresh_counter():
    """Every test starts with the process-wide counter at zero."""
    reset_counter()
    yield
    reset_counter()
