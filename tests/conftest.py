import pytest

from pagekeeper import disable_tracing


@pytest.fixture(autouse=True)
def reset_observability():
    """Reset tracing state between tests."""
    yield
    disable_tracing()
