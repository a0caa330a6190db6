import pytest

from tests.helpers import FakeClock


@pytest.fixture
def clock(mocker):
    """Patch ``time.time`` with a manually advanced clock."""
    fake = FakeClock()
    mocker.patch("time.time", new=fake)
    return fake
