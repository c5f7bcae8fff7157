from pathlib import Path

import pytest

from normcheck.isbn_ranges import RangeAuthority, set_default_authority

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def range_file():
    return FIXTURES / "RangeMessage.xml"


@pytest.fixture
def authority(range_file):
    return RangeAuthority.from_file(range_file)


@pytest.fixture(autouse=True)
def offline_ranges(authority):
    # Never let a test reach the agency website through the default authority.
    set_default_authority(authority)
    yield
    set_default_authority(None)
