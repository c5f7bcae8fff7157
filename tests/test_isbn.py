import pytest

from normcheck.errors import RangeAuthorityError, ValidationError
from normcheck.isbn_ranges import RangeAuthority
from normcheck.validate import validate_isbn
from normcheck.validate.isbn import isbn10_check, isbn13_check


def test_check_characters():
    assert isbn10_check("030640615") == "2"
    assert isbn10_check("080442957") == "X"
    assert isbn13_check("978030640615") == "7"


class TestIsbn10:
    def test_keep_kind(self, authority):
        r = validate_isbn("0306406152", authority=authority)
        assert r.machine == "0306406152"
        assert r.common == "0-306-40615-2"
        assert r.particular == "0306406152"

    def test_x_check_character(self, authority):
        r = validate_isbn("080442957x", authority=authority)
        assert r.machine == "080442957X"
        assert r.common == "0-8044-2957-X"

    def test_to_13(self, authority):
        r = validate_isbn("0306406152", kind=13, authority=authority)
        assert r.machine == "9780306406157"
        assert r.common == "978-0-306-40615-7"

    def test_bad_check(self, authority):
        with pytest.raises(ValidationError, match="incorrect sum check"):
            validate_isbn("0306406153", authority=authority)


class TestIsbn13:
    def test_hyphenated_to_10(self, authority):
        r = validate_isbn("978-0-306-40615-7", kind=10, authority=authority)
        assert r.machine == "0306406152"
        assert r.common == "0-306-40615-2"
        assert r.particular == "0-306-40615-2"

    def test_979_prefix(self, authority):
        r = validate_isbn("9791090636071", authority=authority)
        assert r.common == "979-10-90636-07-1"

    def test_979_has_no_10_form(self, authority):
        with pytest.raises(ValidationError, match="has no ISBN-10 form"):
            validate_isbn("9791090636071", kind=10, authority=authority)

    def test_unassigned_range(self, authority):
        with pytest.raises(ValidationError, match="invalid sequence"):
            validate_isbn("9798100000003", authority=authority)


class TestRejections:
    def test_unknown_group(self, authority):
        with pytest.raises(ValidationError, match="invalid sequence"):
            validate_isbn("9999999999", authority=authority)

    def test_length(self, authority):
        with pytest.raises(ValidationError, match="not of permissible length"):
            validate_isbn("12345", authority=authority)

    def test_kind(self, authority):
        with pytest.raises(ValidationError, match="ISBN kind must be 13 or 10"):
            validate_isbn("0306406152", kind=11, authority=authority)

    def test_uses_default_authority(self):
        assert validate_isbn("0-306-40615-2").machine == "0306406152"

    def test_reference_data_failure_is_distinct(self):
        def fail():
            raise RangeAuthorityError("ISBN range document not available")

        with pytest.raises(RangeAuthorityError):
            validate_isbn("0306406152", authority=RangeAuthority(fail, source="nowhere"))
