from unittest.mock import patch

import pytest

from normcheck.errors import ValidationError
from normcheck.validate import validate_phone
from normcheck.validate.phone import NorthAmericanPlan, region_of


class TestNanp:
    def test_parenthesized(self):
        r = validate_phone("(212) 555-0100", locale="US")
        assert r.machine == "+12125550100"
        assert r.common == "+1(212)555-0100"
        assert r.particular == "(212) 555-0100"

    def test_dots(self):
        assert validate_phone("212.555.0100", locale="US").particular == "212.555.0100"

    def test_dashes(self):
        assert validate_phone("212-555-0100", locale="en_US").particular == "212-555-0100"

    def test_country_code_given(self):
        r = validate_phone("+1 212 555 0100", locale="en-CA")
        assert r.machine == "+12125550100"
        assert r.particular == "+1 212 555 0100"

    def test_country_code_required(self):
        assert validate_phone("2125550100", country_code_required=True, locale="US").particular == "+12125550100"

    def test_wrong_country_code(self):
        with pytest.raises(ValidationError, match="Country code not found"):
            validate_phone("+44 20 7946 0958", locale="US")

    def test_digit_count(self):
        with pytest.raises(ValidationError, match=r"7 digit\(s\) given but 10 needed"):
            validate_phone("555-0100", locale="US")

    def test_letters(self):
        with pytest.raises(ValidationError, match="may not appear"):
            validate_phone("1-800-FLOWERS", locale="US")

    def test_caribbean_region(self):
        assert "JM" in NorthAmericanPlan.regions
        assert validate_phone("876-555-0100", locale="JM").machine == "+18765550100"


class TestLocale:
    def test_unsupported(self):
        with pytest.raises(ValidationError, match="Locale fr_FR not implemented"):
            validate_phone("01 23 45 67 89", locale="fr_FR")

    def test_language_only(self):
        with pytest.raises(ValidationError, match="Locale en not implemented"):
            validate_phone("212-555-0100", locale="en")

    @pytest.mark.parametrize(
        "name, region",
        [("en_US.UTF-8", "US"), ("en-CA", "CA"), ("US", "US"), ("021", "021"), ("en", ""), ("C", "")],
    )
    def test_region_of(self, name, region):
        assert region_of(name) == region

    def test_process_locale(self):
        with patch("normcheck.validate.phone._locale.getlocale", return_value=("en_US", "UTF-8")):
            assert validate_phone("212-555-0100").machine == "+12125550100"

    def test_process_locale_without_region_falls_back(self):
        with patch("normcheck.validate.phone._locale.getlocale", return_value=(None, None)):
            assert validate_phone("212-555-0100").machine == "+12125550100"

    def test_process_locale_outside_nanp(self):
        with patch("normcheck.validate.phone._locale.getlocale", return_value=("de_DE", "UTF-8")):
            with pytest.raises(ValidationError, match="Locale DE not implemented"):
                validate_phone("212-555-0100")
