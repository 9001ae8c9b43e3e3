"""
Tests for input validation.
"""

import logging

import pytest

from namecheap_client.exceptions import NamecheapParameterError
from namecheap_client.validation import (
    MAX_CHECK_DOMAINS,
    filter_domain_names,
    is_valid_domain_name,
    require_domain_name,
    require_positive,
)


class TestIsValidDomainName:

    @pytest.mark.parametrize("name", [
        "example.com",
        "EXAMPLE.COM",
        "sub.example.co.uk",
        "my-domain.net",
        "123.org",
        "xn--80ak6aa92e.com",
    ])
    def test_valid(self, name):
        assert is_valid_domain_name(name)

    @pytest.mark.parametrize("name", [
        "",
        "   ",
        "ab",
        "-bad.com",
        "bad-.com",
        "has space.com",
        "under_score.com",
        "double..dot.com",
        "a" * 64 + ".com",
        ".".join(["abc"] * 64),
        "example.com\n",
        "bad.com\n",
        "exampl\u212a.com",
        "\u017fite.com",
        "caf\u00e9.com",
    ])
    def test_invalid(self, name):
        assert not is_valid_domain_name(name)


class TestFilterDomainNames:

    def test_split_preserves_order(self):
        valid, invalid = filter_domain_names(["b.com", "bad name", "a.com", "-x.com"])
        assert valid == ["b.com", "a.com"]
        assert invalid == ["bad name", "-x.com"]

    def test_newline_and_non_ascii_dropped(self):
        valid, invalid = filter_domain_names(["ok.com", "bad.com\n", "ſite.com"])
        assert valid == ["ok.com"]
        assert invalid == ["bad.com\n", "ſite.com"]

    def test_empty_batch_rejected(self):
        with pytest.raises(NamecheapParameterError):
            filter_domain_names([])

    def test_limit_is_inclusive(self):
        names = [f"d{i}.com" for i in range(MAX_CHECK_DOMAINS)]
        valid, invalid = filter_domain_names(names)
        assert len(valid) == 50
        assert invalid == []

    def test_over_limit_rejected(self):
        names = [f"d{i}.com" for i in range(MAX_CHECK_DOMAINS + 1)]
        with pytest.raises(NamecheapParameterError) as exc_info:
            filter_domain_names(names)
        assert exc_info.value.value == "51"

    def test_dropped_names_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="namecheap.validation"):
            filter_domain_names(["ok.com", "not valid"])
        assert "1 invalid domain names were filtered out" in caplog.text


class TestRequire:

    @pytest.mark.parametrize("name", [None, "", "  "])
    def test_blank_domain_rejected(self, name):
        with pytest.raises(NamecheapParameterError):
            require_domain_name(name)

    def test_domain_passthrough(self):
        assert require_domain_name("example.com") == "example.com"

    @pytest.mark.parametrize("value", [None, 0, -1])
    def test_non_positive_rejected(self, value):
        with pytest.raises(NamecheapParameterError) as exc_info:
            require_positive(value, "Years")
        assert "Years" in str(exc_info.value)

    def test_positive_passthrough(self):
        assert require_positive(2, "Years") == 2
