"""Tests for placeholder substitution."""
import html

import pytest

from policygen.models import CompanyInfo
from policygen.substitution import TOKENS, find_tokens, substitute

ALL_TOKENS = "{{COMPANY_NAME}}|{{WEBSITE_URL}}|{{CONTACT_EMAIL}}|{{ADDRESS}}|{{COUNTRY}}"

FILLED = CompanyInfo(
    company_name="Acme Inc",
    website_url="acme.io",
    contact_email="hi@acme.io",
    address="1 Main St",
    country="Canada",
)


def test_empty_company_info_uses_all_defaults():
    out = substitute(ALL_TOKENS, CompanyInfo())
    assert out == "Your Company|yourwebsite.com|contact@yourwebsite.com|Your Company Address|Your Country"


def test_none_company_info_uses_defaults():
    assert substitute("{{COMPANY_NAME}}", None) == "Your Company"


def test_filled_company_info():
    assert substitute(ALL_TOKENS, FILLED) == "Acme Inc|acme.io|hi@acme.io|1 Main St|Canada"


@pytest.mark.parametrize("token", list(TOKENS))
def test_single_empty_field_only_affects_its_token(token):
    attr, default = TOKENS[token]
    info = CompanyInfo(**{**FILLED.__dict__, attr: ""})
    expected = substitute(ALL_TOKENS, FILLED).split("|")
    expected[list(TOKENS).index(token)] = default
    assert substitute(ALL_TOKENS, info).split("|") == expected


def test_whitespace_only_value_counts_as_absent():
    assert substitute("{{COUNTRY}}", CompanyInfo(country="   ")) == "Your Country"


def test_every_occurrence_is_replaced():
    out = substitute("{{COMPANY_NAME}} and {{COMPANY_NAME}}", FILLED)
    assert out == "Acme Inc and Acme Inc"


def test_value_containing_a_token_is_not_substituted_again():
    info = CompanyInfo(company_name="{{COUNTRY}}", country="Canada")
    assert substitute("{{COMPANY_NAME}} / {{COUNTRY}}", info) == "{{COUNTRY}} / Canada"


def test_unknown_tokens_are_left_alone():
    assert substitute("{{PHONE}}", FILLED) == "{{PHONE}}"


def test_escape_is_applied_to_values_only():
    info = CompanyInfo(company_name="A & B")
    out = substitute("<b>{{COMPANY_NAME}}</b>", info, escape=html.escape)
    assert out == "<b>A &amp; B</b>"


def test_find_tokens_lists_first_occurrences_in_order():
    assert find_tokens("{{COUNTRY}} {{COMPANY_NAME}} {{COUNTRY}}") == ["COUNTRY", "COMPANY_NAME"]
