"""Tests for the wizard data model and its JSON shape."""
import pytest

from policygen.models import CompanyInfo, FormState


def test_form_state_from_json_dedupes():
    state = FormState.from_dict({
        "businessType": "app",
        "policies": ["privacy", "terms", "privacy"],
        "customizations": {"privacy": ["gdpr", "gdpr", "ccpa"]},
        "companyInfo": {"companyName": "Acme Inc", "website_url": "acme.io"},
        "agreedToTerms": True,
    })
    assert state.policies == ["privacy", "terms"]
    assert state.selected_clauses("privacy") == ["gdpr", "ccpa"]
    assert state.company_info.company_name == "Acme Inc"
    assert state.company_info.website_url == "acme.io"
    assert FormState.from_dict(state.to_dict()) == state


def test_missing_fields_fall_back_to_empty():
    assert FormState.from_dict(None) == FormState()
    assert FormState.from_dict({"companyInfo": None, "policies": None}) == FormState()


@pytest.mark.parametrize("payload", [
    {"companyInfo": "Acme"},
    {"companyInfo": {"companyName": ["Acme"]}},
    {"customizations": ["gdpr"]},
    {"customizations": {"privacy": "gdpr"}},
    {"policies": "privacy"},
    {"businessType": {"saas": True}},
])
def test_malformed_fields_are_rejected(payload):
    with pytest.raises(ValueError):
        FormState.from_dict(payload)


def test_company_info_must_be_a_mapping():
    with pytest.raises(ValueError):
        CompanyInfo.from_dict(["Acme"])
