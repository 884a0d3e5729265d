"""Tests for the template catalog."""
import re

import pytest

from policygen.substitution import TOKENS
from policygen.templates import Clause, PolicyTemplate, TemplateCatalog, default_catalog


def test_default_catalog_keys_in_declaration_order():
    assert default_catalog.keys() == ["privacy", "terms", "shipping", "cookie", "aup", "dmca"]


def test_privacy_clause_ids():
    assert default_catalog.get("privacy").clause_ids == [
        "data-collection",
        "data-use",
        "tracking-tech",
        "data-retention",
        "app-store",
        "google-play",
        "payment-gateways",
        "gdpr",
    ]


def test_unknown_key_returns_none():
    assert default_catalog.get("dispute") is None
    assert "dispute" not in default_catalog
    assert default_catalog.clause("dispute", "anything") is None


def test_clause_lookup_by_id():
    clause = default_catalog.clause("terms", "governing-law")
    assert clause.label == "Do you need to specify a governing law?"
    assert "{{COUNTRY}}" in clause.text
    assert default_catalog.clause("terms", "missing") is None


def test_templates_only_use_known_tokens():
    for key in default_catalog.keys():
        template = default_catalog.get(key)
        texts = [template.base] + [c.text for c in template.clauses]
        for text in texts:
            for token in re.findall(r"\{\{(\w+)\}\}", text):
                assert token in TOKENS, f"{key}: unknown token {token}"


def test_duplicate_clause_ids_rejected():
    with pytest.raises(ValueError):
        PolicyTemplate("X", "base", (Clause("a", "A", "a"), Clause("a", "A2", "b")))


def test_custom_catalog_adds_a_policy():
    catalog = TemplateCatalog({"faq": PolicyTemplate("FAQ", "Questions for {{COMPANY_NAME}}.")})
    assert catalog.keys() == ["faq"]
    assert len(catalog) == 1
