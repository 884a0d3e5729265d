"""
Placeholder substitution: {{TOKEN}} -> CompanyInfo value or a fallback literal.
Single pass over the text, so a value that itself contains a token is emitted as-is.
"""
import re

from policygen.models import CompanyInfo

# token -> (CompanyInfo attribute, fallback literal)
TOKENS = {
    "COMPANY_NAME": ("company_name", "Your Company"),
    "WEBSITE_URL": ("website_url", "yourwebsite.com"),
    "CONTACT_EMAIL": ("contact_email", "contact@yourwebsite.com"),
    "ADDRESS": ("address", "Your Company Address"),
    "COUNTRY": ("country", "Your Country"),
}

_TOKEN_PATTERN = re.compile(r"\{\{(" + "|".join(TOKENS) + r")\}\}")


def resolve_value(token: str, company_info: CompanyInfo | None) -> str:
    """Value for one token; blank or missing fields fall back to the default literal."""
    attr, default = TOKENS[token]
    value = getattr(company_info, attr, "") if company_info is not None else ""
    value = (value or "").strip()
    return value or default


def substitute(text: str, company_info: CompanyInfo | None, escape=None) -> str:
    """
    Replace every known token in text. escape, when given, is applied to each inserted
    value (the assembler passes html.escape); the surrounding template text is untouched.
    """
    if not text:
        return text or ""

    def _replace(m: re.Match) -> str:
        value = resolve_value(m.group(1), company_info)
        return escape(value) if escape else value

    return _TOKEN_PATTERN.sub(_replace, text)


def find_tokens(text: str) -> list[str]:
    """Known tokens used in text, in first-occurrence order."""
    found = []
    for m in _TOKEN_PATTERN.finditer(text or ""):
        if m.group(1) not in found:
            found.append(m.group(1))
    return found
