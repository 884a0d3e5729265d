"""
Wizard data model: CompanyInfo and FormState, plus the JSON shape used by the editor API.
"""
from dataclasses import dataclass, field, fields

BUSINESS_TYPES = {
    "ecommerce": "eCommerce Store",
    "saas": "SaaS (Software as a Service)",
    "app": "App Developer",
    "other": "Other",
}

# camelCase keys of the JSON payload -> attribute names
_COMPANY_JSON_KEYS = {
    "companyName": "company_name",
    "websiteUrl": "website_url",
    "contactEmail": "contact_email",
    "address": "address",
    "country": "country",
}


def _expect(value, kind: type, name: str):
    """None passes through; anything else must be an instance of kind."""
    if value is not None and not isinstance(value, kind):
        raise ValueError(f"Invalid '{name}' field: expected {kind.__name__}")
    return value


class PolicyGenError(Exception):
    """Base error for the policy generator."""


class ExportError(PolicyGenError):
    """Raised when a document cannot be rendered to the requested format."""


@dataclass
class CompanyInfo:
    company_name: str = ""
    website_url: str = ""
    contact_email: str = ""
    address: str = ""
    country: str = ""

    @classmethod
    def field_names(cls) -> list[str]:
        return [f.name for f in fields(cls)]

    @classmethod
    def from_dict(cls, data: dict | None) -> "CompanyInfo":
        data = _expect(data, dict, "companyInfo") or {}
        kwargs = {}
        for json_key, attr in _COMPANY_JSON_KEYS.items():
            value = data.get(json_key, data.get(attr))
            if isinstance(value, (dict, list)):
                raise ValueError(f"Invalid '{json_key}' field")
            kwargs[attr] = "" if value is None else str(value)
        return cls(**kwargs)

    def to_dict(self) -> dict:
        return {json_key: getattr(self, attr) for json_key, attr in _COMPANY_JSON_KEYS.items()}


@dataclass
class FormState:
    """
    Everything the wizard collects. policies keeps selection order (tab and export order);
    customizations maps policy key -> selected clause ids (a set, stored as an ordered list).
    """

    business_type: str = ""
    policies: list[str] = field(default_factory=list)
    customizations: dict[str, list[str]] = field(default_factory=dict)
    company_info: CompanyInfo = field(default_factory=CompanyInfo)
    agreed_to_terms: bool = False

    def selected_clauses(self, policy_key: str) -> list[str]:
        return list(self.customizations.get(policy_key, []))

    @classmethod
    def from_dict(cls, data: dict | None) -> "FormState":
        """Build from the camelCase JSON shape ({businessType, policies, customizations, companyInfo, agreedToTerms})."""
        data = _expect(data, dict, "form_state") or {}
        policies = []
        for key in _expect(data.get("policies"), list, "policies") or []:
            key = str(key)
            if key not in policies:
                policies.append(key)
        customizations = {}
        for key, ids in (_expect(data.get("customizations"), dict, "customizations") or {}).items():
            unique = []
            for clause_id in _expect(ids, list, f"customizations.{key}") or []:
                clause_id = str(clause_id)
                if clause_id not in unique:
                    unique.append(clause_id)
            customizations[str(key)] = unique
        return cls(
            business_type=_expect(data.get("businessType"), str, "businessType") or "",
            policies=policies,
            customizations=customizations,
            company_info=CompanyInfo.from_dict(data.get("companyInfo")),
            agreed_to_terms=bool(data.get("agreedToTerms", False)),
        )

    def to_dict(self) -> dict:
        return {
            "businessType": self.business_type,
            "policies": list(self.policies),
            "customizations": {k: list(v) for k, v in self.customizations.items()},
            "companyInfo": self.company_info.to_dict(),
            "agreedToTerms": self.agreed_to_terms,
        }
