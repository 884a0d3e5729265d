import pytest

from policygen.models import CompanyInfo, FormState
from policygen.wizard import Wizard


@pytest.fixture
def acme_state():
    return FormState(
        business_type="saas",
        policies=["privacy"],
        customizations={"privacy": ["gdpr"]},
        company_info=CompanyInfo(company_name="Acme Inc", contact_email="hi@acme.io"),
    )


@pytest.fixture
def two_policy_state():
    return FormState(
        business_type="ecommerce",
        policies=["privacy", "terms"],
        customizations={"privacy": ["data-collection"], "terms": ["governing-law"]},
        company_info=CompanyInfo(company_name="Acme Inc", website_url="acme.io", country="Canada"),
    )


@pytest.fixture
def wizard():
    return Wizard()
