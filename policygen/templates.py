"""
Template catalog: one PolicyTemplate per policy key (base prose + optional clauses).
Static data compiled into the package; nothing is loaded from disk or network.
"""
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Clause:
    id: str
    label: str
    text: str


@dataclass(frozen=True)
class PolicyTemplate:
    """Base prose with {{TOKENS}} plus optional clauses in declaration order."""

    name: str
    base: str
    clauses: tuple[Clause, ...] = field(default_factory=tuple)

    def __post_init__(self):
        seen = set()
        for clause in self.clauses:
            if clause.id in seen:
                raise ValueError(f"Duplicate clause id {clause.id!r} in template {self.name!r}")
            seen.add(clause.id)

    def clause(self, clause_id: str) -> Clause | None:
        for c in self.clauses:
            if c.id == clause_id:
                return c
        return None

    @property
    def clause_ids(self) -> list[str]:
        return [c.id for c in self.clauses]


TEMPLATES: dict[str, PolicyTemplate] = {
    "privacy": PolicyTemplate(
        name="Privacy Policy",
        base=(
            "This Privacy Policy describes Our policies and procedures on the collection, use and "
            "disclosure of Your information when You use the Service and tells You about Your privacy "
            "rights and how the law protects You.\n\n"
            "This document is for {{COMPANY_NAME}}."
        ),
        clauses=(
            Clause(
                "data-collection",
                "Do you collect user data? (e.g., name, email, address)",
                "We collect personal information that you voluntarily provide to us when you register on "
                "the app, express an interest in obtaining information about us or our products and "
                "services, when you participate in activities on {{WEBSITE_URL}} or otherwise when you "
                "contact us.\n\n",
            ),
            Clause(
                "data-use",
                "How do you use the collected data?",
                "We use personal information collected via our Services for a variety of business purposes "
                "described below. We process your personal information for these purposes in reliance on "
                "our legitimate business interests, in order to enter into or perform a contract with you, "
                "with your consent, and/or for compliance with our legal obligations.",
            ),
            Clause(
                "tracking-tech",
                "Do you use cookies and other tracking technologies?",
                "We may use cookies and similar tracking technologies (like web beacons and pixels) to "
                "access or store information. Specific information about how we use such technologies and "
                "how you can refuse certain cookies is set out in our Cookie Policy.",
            ),
            Clause(
                "data-retention",
                "How long do you keep user data?",
                "We will only keep your personal information for as long as it is necessary for the "
                "purposes set out in this privacy policy, unless a longer retention period is required or "
                "permitted by law (such as tax, accounting or other legal requirements).",
            ),
            Clause(
                "app-store",
                "Is your app available on the Apple App Store?",
                "Our application is compliant with the Apple App Store's privacy requirements. We are "
                "committed to protecting your data and ensuring transparency in how we handle it.\n\n",
            ),
            Clause(
                "google-play",
                "Is your app available on the Google Play Store?",
                "Our application is compliant with the Google Play Store's privacy requirements. We provide "
                "users with clear information about the data we collect and how it is used.\n\n",
            ),
            Clause(
                "payment-gateways",
                "Do you use third-party services to process payments?",
                "We use third-party services for payment processing (e.g., payment processors). We will not "
                "store or collect your payment card details. That information is provided directly to our "
                "third-party payment processors whose use of your personal information is governed by their "
                "Privacy Policy.\n\n",
            ),
            Clause(
                "gdpr",
                "Do you require GDPR compliance?",
                "If you are a resident of the European Economic Area (EEA), you have certain data protection "
                "rights. For any questions, you can contact us at {{CONTACT_EMAIL}}.\n\n",
            ),
        ),
    ),
    "terms": PolicyTemplate(
        name="Terms & Conditions",
        base=(
            "Welcome to {{COMPANY_NAME}}! These terms and conditions outline the rules and regulations for "
            "the use of our website, located at {{WEBSITE_URL}}. By accessing this website we assume you "
            "accept these terms and conditions."
        ),
        clauses=(
            Clause(
                "accounts",
                "Do users need to create an account?",
                "When you create an account with us, you must provide us information that is accurate, "
                "complete, and current at all times. Failure to do so constitutes a breach of the Terms, "
                "which may result in immediate termination of your account on our Service.",
            ),
            Clause(
                "termination",
                "Do you need a termination clause?",
                "We may terminate or suspend your account immediately, without prior notice or liability, "
                "for any reason whatsoever, including without limitation if you breach the Terms.",
            ),
            Clause(
                "governing-law",
                "Do you need to specify a governing law?",
                "These Terms shall be governed and construed in accordance with the laws of {{COUNTRY}}, "
                "without regard to its conflict of law provisions. Our failure to enforce any right or "
                "provision of these Terms will not be considered a waiver of those rights.",
            ),
        ),
    ),
    "shipping": PolicyTemplate(
        name="Return & Shipping Policy",
        base=(
            "Thank you for shopping at {{COMPANY_NAME}}. If you are not entirely satisfied with your "
            "purchase, we're here to help."
        ),
        clauses=(
            Clause(
                "returns",
                "Do you accept returns?",
                "You have 30 calendar days to return an item from the date you received it. To be eligible "
                "for a return, your item must be unused and in the same condition that you received it. "
                "Your item must be in the original packaging.",
            ),
            Clause(
                "refunds",
                "Do you offer refunds?",
                "Once we receive your item, we will inspect it and notify you that we have received your "
                "returned item. We will immediately notify you on the status of your refund after "
                "inspecting the item. If your return is approved, we will initiate a refund to your "
                "original method of payment.",
            ),
            Clause(
                "shipping-costs",
                "Are customers responsible for return shipping costs?",
                "You will be responsible for paying for your own shipping costs for returning your item. "
                "Shipping costs are non-refundable. If you receive a refund, the cost of return shipping "
                "will be deducted from your refund.",
            ),
            Clause(
                "contact-us",
                "Do you want to add a contact section for returns?",
                "If you have any questions on how to return your item to us, contact us at "
                "{{CONTACT_EMAIL}} or mail us at: {{ADDRESS}}.",
            ),
        ),
    ),
    "cookie": PolicyTemplate(
        name="Cookie Policy",
        base=(
            "This Cookie Policy explains what cookies are and how we use them. You should read this policy "
            "to understand what cookies are, how we use them, the types of cookies we use, the information "
            "we collect using cookies and how that information is used. For further information on how we "
            "use, store and keep your personal data secure, see our Privacy Policy."
        ),
        clauses=(
            Clause(
                "what-are-cookies",
                "Include a section explaining what cookies are?",
                "Cookies are small text files that are stored on your device when you visit a website. They "
                "are widely used to make websites work more efficiently, as well as to provide information "
                "to the owners of the site.",
            ),
            Clause(
                "how-we-use",
                "Explain how you use cookies?",
                "We use cookies for a variety of reasons detailed below. Unfortunately, in most cases, there "
                "are no industry standard options for disabling cookies without completely disabling the "
                "functionality and features they add to this site.",
            ),
            Clause(
                "disabling-cookies",
                "Include instructions on how to disable cookies?",
                "You can prevent the setting of cookies by adjusting the settings on your browser (see your "
                "browser Help for how to do this). Be aware that disabling cookies will affect the "
                "functionality of this and many other websites that you visit.",
            ),
            Clause(
                "third-party",
                "Do you use any third-party cookies (e.g., Google Analytics)?",
                "In some special cases, we also use cookies provided by trusted third parties. The following "
                "section details which third-party cookies you might encounter through this site. This site "
                "uses Google Analytics which is one of the most widespread and trusted analytics solutions "
                "on the web for helping us to understand how you use the site and ways that we can improve "
                "your experience.",
            ),
        ),
    ),
    "aup": PolicyTemplate(
        name="Acceptable Use Policy",
        base=(
            'This Acceptable Use Policy ("AUP") details the acceptable use of {{COMPANY_NAME}}\'s Service. '
            "By using our Service, you agree to this AUP."
        ),
        clauses=(
            Clause(
                "prohibited-activities",
                "Do you want to include a clause on prohibited activities?",
                "You are prohibited from using the Service to engage in illegal activities, transmit spam, "
                "or harass other users.",
            ),
            Clause(
                "content-standards",
                "Do you want to add content standards for user-posted content?",
                "Content posted by users must not be obscene, defamatory, or infringing on intellectual "
                "property rights. We reserve the right to remove any content that violates these standards.",
            ),
            Clause(
                "enforcement",
                "Do you want a clause on policy enforcement?",
                "Violation of this AUP may result in a warning, suspension, or termination of your account, "
                "at our sole discretion.",
            ),
        ),
    ),
    "dmca": PolicyTemplate(
        name="DMCA Takedown Policy",
        base=(
            "{{COMPANY_NAME}} responds to copyright infringement claims in accordance with the Digital "
            "Millennium Copyright Act (DMCA)."
        ),
        clauses=(
            Clause(
                "reporting-infringement",
                "Include instructions for reporting copyright infringement?",
                "To report a copyright infringement, please send a DMCA notice to our designated agent at "
                "{{CONTACT_EMAIL}} with all required information.",
            ),
            Clause(
                "counter-notification",
                "Include instructions for filing a counter-notification?",
                "If your content was removed due to a mistake or misidentification, you may file a "
                "counter-notification by providing a detailed explanation to our designated agent.",
            ),
            Clause(
                "repeat-infringers",
                "Do you want a policy for repeat infringers?",
                "We will terminate the accounts of users who are determined to be repeat infringers of "
                "copyright.",
            ),
        ),
    ),
}


class TemplateCatalog:
    """
    Read-only lookup over policy templates. Adding a policy means adding an entry to
    the mapping passed in (or to TEMPLATES); nothing else changes.
    """

    def __init__(self, templates: dict[str, PolicyTemplate] | None = None):
        self._templates = dict(TEMPLATES if templates is None else templates)

    def get(self, key: str) -> PolicyTemplate | None:
        return self._templates.get(key)

    def keys(self) -> list[str]:
        return list(self._templates)

    def clause(self, key: str, clause_id: str) -> Clause | None:
        template = self.get(key)
        return template.clause(clause_id) if template else None

    def __contains__(self, key) -> bool:
        return key in self._templates

    def __len__(self) -> int:
        return len(self._templates)


default_catalog = TemplateCatalog()
