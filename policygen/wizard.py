"""
Six-step wizard over a single FormState.
The active step is a pure function of an integer cursor; mutations are named events.
"""
import logging
from dataclasses import dataclass

from policygen.assembler import PolicyAssembler
from policygen.editor import EditSurface
from policygen.models import BUSINESS_TYPES, CompanyInfo, FormState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Step:
    number: int
    key: str
    title: str


STEPS = (
    Step(1, "business", "What type of business do you have?"),
    Step(2, "company", "Tell Us About Your Business"),
    Step(3, "policies", "Select the policies you want to generate"),
    Step(4, "customize", "Customize Clauses"),
    Step(5, "disclaimer", "Disclaimer"),
    Step(6, "review", "Review, Edit, and Download Your Policies"),
)
FIRST_STEP = 1
TOTAL_STEPS = len(STEPS)
REVIEW_STEP = TOTAL_STEPS


class Wizard:
    """
    Linear wizard: next()/prev() move one step at a time and are no-ops at the ends.
    Guards: step 1 needs a business type, step 3 needs at least one policy.
    Entering the review step seeds a fresh EditSurface; leaving it discards the surface.
    """

    def __init__(self, assembler: PolicyAssembler | None = None, state: FormState | None = None):
        self._assembler = assembler or PolicyAssembler()
        self.state = state or FormState()
        self._cursor = FIRST_STEP
        self._active_policy = ""
        self._review_session = 0
        self.surface: EditSurface | None = None

    # ----- navigation -----

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def step(self) -> Step:
        return STEPS[self._cursor - 1]

    @property
    def is_first(self) -> bool:
        return self._cursor == FIRST_STEP

    @property
    def is_last(self) -> bool:
        return self._cursor == TOTAL_STEPS

    def progress(self) -> float:
        return self._cursor / TOTAL_STEPS

    def can_advance(self) -> bool:
        if self.is_last:
            return False
        if self.step.key == "business":
            return bool(self.state.business_type)
        if self.step.key == "policies":
            return bool(self.state.policies)
        return True

    def next(self) -> bool:
        if not self.can_advance():
            return False
        self._cursor += 1
        logger.debug("Wizard advanced to step %d (%s)", self._cursor, self.step.key)
        if self._cursor == REVIEW_STEP:
            self._enter_review()
        return True

    def prev(self) -> bool:
        if self.is_first:
            return False
        if self._cursor == REVIEW_STEP:
            self.surface = None
        self._cursor -= 1
        logger.debug("Wizard moved back to step %d (%s)", self._cursor, self.step.key)
        return True

    @property
    def review_session(self) -> int:
        """Increments each time the review step is entered (a new surface is seeded)."""
        return self._review_session

    def _enter_review(self) -> None:
        self._review_session += 1
        self.surface = EditSurface.from_html(self._assembler.render_combined(self.state))

    # ----- mutation events -----

    def set_business_type(self, business_type: str) -> None:
        if business_type not in BUSINESS_TYPES:
            raise ValueError(f"Unknown business type: {business_type!r}")
        self.state.business_type = business_type

    def update_company_info(self, field_name: str, value: str) -> None:
        if field_name not in CompanyInfo.field_names():
            raise ValueError(f"Unknown company info field: {field_name!r}")
        setattr(self.state.company_info, field_name, value or "")

    def toggle_policy(self, policy_key: str, checked: bool) -> None:
        if policy_key not in self._assembler.catalog:
            raise ValueError(f"Unknown policy: {policy_key!r}")
        policies = self.state.policies
        if checked and policy_key not in policies:
            policies.append(policy_key)
        elif not checked and policy_key in policies:
            policies.remove(policy_key)
        if self._active_policy not in policies:
            self._active_policy = ""

    def toggle_clause(self, policy_key: str, clause_id: str, checked: bool) -> None:
        if self._assembler.catalog.clause(policy_key, clause_id) is None:
            raise ValueError(f"Unknown clause {clause_id!r} for policy {policy_key!r}")
        selected = self.state.customizations.setdefault(policy_key, [])
        if checked and clause_id not in selected:
            selected.append(clause_id)
        elif not checked and clause_id in selected:
            selected.remove(clause_id)

    def set_agreed_to_terms(self, agreed: bool) -> None:
        self.state.agreed_to_terms = bool(agreed)

    @property
    def active_policy(self) -> str:
        """Policy tab shown on the customization step (first selected policy by default)."""
        if self._active_policy in self.state.policies:
            return self._active_policy
        return self.state.policies[0] if self.state.policies else ""

    def set_active_policy(self, policy_key: str) -> None:
        if policy_key not in self.state.policies:
            raise ValueError(f"Policy {policy_key!r} is not selected")
        self._active_policy = policy_key

    _EVENTS = frozenset({
        "set_business_type",
        "update_company_info",
        "toggle_policy",
        "toggle_clause",
        "set_agreed_to_terms",
        "set_active_policy",
        "next",
        "prev",
    })

    def dispatch(self, event: str, **payload):
        """Apply one named event, e.g. dispatch("toggle_policy", policy_key="privacy", checked=True)."""
        if event not in self._EVENTS:
            raise ValueError(f"Unknown wizard event: {event!r}")
        return getattr(self, event)(**payload)

    # ----- preview -----

    def preview(self) -> str:
        """Live preview for the customization step's active policy."""
        return self._assembler.render_preview(self.active_policy, self.state)
