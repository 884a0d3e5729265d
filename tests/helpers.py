from policygen.wizard import Wizard


def drive_to_review(wizard: Wizard, policies=("privacy",)) -> Wizard:
    """Walk a fresh wizard to the review step with the given policies selected."""
    wizard.set_business_type("saas")
    wizard.next()
    wizard.next()
    for key in policies:
        wizard.toggle_policy(key, True)
    wizard.next()
    wizard.next()
    wizard.next()
    return wizard
