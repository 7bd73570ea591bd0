"""Step wizard: state machine, inline editor, payment gate and outreach."""

from job_tailor.wizard.controller import WizardController
from job_tailor.wizard.factory import build_controller
from job_tailor.wizard.payment import PaymentDetails, PaymentGate
from job_tailor.wizard.state import Step, WizardState

__all__ = [
    "PaymentDetails",
    "PaymentGate",
    "Step",
    "WizardController",
    "WizardState",
    "build_controller",
]
