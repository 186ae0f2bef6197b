"""
Signup flow data models.

The session is immutable; every transition produces a new SignupSession
through one of the with_* helpers.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional


class SignupMode(str, Enum):
    """Visible stage of the inline claim-a-spot flow."""
    BUTTON = "button"
    EMAIL_ENTRY = "email_entry"
    CODE_ENTRY = "code_entry"
    VERIFIED = "verified"


# Forward order of the flow; only the abandonment reset moves backwards.
MODE_ORDER = (
    SignupMode.BUTTON,
    SignupMode.EMAIL_ENTRY,
    SignupMode.CODE_ENTRY,
    SignupMode.VERIFIED,
)


@dataclass(frozen=True)
class SignupSession:
    """State of one visitor's walk through the signup flow."""

    mode: SignupMode = SignupMode.BUTTON
    email: str = ""
    code: str = ""
    submitting: bool = False
    last_error: Optional[str] = None

    @property
    def inputs_disabled(self) -> bool:
        return self.submitting

    def with_mode(self, mode: SignupMode) -> 'SignupSession':
        """Move to mode, finishing any submission and clearing the last error."""
        return replace(self, mode=mode, submitting=False, last_error=None)

    def with_email(self, email: str) -> 'SignupSession':
        return replace(self, email=email)

    def with_code(self, code: str) -> 'SignupSession':
        return replace(self, code=code)

    def with_submitting(self) -> 'SignupSession':
        """Mark a request in flight; a new attempt clears the previous error."""
        return replace(self, submitting=True, last_error=None)

    def with_error(self, message: str) -> 'SignupSession':
        """Record a failed submission and re-enable inputs."""
        return replace(self, submitting=False, last_error=message)
