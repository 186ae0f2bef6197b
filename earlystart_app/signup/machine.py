"""
Inline claim-a-spot signup flow.

Walks a visitor from the hover button through email entry and one-time
code entry to verification. UI callbacks call the public methods on their
own thread; the backend call runs on that thread while the session is
marked submitting, which is the only guard against duplicate submissions.
"""

import threading
from typing import Any, Callable, Optional, Protocol

from ..api.client import ApiClient
from ..config.defaults import SignupParams
from ..errors import ApiError
from ..logging.config import get_state_logger, log_state_transition
from .models import MODE_ORDER, SignupMode, SignupSession

state_logger = get_state_logger(__name__)


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


Scheduler = Callable[[float, Callable[[], None]], TimerHandle]
Navigator = Callable[[str], Any]


def thread_timer(delay: float, callback: Callable[[], None]) -> TimerHandle:
    """Run callback once after delay seconds on a daemon timer thread."""
    timer = threading.Timer(delay, callback)
    timer.daemon = True
    timer.start()
    return timer


class SignupFlow:
    """State machine behind the inline early-access signup form."""

    def __init__(
        self,
        api: ApiClient,
        params: SignupParams,
        navigate: Navigator,
        scheduler: Scheduler = thread_timer,
        name: str = "claim_spot"
    ):
        self.api = api
        self.params = params
        self.navigate = navigate
        self.scheduler = scheduler
        self.name = name

        self._lock = threading.Lock()
        self._session = SignupSession()
        self._enabled = True
        # Bumped by reset(); responses issued under an older epoch are dropped
        self._epoch = 0
        self._abandon_timer: Optional[TimerHandle] = None
        self._abandon_token = 0

    @property
    def session(self) -> SignupSession:
        return self._session

    @property
    def mode(self) -> SignupMode:
        return self._session.mode

    # Button

    def pointer_enter(self) -> SignupSession:
        """Hovering the button reveals the email field."""
        with self._lock:
            if self._enabled and self._session.mode is SignupMode.BUTTON:
                self._advance(SignupMode.EMAIL_ENTRY, "pointer_enter")
            return self._session

    # Email entry

    def set_email(self, value: str) -> SignupSession:
        with self._lock:
            session = self._session
            if session.mode is SignupMode.EMAIL_ENTRY and not session.submitting:
                self._cancel_abandon_timer()
                self._session = session.with_email(value)
            return self._session

    def focus_email(self) -> SignupSession:
        with self._lock:
            self._cancel_abandon_timer()
            return self._session

    def blur_email(self) -> SignupSession:
        """
        Schedule a reset to the button when the empty email field loses focus.

        The grace delay tolerates focus moving to another part of the same
        form. The conditions are checked again when the timer fires.
        """
        with self._lock:
            session = self._session
            if (session.mode is SignupMode.EMAIL_ENTRY
                    and not session.email.strip()
                    and not session.submitting):
                self._cancel_abandon_timer()
                self._abandon_token += 1
                token = self._abandon_token
                self._abandon_timer = self.scheduler(
                    self.params.abandon_grace_seconds,
                    lambda: self._on_abandon_timeout(token),
                )
            return self._session

    def submit_email(
        self,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None
    ) -> SignupSession:
        """Request a one-time code for the entered email."""
        with self._lock:
            session = self._session
            if session.mode is not SignupMode.EMAIL_ENTRY or session.submitting:
                return session

            email = session.email.strip()
            if not email:
                return session

            self._cancel_abandon_timer()
            self._session = session.with_submitting()
            epoch = self._epoch

        try:
            self.api.signup(email, first_name=first_name, last_name=last_name)
        except ApiError as e:
            with self._lock:
                if self._is_current(epoch, SignupMode.EMAIL_ENTRY):
                    self._session = self._session.with_error(e.message)
                    state_logger.warning(
                        "Signup rejected",
                        flow=self.name,
                        error=e.message,
                        status_code=e.status_code
                    )
                return self._session

        with self._lock:
            if self._is_current(epoch, SignupMode.EMAIL_ENTRY):
                self._session = self._session.with_email(email).with_code("")
                self._advance(SignupMode.CODE_ENTRY, "signup_accepted")
            return self._session

    # Code entry

    def set_code(self, value: str) -> SignupSession:
        """Uppercase each keystroke and cap the code at its fixed length."""
        with self._lock:
            session = self._session
            if session.mode is SignupMode.CODE_ENTRY and not session.submitting:
                code = value.upper()[:self.params.code_length]
                self._session = session.with_code(code)
            return self._session

    def submit_code(self) -> SignupSession:
        """Verify the one-time code; navigates to the confirmation page on success."""
        with self._lock:
            session = self._session
            if session.mode is not SignupMode.CODE_ENTRY or session.submitting:
                return session

            code = session.code.upper()
            if len(code) != self.params.code_length:
                return session

            self._session = session.with_submitting()
            email = session.email
            epoch = self._epoch

        try:
            self.api.verify_otp(email, code)
        except ApiError as e:
            with self._lock:
                if self._is_current(epoch, SignupMode.CODE_ENTRY):
                    self._session = self._session.with_error(e.message)
                    state_logger.warning(
                        "Code verification rejected",
                        flow=self.name,
                        error=e.message,
                        status_code=e.status_code
                    )
                return self._session

        with self._lock:
            if not self._is_current(epoch, SignupMode.CODE_ENTRY):
                return self._session
            self._advance(SignupMode.VERIFIED, "code_verified")
            session = self._session

        self.navigate(self.params.confirmation_path)
        return session

    # Lifecycle

    @property
    def enabled(self) -> bool:
        return self._enabled

    def set_enabled(self, enabled: bool) -> None:
        """Gate the flow; disabling also discards the current session."""
        with self._lock:
            self._enabled = enabled
            if not enabled:
                self._reset()

    def reset(self) -> SignupSession:
        """Discard the session, pending timer and any in-flight result."""
        with self._lock:
            self._reset()
            return self._session

    # Internals (callers hold self._lock)

    def _reset(self) -> None:
        self._cancel_abandon_timer()
        self._epoch += 1
        previous = self._session.mode
        self._session = SignupSession()
        if previous is not SignupMode.BUTTON:
            log_state_transition(
                state_logger,
                flow=self.name,
                from_state=previous.value,
                to_state=SignupMode.BUTTON.value,
                trigger="reset",
            )

    def _advance(self, to_mode: SignupMode, trigger: str) -> None:
        from_mode = self._session.mode
        if MODE_ORDER.index(to_mode) <= MODE_ORDER.index(from_mode):
            state_logger.debug(
                "Ignoring backward transition",
                flow=self.name,
                from_state=from_mode.value,
                to_state=to_mode.value,
                trigger=trigger
            )
            return

        self._session = self._session.with_mode(to_mode)
        log_state_transition(
            state_logger,
            flow=self.name,
            from_state=from_mode.value,
            to_state=to_mode.value,
            trigger=trigger,
        )

    def _is_current(self, epoch: int, expected_mode: SignupMode) -> bool:
        return (epoch == self._epoch
                and self._session.mode is expected_mode
                and self._session.submitting)

    def _cancel_abandon_timer(self) -> None:
        if self._abandon_timer is not None:
            self._abandon_timer.cancel()
            self._abandon_timer = None
        self._abandon_token += 1

    def _on_abandon_timeout(self, token: int) -> None:
        with self._lock:
            if token != self._abandon_token:
                return
            self._abandon_timer = None

            session = self._session
            if (session.mode is not SignupMode.EMAIL_ENTRY
                    or session.email.strip()
                    or session.submitting):
                return

            self._session = SignupSession()
            log_state_transition(
                state_logger,
                flow=self.name,
                from_state=SignupMode.EMAIL_ENTRY.value,
                to_state=SignupMode.BUTTON.value,
                trigger="email_abandoned",
                context={"grace_seconds": self.params.abandon_grace_seconds},
            )
