"""
Inline early-access signup flow.

Exports the session models and the SignupFlow state machine.
"""

from .machine import SignupFlow, thread_timer
from .models import SignupMode, SignupSession

__all__ = ["SignupFlow", "SignupMode", "SignupSession", "thread_timer"]
