"""
Session Use Cases

Device session lifecycle: open, touch, close, list, terminate, expire.
"""

from .close_session_use_case import CloseSessionUseCase
from .expire_stale_sessions_use_case import ExpireStaleSessionsUseCase
from .list_active_sessions_use_case import ListActiveSessionsUseCase
from .open_session_use_case import OpenSessionUseCase
from .terminate_session_use_case import TerminateSessionUseCase
from .touch_session_use_case import TouchSessionUseCase

__all__ = [
    "CloseSessionUseCase",
    "ExpireStaleSessionsUseCase",
    "ListActiveSessionsUseCase",
    "OpenSessionUseCase",
    "TerminateSessionUseCase",
    "TouchSessionUseCase",
]
