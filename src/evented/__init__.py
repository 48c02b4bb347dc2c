"""
evented

Synchronous in-process event emitter.
"""

from .config import EmitterOptions
from .errors import EmitterError, InvalidArgumentError, InvalidListenerError, SelfEmitError, UnhandledErrorEvent
from .events import EventEmitter, create_emitter
from .listener import Callback, Delegate, DispatchFrame, ListenerRecord

__all__ = [
    "Callback",
    "Delegate",
    "DispatchFrame",
    "EmitterError",
    "EmitterOptions",
    "EventEmitter",
    "InvalidArgumentError",
    "InvalidListenerError",
    "ListenerRecord",
    "SelfEmitError",
    "UnhandledErrorEvent",
    "create_emitter",
]
