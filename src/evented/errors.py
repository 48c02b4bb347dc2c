"""
errors.py

Exceptions raised by the event emitter.
"""


class EmitterError(Exception):
    """Base class for every error raised by evented itself."""


class InvalidListenerError(EmitterError, TypeError):
    """The listener is neither callable nor an emitter."""


class InvalidArgumentError(EmitterError, ValueError):
    """An emitter setting received a value it cannot hold."""


class UnhandledErrorEvent(EmitterError):
    """An ``error`` event was emitted with nobody listening for it."""


class SelfEmitError(EmitterError):
    """An emitter was asked to delegate events to itself."""


__all__ = ["EmitterError", "InvalidArgumentError", "InvalidListenerError", "SelfEmitError", "UnhandledErrorEvent"]
