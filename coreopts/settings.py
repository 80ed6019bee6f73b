"""
Coreopts settings reducer.

The parser only reports what was typed; a Reducer says what it means. Each
identity is bound to one handler, and folding the events in order yields the
settings record, so a later event overrides an earlier one ("last wins").

    reducer = Reducer()

    @reducer.on("format", type=str)
    def _(settings, event):
        settings.format = event.value

    @reducer.on("o")
    def _(settings, event):          # one event, several fields
        settings.format = "long"
        settings.owner = True

A handler either mutates the record it receives (returning None) or returns a
replacement, which makes immutable records (namedtuples, frozen dataclasses)
work as well.
"""
import copy
import logging

from .faults import InvalidValueError
from .parser import parse

logger = logging.getLogger(__name__)


class Reducer:
    """
    identity → (handler, converter) table applied by fold().
    """

    def __init__(self):
        self._handlers = {}

    @property
    def identities(self):
        return tuple(self._handlers)

    def on(self, *identities, type=None):
        """
        register the decorated handler for every identity given.

        - type: callable converting the raw value before the handler sees it;
          ValueError/TypeError from it becomes InvalidValueError. None values
          (flags without a default) are never converted.
        """
        if not identities:
            raise TypeError("on() requires at least one identity")
        for identity in identities:
            if not isinstance(identity, str) or not identity:
                raise TypeError("identities must be non-empty strings")
            if identity in self._handlers:
                raise ValueError("identity %r already has a handler" % identity)
        if type is not None and not callable(type):
            raise TypeError("on() 'type' must be callable")

        def decorator(handler):
            if not callable(handler):
                raise TypeError("handler must be callable")
            for identity in identities:
                self._handlers[identity] = handler, type
            return handler

        return decorator

    def apply(self, settings, event, /):
        """
        apply one event and return the resulting settings.
        """
        try:
            handler, type = self._handlers[event.identity]
        except KeyError:
            raise RuntimeError("no handler for identity %r" % event.identity) from None

        if type is not None and event.value is not None:
            try:
                event = event._replace(value=type(event.value))
            except (ValueError, TypeError) as error:
                raise InvalidValueError(
                    "invalid argument %r for %r" % (event.value, event.input or event.identity),
                    identity=event.identity,
                    input=event.input,
                    value=event.value,
                    hint=str(error),
                ) from error

        result = handler(settings, event)
        return settings if result is None else result

    def fold(self, initial, events, /):
        """
        apply `events` in order to a deep copy of `initial`; `initial` itself is
        never touched, so a fault leaves nothing half-updated behind.
        """
        settings = copy.deepcopy(initial)
        for event in events:
            settings = self.apply(settings, event)
        return settings


def fold(initial, events, reducer, /):
    return reducer.fold(initial, events)


class Utility:
    """
    one command: its spec, its reducer and the factory of its default settings.

    parse(args) → (settings, trailing)
    """

    def __init__(self, spec, reducer, factory, /, *, name=None):
        if not callable(factory):
            raise TypeError("utility 'factory' must be callable")
        if not isinstance(reducer, Reducer):
            raise TypeError("utility 'reducer' must be a reducer")
        self.spec = spec
        self.reducer = reducer
        self.factory = factory
        self.name = name

    def parse(self, args, /):
        parsed = parse(self.spec, args)
        settings = self.reducer.fold(self.factory(), parsed.events)
        logger.debug("%s settings: %r", self.name or "utility", settings)
        return settings, parsed.trailing

    def __repr__(self):
        return "Utility(%s)" % (self.name or "")


__all__ = (
    "Reducer",
    "fold",
    "Utility",
)
