"""
Coreopts prefix resolver.

resolve(candidate, names) classifies a typed word against an ordered table of
names, the same way for long option names and for enumerated option values:

- Exact(name)             the candidate is one of the names (wins outright)
- UniquePrefix(name)      the candidate is a prefix of exactly one name
- Ambiguous(candidates)   the candidate is a prefix of two or more names
- NoMatch()               nothing starts with the candidate

infer() applies resolve() to an enumerated value and raises the matching fault.
"""
from collections import namedtuple
from collections.abc import Mapping

from .faults import AmbiguousValueError, InvalidValueError

Exact = namedtuple("Exact", ("name",))
UniquePrefix = namedtuple("UniquePrefix", ("name",))
Ambiguous = namedtuple("Ambiguous", ("candidates",))
NoMatch = namedtuple("NoMatch", ())


def resolve(candidate, names, /):
    """
    classify `candidate` against `names` (any iterable of strings, in the
    order candidates should be reported).
    """
    names = tuple(names)
    if candidate in names:
        return Exact(candidate)
    match [name for name in names if name.startswith(candidate)]:
        case []:
            return NoMatch()
        case [name]:
            return UniquePrefix(name)
        case candidates:
            return Ambiguous(tuple(candidates))


def infer(value, choices, /, *, identity=None, input=None):
    """
    resolve an option value against its enumerated `choices` and return the
    member it stands for.

    `choices` is an iterable of names or a mapping of names (aliases included)
    to members; an abbreviation shared only by aliases of one member is not
    ambiguous ("--color=n" is fine when "no" and "never" mean the same).

    raises
    - AmbiguousValueError when `value` abbreviates several members
    - InvalidValueError when no name starts with `value`
    """
    if not isinstance(choices, Mapping):
        choices = {choice: choice for choice in choices}
    hint = "valid arguments are: %s" % ", ".join(map(repr, choices))

    match resolve(value, choices):
        case Exact(name) | UniquePrefix(name):
            return choices[name]
        case Ambiguous(candidates):
            targets = [choices[candidate] for candidate in candidates]
            if all(target == targets[0] for target in targets):
                return targets[0]
            raise AmbiguousValueError(
                "ambiguous argument %r for %r" % (value, input or identity),
                identity=identity,
                input=input,
                value=value,
                candidates=candidates,
                hint=hint,
            )
        case NoMatch():
            raise InvalidValueError(
                "invalid argument %r for %r" % (value, input or identity),
                identity=identity,
                input=input,
                value=value,
                candidates=tuple(choices),
                hint=hint,
            )


__all__ = (
    "Exact",
    "UniquePrefix",
    "Ambiguous",
    "NoMatch",
    "resolve",
    "infer",
)
