"""
Coreopts option matcher.

parse(spec, args) runs the scanning loop over one argument list:

- long options are resolved by exact name or unambiguous prefix; the value
  rules follow the arity of the resolved spelling
  • REQUIRED: inline "=value" (even empty), else the next argument verbatim
  • OPTIONAL: inline "=value" only; the next argument is never taken
  • NONE:     an inline value is an error
- short clusters are walked left to right; no-value characters emit and the
  walk continues, the first value-taking character ends the cluster
  • REQUIRED: the rest of the cluster (one leading "=" dropped), else the next
    argument verbatim
  • OPTIONAL: the rest of the cluster only
- enumerated values go through the same prefix resolution as option names
- numeric shorthands become events of their bound identity
- free values are collected for the positional allocator; once the greedy
  operand is reached, everything left is captured verbatim

Options are emitted in input order, repeats included; deciding who wins is the
reducer's job. Operand events follow, in slot order. The first fault raised
aborts the parse.
"""
import logging
from collections import namedtuple

from .arguments import Value
from .faults import (
    AmbiguousOptionError,
    InvalidValueError,
    MissingRequiredValueError,
    UnexpectedValueError,
    UnknownOptionError,
)
from .operands import allocate
from .prefixes import Ambiguous, Exact, NoMatch, UniquePrefix, infer, resolve
from .tokens import FreeValue, Lexer, LongOption, Numeric, ShortCluster, Terminator

logger = logging.getLogger(__name__)

ArgEvent = namedtuple("ArgEvent", ("identity", "value", "input"), defaults=(None, None))
Parsed = namedtuple("Parsed", ("events", "trailing"))


def _value(option, spelling, value):
    # user-supplied values are resolved, defaults are taken as declared
    if value is None:
        return option.default_for(spelling)
    if option.choices:
        return infer(value, option.choices, identity=option.identity, input=spelling.flag)
    return value


def _long(spec, token, lexer):
    flag = "--" + token.name

    match resolve(token.name, spec.longs) if token.name else NoMatch():
        case Exact(name) | UniquePrefix(name):
            option, spelling = spec.longs[name]
        case Ambiguous(candidates):
            candidates = tuple("--" + candidate for candidate in candidates)
            raise AmbiguousOptionError(
                "option %r is ambiguous; possibilities: %s" % (flag, " ".join(map(repr, candidates))),
                input=flag,
                candidates=candidates,
                hint="type more of the option name to tell them apart",
            )
        case NoMatch():
            raise UnknownOptionError(
                "unrecognized option %r" % flag,
                input=flag,
                hint="try '--help' for the list of options",
            )

    value = token.value
    match spelling.arity:
        case Value.NONE if value is not None:
            raise UnexpectedValueError(
                "option %r doesn't allow an argument" % spelling.flag,
                identity=option.identity,
                input=spelling.flag,
                value=value,
                hint="remove '=%s'" % value,
            )
        case Value.REQUIRED if value is None:
            if (value := lexer.take()) is None:
                raise MissingRequiredValueError(
                    "option %r requires an argument" % spelling.flag,
                    identity=option.identity,
                    input=spelling.flag,
                    hint="pass a value: %s" % spelling,
                )

    return ArgEvent(option.identity, _value(option, spelling, value), spelling.flag)


def _short(spec, token, lexer):
    for index, char in enumerate(token.chars):
        try:
            option, spelling = spec.shorts[char]
        except KeyError:
            raise UnknownOptionError(
                "invalid option -- %r" % char,
                input="-" + char,
                hint="try '--help' for the list of options",
            ) from None

        rest = token.chars[index + 1:]
        match spelling.arity:
            case Value.NONE:
                yield ArgEvent(option.identity, option.default_for(spelling), spelling.flag)
                continue
            case Value.REQUIRED:
                if rest:
                    value = rest.removeprefix("=")
                elif (value := lexer.take()) is None:
                    raise MissingRequiredValueError(
                        "option requires an argument -- %r" % char,
                        identity=option.identity,
                        input=spelling.flag,
                        hint="pass a value: %s" % spelling,
                    )
            case Value.OPTIONAL:
                value = rest.removeprefix("=") if rest else None

        yield ArgEvent(option.identity, _value(option, spelling, value), spelling.flag)
        return


def parse(spec, args, /):
    """
    match `args` (the argument vector without the program name) against `spec`.

    returns Parsed(events, trailing): every event in order, and the verbatim
    greedy capture (empty when the spec has no greedy operand or it got nothing).
    """
    lexer = Lexer(args, spec)
    greedy = spec.greedy
    events = []
    free = []
    trailing = ()

    for token in lexer:
        match token:
            case Terminator():
                logger.debug("terminator at argument %d", lexer.index)
            case FreeValue(value):
                if greedy is not None and len(free) == greedy[0]:
                    trailing = (value, *lexer.drain())
                    logger.debug("greedy operand %s captures %r", greedy[1].identity, trailing)
                    free.extend(trailing)
                    break
                free.append(value)
                if not spec.interleave:
                    lexer.terminate()
            case LongOption():
                events.append(_long(spec, token, lexer))
            case ShortCluster():
                events.extend(_short(spec, token, lexer))
            case Numeric(binding, digits, suffix, raw):
                try:
                    value = binding.value(digits, suffix)
                except (ValueError, TypeError) as error:
                    raise InvalidValueError(
                        "invalid number %r" % raw,
                        identity=binding.identity,
                        input=raw,
                        value=raw,
                        hint=str(error),
                    ) from error
                events.append(ArgEvent(binding.identity, value, raw))

    for event in events:
        logger.debug("option %s=%r (%s)", *event)

    for operand, values in allocate(spec.operands, free):
        events.extend(ArgEvent(operand.identity, value, operand.metavar) for value in values)

    return Parsed(tuple(events), trailing)


__all__ = (
    "ArgEvent",
    "Parsed",
    "parse",
)
