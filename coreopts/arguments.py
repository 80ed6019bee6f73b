r"""
Coreopts argument specifications (the spec model).

Overview
- Spelling: one textual form of an option, written in the GNU help grammar.
  • "-v", "--verbose"              → no value
  • "-n NUM", "--lines=NUM"        → required value
  • "-p[DIR]", "--tmpdir[=DIR]"    → optional value
  • "---presume-input-pipe"        → hidden (matched, never listed)
- Option: one logical option; an identity (the key carried by emitted events)
  plus any number of spellings, each with its own value arity and default.
- Exactly / Range / AtLeast: operand slot arities.
- Operand: one positional slot (identity, arity, metavar, greedy).
- DeprecatedNumeric: `-N` / `+N` shorthand bound to an option identity.
- Spec: the immutable table for one utility, validated once at construction.

Introspection
- SpecType metaclass exposes the fields listed in __introspectable__ as read-only
  properties (containers come back as immutable views) and provides stable
  __repr__/__rich_repr__ implementations for diagnostics.

Validation
- Construction problems are programming errors: TypeError for wrong kinds and
  shapes, ValueError for bad contents. They never surface as parse faults.
"""
import functools
import operator
import re
from collections.abc import Iterable, Mapping
from enum import Enum
from types import MappingProxyType

from .utils import *


class Value(Enum):
    """
    value arity of one spelling.
    """
    NONE = "none"
    REQUIRED = "required"
    OPTIONAL = "optional"


class SpecType(type):
    """
    Metaclass giving spec classes read-only mirrored fields and stable reprs.

    - __typename__ is the class name split on camel case with hyphens, lowercased.
    - every name in __introspectable__ becomes a property over self._<name>.
    - __displayable__ (when set) narrows the fields shown by __rich_repr__.
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({', '.join(map(functools.partial(operator.mod, '%s=%r'), self.__rich_repr__()))})"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


# "--name", "---name", "--name=VAL", "--name[=VAL]"
_LONG = re.compile(r"(?P<flag>--(?P<hidden>-)?(?P<name>[^\W_][\w-]*))(?:=(?P<required>\S+)|\[=(?P<optional>\S+)\])?")
# "-x", "-x VAL", "-x[VAL]"
_SHORT = re.compile(r"(?P<flag>-(?P<name>[^\s=\[\]-]))(?: (?P<required>\S+)|\[(?P<optional>\S+)\])?")


class Spelling(metaclass=SpecType):
    """
    One spelling of an option.

    The arity normally comes from how the spelling is written. It may be given
    explicitly instead (Spelling("-p", Value.REQUIRED, "DIR")), in which case a
    value-taking arity needs a metavar, the same way the written form needs one.

    Fields
    - flag: the spelling without value syntax ("-p", "--tmpdir", "---presume-input-pipe")
    - name: what follows the leading "--" for long spellings ("tmpdir",
      "-presume-input-pipe"), the single character for short ones
    - long / hidden: kind of spelling
    - arity: Value.NONE | Value.REQUIRED | Value.OPTIONAL
    - metavar: value label for listings (None without a value)
    - default: value used when the spelling is given without one (Unset if none)
    """

    __introspectable__ = (
        "flag",
        "name",
        "long",
        "hidden",
        "arity",
        "metavar",
        "default",
    )

    __displayable__ = (
        "flag",
        "arity",
        "metavar",
    )

    def __init__(self, source, /, arity=Unset, metavar=Unset, *, default=Unset):
        if not isinstance(source, str):
            raise TypeError(f"{type(self).__typename__} must be a string")
        if not (source := source.strip()):
            raise ValueError(f"{type(self).__typename__} cannot be empty")

        match = _LONG.fullmatch(source) if source.startswith("--") else _SHORT.fullmatch(source)
        if not match:
            raise ValueError(f"{type(self).__typename__} {source!r} is not a valid option spelling")

        if match["required"]:
            written, label = Value.REQUIRED, match["required"]
        elif match["optional"]:
            written, label = Value.OPTIONAL, match["optional"]
        else:
            written, label = Value.NONE, Unset

        if arity is not Unset:
            if not isinstance(arity, Value):
                raise TypeError(f"{type(self).__typename__} 'arity' must be a value arity")
            if written is not Value.NONE and arity is not written:
                raise ValueError(f"{type(self).__typename__} {source!r} is written as {written.value}, not {arity.value}")
        if metavar is not Unset:
            if not isinstance(metavar, str):
                raise TypeError(f"{type(self).__typename__} 'metavar' must be a string")
            if not (metavar := metavar.strip()):
                raise ValueError(f"{type(self).__typename__} 'metavar' cannot be empty")
            if label:
                raise ValueError(f"{type(self).__typename__} {source!r} already names its value")
            label = metavar

        arity = coalesce(arity, written)
        if arity is not Value.NONE and not label:
            raise TypeError(f"{type(self).__typename__} {source!r} takes a value but declares no value syntax")
        if arity is Value.NONE and label:
            raise TypeError(f"{type(self).__typename__} {source!r} declares a value but takes none")

        self._flag = match["flag"]
        self._name = ("-" if match["name"] and source.startswith("---") else "") + match["name"]
        self._long = source.startswith("--")
        self._hidden = bool(self._long and match["hidden"])
        self._arity = arity
        self._metavar = coalesce(label)
        self._default = default

    def __str__(self):
        match self.arity, self.long:
            case Value.NONE, _:
                return self.flag
            case Value.REQUIRED, True:
                return f"{self.flag}={self.metavar}"
            case Value.REQUIRED, False:
                return f"{self.flag} {self.metavar}"
            case Value.OPTIONAL, True:
                return f"{self.flag}[={self.metavar}]"
            case Value.OPTIONAL, False:
                return f"{self.flag}[{self.metavar}]"


class Option(metaclass=SpecType):
    """
    One logical option.

    Parameters
    - identity: str, the key carried by every event this option produces
    - spellings: str | Spelling, at least one
    - choices: Iterable[str] | Mapping[str, object], the enumerated value set
      (resolved by unambiguous prefix); a mapping lists aliases, each name
      standing for its target, and names sharing a target never clash; empty
      when any value is accepted
    - default: value for spellings given without a value and carrying no default
      of their own (Unset: the event value is None)
    - descr: short description for the external help generator

    The same option may require a value on one spelling and refuse one on
    another (ls: "--sort=WORD" next to "-t" meaning --sort=time).
    """

    __introspectable__ = (
        "identity",
        "spellings",
        "choices",
        "default",
        "descr",
    )

    __displayable__ = (
        "identity",
        "spellings",
        "choices",
    )

    def __init__(self, identity, /, *spellings, choices=(), default=Unset, descr=Unset):
        if not isinstance(identity, str):
            raise TypeError(f"{type(self).__typename__} identity must be a string")
        if not (identity := identity.strip()):
            raise ValueError(f"{type(self).__typename__} identity cannot be empty")
        if not spellings:
            raise TypeError(f"{type(self).__typename__} {identity!r} must specify at least one spelling")

        sanitized = []
        for spelling in spellings:
            if isinstance(spelling, str):
                spelling = Spelling(spelling)
            elif not isinstance(spelling, Spelling):
                raise TypeError(f"{type(self).__typename__} {identity!r} spellings must be strings or spellings")
            if spelling.flag in (other.flag for other in sanitized):
                raise ValueError(f"{type(self).__typename__} {identity!r} spellings cannot contain duplicates")
            sanitized.append(spelling)

        if isinstance(choices, str) or not isinstance(choices, Iterable):
            raise TypeError(f"{type(self).__typename__} {identity!r} 'choices' must be an iterable of strings")
        members = {}
        for choice in choices:
            if not isinstance(choice, str):
                raise TypeError(f"{type(self).__typename__} {identity!r} 'choices' must be an iterable of strings")
            if not choice:
                raise ValueError(f"{type(self).__typename__} {identity!r} 'choices' cannot contain empty strings")
            if choice in members:
                raise ValueError(f"{type(self).__typename__} {identity!r} 'choices' cannot contain duplicates")
            # aliases ({"yes": "always", "always": "always"}) resolve to their target
            members[choice] = choices[choice] if isinstance(choices, Mapping) else choice

        if descr is not Unset and not isinstance(descr, str):
            raise TypeError(f"{type(self).__typename__} {identity!r} 'descr' must be a string")

        self._identity = identity
        self._spellings = tuple(sanitized)
        self._choices = MappingProxyType(members)
        self._default = default
        self._descr = coalesce(descr)

    @property
    def takes_value(self):
        return any(spelling.arity is not Value.NONE for spelling in self._spellings)

    def default_for(self, spelling, /):
        """
        value emitted when `spelling` appears without a value (None when neither
        the spelling nor the option declares one).
        """
        return coalesce(spelling.default, coalesce(self._default))


class Arity:
    """
    operand slot arity: `minimum` tokens, at most `maximum` (None: unbounded).
    """
    __slots__ = ("minimum", "maximum")

    def __init__(self, minimum, maximum):
        object.__setattr__(self, "minimum", minimum)
        object.__setattr__(self, "maximum", maximum)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    @property
    def bounded(self):
        return self.maximum is not None

    def __eq__(self, other):
        if not isinstance(other, Arity):
            return NotImplemented
        return (self.minimum, self.maximum) == (other.minimum, other.maximum)

    def __hash__(self):
        return hash((self.minimum, self.maximum))


def _count(kind, name, value, lowest):
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{kind} {name!r} must be an integer")
    if value < lowest:
        raise ValueError(f"{kind} {name!r} must be at least {lowest}")
    return value


class Exactly(Arity):
    __slots__ = ()

    def __init__(self, count, /):
        count = _count("exactly", "count", count, 1)
        super().__init__(count, count)

    def __repr__(self):
        return f"Exactly({self.minimum})"


class Range(Arity):
    __slots__ = ()

    def __init__(self, minimum, maximum, /):
        minimum = _count("range", "minimum", minimum, 0)
        maximum = _count("range", "maximum", maximum, max(minimum, 1))
        super().__init__(minimum, maximum)

    def __repr__(self):
        return f"Range({self.minimum}, {self.maximum})"


class AtLeast(Arity):
    __slots__ = ()

    def __init__(self, minimum=0, /):
        super().__init__(_count("at-least", "minimum", minimum, 0), None)

    def __repr__(self):
        return f"AtLeast({self.minimum})"


class Operand(metaclass=SpecType):
    """
    One positional slot.

    Parameters
    - identity: str, the key carried by events for tokens of this slot
    - arity: Arity | int (an int n stands for Exactly(n)); defaults to Exactly(1)
    - metavar: label used in listings and missing-operand faults (defaults to
      the uppercased identity)
    - greedy: once the slot receives its first token, every remaining argument
      goes to it verbatim and option scanning stops; the arity must be unbounded
    """

    __introspectable__ = (
        "identity",
        "arity",
        "metavar",
        "greedy",
    )

    def __init__(self, identity, arity=Unset, /, metavar=Unset, *, greedy=False):
        if not isinstance(identity, str):
            raise TypeError(f"{type(self).__typename__} identity must be a string")
        if not (identity := identity.strip()):
            raise ValueError(f"{type(self).__typename__} identity cannot be empty")

        arity = coalesce(arity, 1)
        if isinstance(arity, int) and not isinstance(arity, bool):
            arity = Exactly(arity)
        if not isinstance(arity, Arity):
            raise TypeError(f"{type(self).__typename__} {identity!r} 'arity' must be an arity or an integer")
        if greedy and arity.bounded:
            raise ValueError(f"greedy {type(self).__typename__} {identity!r} must have an unbounded arity")

        if metavar is not Unset:
            if not isinstance(metavar, str):
                raise TypeError(f"{type(self).__typename__} {identity!r} 'metavar' must be a string")
            if not (metavar := metavar.strip()):
                raise ValueError(f"{type(self).__typename__} {identity!r} 'metavar' cannot be empty")

        self._identity = identity
        self._arity = arity
        self._metavar = coalesce(metavar, identity.upper())
        self._greedy = bool(greedy)


class DeprecatedNumeric(metaclass=SpecType):
    """
    Legacy numeric shorthand: "-N" or "+N" standing for an option.

    Parameters
    - sign: "-" or "+"
    - identity: identity of the events produced for the shorthand
    - suffixes: letters allowed right after the digits (tail: "-100cf")
    - transform: callable(digits, suffix) building the event value; by default
      the digits followed by the suffix
    - leading: only recognized as the first argument (head/tail obsolete usage)
    """

    __introspectable__ = (
        "sign",
        "identity",
        "suffixes",
        "leading",
    )

    def __init__(self, sign, identity, /, suffixes="", transform=Unset, *, leading=False):
        if sign not in ("-", "+"):
            raise ValueError(f"{type(self).__typename__} 'sign' must be '-' or '+'")
        if not isinstance(identity, str) or not identity.strip():
            raise TypeError(f"{type(self).__typename__} identity must be a non-empty string")
        if not isinstance(suffixes, str) or not all(char.isalpha() for char in suffixes):
            raise ValueError(f"{type(self).__typename__} 'suffixes' must be a string of letters")
        if transform is not Unset and not callable(transform):
            raise TypeError(f"{type(self).__typename__} 'transform' must be callable")

        self._sign = sign
        self._identity = identity.strip()
        self._suffixes = suffixes
        self._leading = bool(leading)
        self._transform = transform
        self._pattern = re.compile(
            re.escape(sign) + r"(?P<digits>[0-9]+)" + (f"(?P<suffix>[{re.escape(suffixes)}]*)" if suffixes else "(?P<suffix>)")
        )

    def match(self, raw, /):
        """
        return (digits, suffix) when `raw` is this shorthand, otherwise None.
        """
        if match := self._pattern.fullmatch(raw):
            return match["digits"], match["suffix"]
        return None

    def value(self, digits, suffix, /):
        if self._transform is Unset:
            return digits + suffix
        return self._transform(digits, suffix)


_STANDARD = (
    ("help", "--help", "display this help and exit"),
    ("version", "--version", "output version information and exit"),
)


class Spec(metaclass=SpecType):
    """
    Immutable argument table for one utility.

    Parameters
    - options: Iterable[Option]
    - operands: Iterable[Operand], in positional order
    - numerics: Iterable[DeprecatedNumeric], at most one per sign
    - interleave: options may follow operands (GNU permutation); when False the
      first free value ends option scanning
    - prefer_numeric: "-5" is the numeric shorthand even when "5" is a short option
    - standard: add the GNU --help and --version options (identities "help" and
      "version")

    Lookup tables
    - longs: long name (without the leading "--") → (option, spelling), in
      declaration order; hidden names keep their extra hyphen.
    - shorts: character → (option, spelling).
    """

    __introspectable__ = (
        "options",
        "operands",
        "numerics",
        "interleave",
        "prefer_numeric",
        "longs",
        "shorts",
    )

    __displayable__ = (
        "options",
        "operands",
        "numerics",
        "interleave",
        "prefer_numeric",
    )

    def __init__(self, options=(), operands=(), numerics=(), *, interleave=True, prefer_numeric=False, standard=False):
        options = self._sanitize(options, Option, "options")
        operands = self._sanitize(operands, Operand, "operands")
        numerics = self._sanitize(numerics, DeprecatedNumeric, "numerics")

        longs = {}
        shorts = {}
        identities = set()

        def register(option):
            if option.identity in identities:
                raise ValueError(f"{type(self).__typename__} identity {option.identity!r} is already in use")
            identities.add(option.identity)
            for spelling in option.spellings:
                table = longs if spelling.long else shorts
                if spelling.name in table:
                    raise ValueError(f"{type(self).__typename__} spelling {spelling.flag!r} is already in use")
                table[spelling.name] = option, spelling

        for option in options:
            register(option)

        if standard:
            for identity, flag, descr in _STANDARD:
                if identity not in identities and flag[2:] not in longs:
                    register(option := Option(identity, flag, descr=descr))
                    options.append(option)

        for operand in operands:
            if operand.identity in identities:
                raise ValueError(f"{type(self).__typename__} identity {operand.identity!r} is already in use")
            identities.add(operand.identity)

        self._check_operands(operands)

        signs = [numeric.sign for numeric in numerics]
        if len(set(signs)) != len(signs):
            raise ValueError(f"{type(self).__typename__} allows one numeric shorthand per sign")

        self._options = tuple(options)
        self._operands = tuple(operands)
        self._numerics = tuple(numerics)
        self._interleave = bool(interleave)
        self._prefer_numeric = bool(prefer_numeric)
        self._longs = MappingProxyType(longs)
        self._shorts = MappingProxyType(shorts)

    def _sanitize(self, objects, kind, name):
        if isinstance(objects, str) or not isinstance(objects, Iterable):
            raise TypeError(f"{type(self).__typename__} {name!r} must be an iterable")
        objects = list(objects)
        for object in objects:
            if not isinstance(object, kind):
                raise TypeError(f"{type(self).__typename__} {name!r} must contain only {kind.__typename__}s")
        return objects

    def _check_operands(self, operands):
        unbounded = None
        for index, operand in enumerate(operands):
            if operand.greedy:
                if index != len(operands) - 1:
                    raise TypeError(f"greedy operand {operand.identity!r} must be the last operand")
                if unbounded is not None:
                    raise ValueError(f"operand {unbounded!r} is unbounded and precedes greedy operand {operand.identity!r}")
            if isinstance(operand.arity, Exactly):
                unbounded = None
            elif not operand.arity.bounded:
                if unbounded is not None:
                    raise ValueError(f"operands {unbounded!r} and {operand.identity!r} are both unbounded with no fixed operand between them")
                unbounded = operand.identity

    @property
    def greedy(self):
        """
        (count, operand): the greedy operand and how many free values precede it,
        or None when the last operand is not greedy.
        """
        if not self._operands or not self._operands[-1].greedy:
            return None
        count = 0
        for operand in self._operands[:-1]:
            count += operand.arity.maximum
        return count, self._operands[-1]

    def numeric(self, sign, /):
        for numeric in self._numerics:
            if numeric.sign == sign:
                return numeric
        return None

    def listing(self):
        """
        (option, visible spellings) pairs for help generation; hidden spellings
        are left out, and so are options with nothing left to show.
        """
        listing = []
        for option in self._options:
            if spellings := tuple(spelling for spelling in option.spellings if not spelling.hidden):
                listing.append((option, spellings))
        return listing


__all__ = (
    "Value",
    "Spelling",
    "Option",
    "Arity",
    "Exactly",
    "Range",
    "AtLeast",
    "Operand",
    "DeprecatedNumeric",
    "Spec",
)

# The metaclass is an implementation detail; keep it out of star-imports and docs.
del SpecType
