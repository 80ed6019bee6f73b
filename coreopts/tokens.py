"""
Coreopts tokenizer.

Splits raw argument strings into tokens, lazily and in a single pass:

    "--"            → Terminator
    "--name[=v]"    → LongOption        (also "---name", hidden spellings)
    "-abc"          → ShortCluster
    "-20", "+5"     → Numeric           (only through a DeprecatedNumeric binding)
    anything else   → FreeValue         ("-", "-5" without a binding, "file", ...)

After the terminator every argument is a FreeValue. The lexer owns the pending
raw arguments, so the matcher can pull the next one verbatim (a required option
value) or drain the rest (a greedy operand) without them being classified.
"""
from collections import deque, namedtuple

ShortCluster = namedtuple("ShortCluster", ("chars", "raw"))
LongOption = namedtuple("LongOption", ("name", "value", "raw"))
FreeValue = namedtuple("FreeValue", ("value",))
Numeric = namedtuple("Numeric", ("binding", "digits", "suffix", "raw"))
Terminator = namedtuple("Terminator", ())


class Lexer:
    """
    token stream over one argument list.

    - index: number of raw arguments consumed so far
    - terminated: True once "--" was seen (or terminate() was called); every
      later argument is a FreeValue
    """

    def __init__(self, args, spec, /):
        self._args = deque(args)
        self._spec = spec
        self._index = 0
        self._terminated = False

        for arg in self._args:
            if not isinstance(arg, str):
                raise TypeError("arguments must be strings")

    @property
    def index(self):
        return self._index

    @property
    def terminated(self):
        return self._terminated

    def __iter__(self):
        return self

    def __next__(self):
        if not self._args:
            raise StopIteration
        first = self._index == 0
        arg = self._args.popleft()
        self._index += 1

        if self._terminated:
            return FreeValue(arg)
        if arg == "--":
            self._terminated = True
            return Terminator()
        if arg.startswith("--"):
            name, sep, value = arg[2:].partition("=")
            return LongOption(name, value if sep else None, arg)
        if token := self._numeric(arg, first):
            return token
        if arg.startswith("-") and len(arg) > 1:
            if arg[1].isdigit() and arg[1] not in self._spec.shorts:
                return FreeValue(arg)
            return ShortCluster(arg[1:], arg)
        return FreeValue(arg)

    def _numeric(self, arg, first):
        if not arg or (binding := self._spec.numeric(arg[0])) is None:
            return None
        if binding.leading and not first:
            return None
        if binding.sign == "-" and len(arg) > 1 and arg[1] in self._spec.shorts and not self._spec.prefer_numeric:
            return None
        if match := binding.match(arg):
            return Numeric(binding, *match, arg)
        return None

    def take(self):
        """
        next raw argument, verbatim, or None when the input is exhausted.
        """
        if not self._args:
            return None
        self._index += 1
        return self._args.popleft()

    def drain(self):
        """
        every remaining raw argument, verbatim.
        """
        rest = tuple(self._args)
        self._index += len(rest)
        self._args.clear()
        return rest

    def terminate(self):
        """
        stop recognizing options; later arguments are free values.
        """
        self._terminated = True


__all__ = (
    "ShortCluster",
    "LongOption",
    "FreeValue",
    "Numeric",
    "Terminator",
    "Lexer",
)
