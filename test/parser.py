# python
"""
Option matcher behavioral tests.

Scope
- Long options: exact and abbreviated names, ambiguity, unknown names, value
  rules per spelling arity (required, optional, none), hidden spellings.
- Short clusters: flag runs, value remainder, next-argument values, optional
  values, unknown characters.
- Enumerated values: prefix inference and its faults.
- Numeric shorthands, free values, interleaving, the terminator and greedy
  operands.
- Event order: options in input order (repeats kept), then operands.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from coreopts import (
    AmbiguousOptionError,
    AmbiguousValueError,
    ArgEvent,
    AtLeast,
    DeprecatedNumeric,
    ExcessOperandError,
    InvalidValueError,
    MissingOperandError,
    MissingRequiredValueError,
    Operand,
    Option,
    Range,
    Spec,
    Spelling,
    UnexpectedValueError,
    UnknownOptionError,
    parse,
)


def pairs(spec, *args):
    return [(event.identity, event.value) for event in parse(spec, args).events]


class TestLongOptions(TestCase):
    """Long option resolution and values."""

    def setUp(self):
        self.spec = Spec(
            [
                Option("lines", "-n NUM", "--lines=NUM"),
                Option("follow", "-f", "--follow[=HOW]", choices=("descriptor", "name"), default="descriptor"),
                Option("verbose", "-v", "--verbose"),
                Option("version", "--version"),
                Option("pipe", "---presume-input-pipe"),
                Option("deref", "--dereference"),
                Option("deref-args", "--dereference-command-line"),
                Option("deref-dir-args", "--dereference-command-line-symlink-to-dir"),
            ],
            [Operand("files", AtLeast(0), "FILE")],
        )

    def testExactName(self):
        self.assertEqual(pairs(self.spec, "--verbose"), [("verbose", None)])

    def testUnambiguousPrefixesBehaveLikeFullName(self):
        for end in range(len("li"), len("lines") + 1):
            prefix = "--" + "lines"[:end]
            with self.subTest(prefix=prefix):
                self.assertEqual(pairs(self.spec, prefix + "=5"), [("lines", "5")])
                self.assertEqual(pairs(self.spec, prefix, "5"), [("lines", "5")])

    def testSharedPrefixIsAmbiguous(self):
        with self.assertRaises(AmbiguousOptionError) as context:
            parse(self.spec, ["--ver"])
        self.assertEqual(context.exception.candidates, ("--verbose", "--version"))
        self.assertEqual(context.exception.input, "--ver")

    def testExactNameWinsOverLongerNames(self):
        self.assertEqual(pairs(self.spec, "--dereference"), [("deref", None)])
        self.assertEqual(pairs(self.spec, "--dereference-command-line"), [("deref-args", None)])
        with self.assertRaises(AmbiguousOptionError):
            parse(self.spec, ["--dereference-c"])

    def testUnknownName(self):
        with self.assertRaises(UnknownOptionError) as context:
            parse(self.spec, ["--frobnicate"])
        self.assertEqual(context.exception.input, "--frobnicate")

    def testEmptyNameIsUnknown(self):
        with self.assertRaises(UnknownOptionError):
            parse(self.spec, ["--=x"])

    def testHiddenSpellingMatches(self):
        self.assertEqual(pairs(self.spec, "---presume-input-pipe"), [("pipe", None)])
        self.assertEqual(pairs(self.spec, "---presume"), [("pipe", None)])

    def testRequiredTakesNextArgumentVerbatim(self):
        self.assertEqual(pairs(self.spec, "--lines", "--verbose"), [("lines", "--verbose")])
        self.assertEqual(pairs(self.spec, "--lines", "--"), [("lines", "--")])

    def testRequiredEmptyInlineValue(self):
        self.assertEqual(pairs(self.spec, "--lines="), [("lines", "")])

    def testRequiredMissing(self):
        with self.assertRaises(MissingRequiredValueError) as context:
            parse(self.spec, ["--lines"])
        self.assertEqual(context.exception.identity, "lines")
        self.assertEqual(context.exception.input, "--lines")

    def testOptionalNeverTakesNextArgument(self):
        self.assertEqual(pairs(self.spec, "--follow", "name"), [("follow", "descriptor"), ("files", "name")])

    def testOptionalInlineValue(self):
        self.assertEqual(pairs(self.spec, "--follow=name"), [("follow", "name")])
        self.assertEqual(pairs(self.spec, "--fo=n"), [("follow", "name")])

    def testNoValueRejectsInline(self):
        with self.assertRaises(UnexpectedValueError) as context:
            parse(self.spec, ["--verbose=yes"])
        self.assertEqual(context.exception.value, "yes")

    def testEventInputIsResolvedSpelling(self):
        event, = parse(self.spec, ["--li=3"]).events
        self.assertEqual(event, ArgEvent("lines", "3", "--lines"))


class TestShortOptions(TestCase):
    """Short clusters."""

    def setUp(self):
        self.spec = Spec(
            [
                Option("t", "-t"),
                Option("v", "-v"),
                Option("tmpdir", "-p DIR", "--tmpdir[=DIR]", default="."),
                Option("indent", "-i[WIDTH]", default="4"),
                Option("mode", "-m MODE", choices=("long", "link", "deck", "desk")),
            ],
            [Operand("files", AtLeast(0), "FILE")],
        )

    def testClusterEqualsSeparateFlags(self):
        self.assertEqual(parse(self.spec, ["-tv"]).events, parse(self.spec, ["-t", "-v"]).events)
        self.assertEqual(pairs(self.spec, "-tv"), [("t", None), ("v", None)])

    def testRemainderIsValue(self):
        self.assertEqual(pairs(self.spec, "-pfoo"), [("tmpdir", "foo")])
        self.assertEqual(pairs(self.spec, "-tvpfoo"), [("t", None), ("v", None), ("tmpdir", "foo")])

    def testRemainderDropsOneEquals(self):
        self.assertEqual(pairs(self.spec, "-p=foo"), [("tmpdir", "foo")])
        self.assertEqual(pairs(self.spec, "-p==foo"), [("tmpdir", "=foo")])

    def testRequiredTakesNextArgument(self):
        self.assertEqual(pairs(self.spec, "-p", "-t"), [("tmpdir", "-t")])
        self.assertEqual(pairs(self.spec, "-p", ""), [("tmpdir", "")])

    def testRequiredMissing(self):
        with self.assertRaises(MissingRequiredValueError) as context:
            parse(self.spec, ["-tp"])
        self.assertEqual(context.exception.input, "-p")

    def testOptionalOnlyFromCluster(self):
        self.assertEqual(pairs(self.spec, "-i8"), [("indent", "8")])
        self.assertEqual(pairs(self.spec, "-i", "8"), [("indent", "4"), ("files", "8")])

    def testUnknownCharacter(self):
        with self.assertRaises(UnknownOptionError) as context:
            parse(self.spec, ["-tx"])
        self.assertEqual(context.exception.input, "-x")

    def testShortValueChoices(self):
        self.assertEqual(pairs(self.spec, "-mlo"), [("mode", "long")])
        self.assertEqual(pairs(self.spec, "-m", "dec"), [("mode", "deck")])
        with self.assertRaises(AmbiguousValueError):
            parse(self.spec, ["-ml"])
        with self.assertRaises(InvalidValueError):
            parse(self.spec, ["-mx"])


class TestSpellingValues(TestCase):
    """Per-spelling defaults and arities of one option."""

    def setUp(self):
        self.spec = Spec([
            Option("sort", "--sort=WORD", Spelling("-t", default="time"), Spelling("-U", default="none"), choices=("none", "time", "size")),
            Option("classify", "-F", "--classify[=WHEN]", choices=("always", "auto", "never"), default="always"),
        ])

    def testNoValueSpellingCarriesDefault(self):
        self.assertEqual(pairs(self.spec, "-t"), [("sort", "time")])
        self.assertEqual(pairs(self.spec, "-tU"), [("sort", "time"), ("sort", "none")])

    def testValueSpellingResolvesChoice(self):
        self.assertEqual(pairs(self.spec, "--sort=s"), [("sort", "size")])
        self.assertEqual(pairs(self.spec, "--so", "t"), [("sort", "time")])

    def testOptionWideDefault(self):
        self.assertEqual(pairs(self.spec, "-F"), [("classify", "always")])
        self.assertEqual(pairs(self.spec, "--classify"), [("classify", "always")])
        self.assertEqual(pairs(self.spec, "--classify=n"), [("classify", "never")])

    def testEnumeratedValueFaults(self):
        with self.assertRaises(AmbiguousValueError) as context:
            parse(self.spec, ["--classify=a"])
        self.assertEqual(context.exception.candidates, ("always", "auto"))
        with self.assertRaises(InvalidValueError):
            parse(self.spec, ["--sort=random"])


class TestScanning(TestCase):
    """Free values, interleaving, the terminator and numeric shorthands."""

    def testOptionsAfterOperands(self):
        spec = Spec([Option("v", "-v")], [Operand("files", AtLeast(0))])
        self.assertEqual(pairs(spec, "a", "-v", "b"), [("v", None), ("files", "a"), ("files", "b")])

    def testNoInterleaving(self):
        spec = Spec([Option("v", "-v")], [Operand("files", AtLeast(0))], interleave=False)
        self.assertEqual(pairs(spec, "-v", "a", "-v"), [("v", None), ("files", "a"), ("files", "-v")])

    def testTerminator(self):
        spec = Spec([Option("v", "-v")], [Operand("files", AtLeast(0))])
        self.assertEqual(pairs(spec, "--", "-v", "--"), [("files", "-v"), ("files", "--")])

    def testRepeatsAreKept(self):
        spec = Spec([Option("lines", "-n NUM")])
        self.assertEqual(pairs(spec, "-n1", "-n", "2", "-n3"), [("lines", "1"), ("lines", "2"), ("lines", "3")])

    def testNumericShorthand(self):
        spec = Spec(
            [Option("lines", "-n NUM")],
            [Operand("files", AtLeast(0))],
            [DeprecatedNumeric("-", "lines"), DeprecatedNumeric("+", "start", transform=lambda digits, suffix: int(digits))],
        )
        self.assertEqual(pairs(spec, "-20", "+3", "f"), [("lines", "20"), ("start", 3), ("files", "f")])

    def testNumericTransformFailure(self):
        def transform(digits, suffix):
            raise ValueError("bad suffix")

        spec = Spec(numerics=[DeprecatedNumeric("-", "lines", "x", transform)])
        with self.assertRaises(InvalidValueError) as context:
            parse(spec, ["-5x"])
        self.assertEqual(context.exception.input, "-5x")

    def testNegativeNumbersAreOperands(self):
        spec = Spec([Option("v", "-v")], [Operand("numbers", AtLeast(0))])
        self.assertEqual(pairs(spec, "-5", "-v"), [("v", None), ("numbers", "-5")])

    def testOperandEventsInSlotOrder(self):
        spec = Spec([Option("v", "-v")], [Operand("first"), Operand("rest", AtLeast(0))])
        events = parse(spec, ["a", "-v", "b", "c"]).events
        self.assertEqual(events, (
            ArgEvent("v", None, "-v"),
            ArgEvent("first", "a", "FIRST"),
            ArgEvent("rest", "b", "REST"),
            ArgEvent("rest", "c", "REST"),
        ))

    def testOperandFaults(self):
        spec = Spec(operands=[Operand("file1"), Operand("file2")])
        with self.assertRaises(MissingOperandError):
            parse(spec, ["a"])
        with self.assertRaises(ExcessOperandError):
            parse(spec, ["a", "b", "c"])


class TestGreedy(TestCase):
    """Greedy trailing operands."""

    def setUp(self):
        self.spec = Spec(
            [Option("x", "-x"), Option("signal", "-s SIGNAL", "--signal=SIGNAL"), Option("flag", "--flag")],
            [Operand("duration"), Operand("command", AtLeast(1), greedy=True)],
        )

    def testCapturesEverythingVerbatim(self):
        parsed = parse(self.spec, ["10", "-x", "cmd", "--flag", "arg"])
        self.assertEqual(parsed.trailing, ("cmd", "--flag", "arg"))
        self.assertEqual([(e.identity, e.value) for e in parsed.events], [
            ("x", None),
            ("duration", "10"),
            ("command", "cmd"),
            ("command", "--flag"),
            ("command", "arg"),
        ])

    def testOptionsBeforeCapture(self):
        parsed = parse(self.spec, ["-s", "KILL", "10", "--signal=HUP", "cmd", "-s", "x"])
        self.assertEqual(parsed.trailing, ("cmd", "-s", "x"))
        self.assertEqual([e.value for e in parsed.events if e.identity == "signal"], ["KILL", "HUP"])

    def testTerminatorThenCapture(self):
        self.assertEqual(parse(self.spec, ["10", "--", "-x", "-y"]).trailing, ("-x", "-y"))

    def testMissingCommand(self):
        with self.assertRaises(MissingOperandError) as context:
            parse(self.spec, ["10", "-x"])
        self.assertEqual(context.exception.operand, "command")

    def testNoGreedySlot(self):
        spec = Spec(operands=[Operand("name", Range(0, 1))])
        self.assertEqual(parse(spec, ["a"]).trailing, ())


if __name__ == "__main__":
    unittest.main()
