"""
Prefix resolver tests.

Scope
- resolve(): exact match wins, unique prefix, ambiguity with candidates in
  table order, no match.
- infer(): enumerated values, aliases sharing a member, faults raised.
"""
import unittest
from unittest import TestCase

from coreopts.faults import AmbiguousValueError, InvalidValueError
from coreopts.prefixes import *

ENUM = ("long", "link", "deck", "desk")


class ResolveTest(TestCase):

    def testExactWinsOverLongerNames(self):
        result = resolve("dereference-command-line", ["dereference-command-line-symlink-to-dir", "dereference-command-line"])
        self.assertIsInstance(result, Exact)
        self.assertEqual(result.name, "dereference-command-line")

    def testUniquePrefix(self):
        self.assertEqual(resolve("lo", ENUM), UniquePrefix("long"))
        self.assertEqual(resolve("dec", ENUM), UniquePrefix("deck"))

    def testAmbiguousKeepsTableOrder(self):
        self.assertEqual(resolve("l", ENUM), Ambiguous(("long", "link")))
        self.assertEqual(resolve("de", ENUM), Ambiguous(("deck", "desk")))

    def testNoMatch(self):
        self.assertEqual(resolve("x", ENUM), NoMatch())
        self.assertEqual(resolve("longer", ENUM), NoMatch())

    def testAcceptsAnyIterable(self):
        self.assertEqual(resolve("li", iter(ENUM)), UniquePrefix("link"))
        self.assertEqual(resolve("li", {"link": 1, "list": 2}), Ambiguous(("link", "list")))

    def testUniquePrefixEquivalence(self):
        """
        every unambiguous prefix of a name resolves to that name.
        """
        for name in ENUM:
            for end in range(1, len(name) + 1):
                prefix = name[:end]
                owners = [other for other in ENUM if other.startswith(prefix)]
                if owners == [name]:
                    with self.subTest(prefix=prefix):
                        self.assertIn(resolve(prefix, ENUM), (Exact(name), UniquePrefix(name)))


class InferTest(TestCase):

    def testMembers(self):
        self.assertEqual(infer("long", ENUM), "long")
        self.assertEqual(infer("lo", ENUM), "long")
        self.assertEqual(infer("dec", ENUM), "deck")

    def testAmbiguousValue(self):
        with self.assertRaises(AmbiguousValueError) as context:
            infer("de", ENUM, identity="mode", input="--mode")
        self.assertEqual(context.exception.candidates, ("deck", "desk"))
        self.assertEqual(context.exception.value, "de")
        self.assertEqual(context.exception.input, "--mode")

    def testInvalidValue(self):
        with self.assertRaises(InvalidValueError) as context:
            infer("x", ENUM, identity="mode")
        self.assertEqual(context.exception.identity, "mode")
        self.assertEqual(context.exception.candidates, ENUM)

    def testAliases(self):
        when = {"always": "always", "yes": "always", "never": "never", "no": "never", "none": "never", "auto": "auto"}
        self.assertEqual(infer("yes", when), "always")
        self.assertEqual(infer("n", when), "never")
        self.assertEqual(infer("y", when), "always")
        with self.assertRaises(AmbiguousValueError):
            infer("a", when)


if __name__ == "__main__":
    unittest.main()
