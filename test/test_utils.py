"""
Utilities behavioral tests (string transforms, numeric literals, help shaping).

Scope
- camelcase/decamelize/keyify transforms between CLI spellings and result keys.
- isnumeric/tonumber numeric literal handling (never raising).
- trim_newlines/redent help text shaping.
- Unset/coalesce sentinel semantics.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from whisker.utils import *


class TestCasing(TestCase):
    """Behavioral tests for the camelcase/decamelize pair."""

    def testCamelcaseHyphenated(self):
        self.assertEqual(camelcase("foo-bar"), "fooBar")

    def testCamelcaseMultiHyphen(self):
        self.assertEqual(camelcase("foo-bar-baz"), "fooBarBaz")

    def testCamelcaseKeepsHumps(self):
        self.assertEqual(camelcase("camelCaseOption"), "camelCaseOption")

    def testCamelcaseDropsLeadingDashes(self):
        self.assertEqual(camelcase("--foo-bar"), "fooBar")

    def testCamelcaseOtherSeparators(self):
        self.assertEqual(camelcase("foo_bar"), "fooBar")
        self.assertEqual(camelcase("foo__bar.baz"), "fooBarBaz")

    def testCamelcaseLowercasesFirstWord(self):
        self.assertEqual(camelcase("Foo-Bar"), "fooBar")

    def testCamelcaseAcronyms(self):
        self.assertEqual(camelcase("XMLHttpRequest"), "xmlHttpRequest")

    def testCamelcasePlainWord(self):
        self.assertEqual(camelcase("unicorn"), "unicorn")

    def testCamelcaseRejectsNonStrings(self):
        with self.assertRaises(TypeError):
            camelcase(5)

    def testDecamelize(self):
        self.assertEqual(decamelize("camelCaseOption"), "camel-case-option")

    def testDecamelizeAcronyms(self):
        self.assertEqual(decamelize("parseXMLInput"), "parse-xml-input")

    def testDecamelizeCustomSeparator(self):
        self.assertEqual(decamelize("fooBar", "_"), "foo_bar")

    def testDecamelizeThenCamelcaseRestores(self):
        for name in ("fooBar", "camelCaseOption", "unicorn"):
            self.assertEqual(camelcase(decamelize(name)), name)

    def testKeyifyKeepsSingleCharacters(self):
        self.assertEqual(keyify("F"), "F")
        self.assertEqual(keyify("u"), "u")

    def testKeyifyKeepsSeparator(self):
        self.assertEqual(keyify("--"), "--")

    def testKeyifyCamelcasesLongNames(self):
        self.assertEqual(keyify("no-auto-help"), "noAutoHelp")


class TestNumbers(TestCase):
    """Behavioral tests for numeric literal detection and conversion."""

    def testIntegers(self):
        self.assertEqual(tonumber("5"), 5)
        self.assertIsInstance(tonumber("5"), int)
        self.assertEqual(tonumber("-3"), -3)

    def testFloats(self):
        self.assertEqual(tonumber("1.5"), 1.5)
        self.assertEqual(tonumber(".5"), 0.5)
        self.assertEqual(tonumber("1e3"), 1000)

    def testHex(self):
        self.assertEqual(tonumber("0x10"), 16)
        self.assertEqual(tonumber("0X1f"), 31)

    def testNonNumbersAreReturnedUnchanged(self):
        for text in ("cat", "", "1_000", "5px", "0x", "--5"):
            self.assertEqual(tonumber(text), text)

    def testIsnumeric(self):
        self.assertTrue(isnumeric("42"))
        self.assertTrue(isnumeric("-4.2e-1"))
        self.assertFalse(isnumeric("four"))
        self.assertFalse(isnumeric(42))


class TestHelpShaping(TestCase):
    """Behavioral tests for trim_newlines and redent."""

    def testTrimNewlines(self):
        self.assertEqual(trim_newlines("\n\nfoo\n  bar\n\n"), "foo\n  bar")

    def testTrimNewlinesKeepsOtherWhitespace(self):
        self.assertEqual(trim_newlines("\n  foo  \n"), "  foo  ")

    def testRedentTabs(self):
        self.assertEqual(redent("\t\tUsage\n\t\t  foo <input>", 2), "  Usage\n    foo <input>")

    def testRedentLeavesBlankLinesEmpty(self):
        self.assertEqual(redent("    a\n\n    b", 2), "  a\n\n  b")

    def testRedentRejectsNegativeCounts(self):
        with self.assertRaises(ValueError):
            redent("a", -1)


class TestUnset(TestCase):
    """Behavioral tests for the Unset sentinel."""

    def testUnsetIsFalsySingleton(self):
        self.assertFalse(Unset)
        self.assertIs(UnsetType(), Unset)

    def testCoalescePreservesFalsyValues(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertIs(coalesce(False, True), False)

    def testUnsetTypeIsFinal(self):
        with self.assertRaises(TypeError):
            class Sub(UnsetType):  # NOQA: F-841
                pass


if __name__ == "__main__":
    unittest.main()
