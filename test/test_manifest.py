"""
Manifest and environment behavioral tests.

Scope
- Manifest construction from mappings and installed distributions, title rules.
- Environment argv sources, output routing and hooks.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import importlib.metadata
import io
import sys
import unittest
from unittest import TestCase
from unittest.mock import patch

from rich.console import Console

from whisker import Manifest, Environment


class TestManifest(TestCase):
    """Behavioral tests for the package manifest."""

    def testFromMapping(self):
        manifest = Manifest.from_mapping({"name": "meow", "version": "1.0.0", "license": "MIT"})
        self.assertEqual(manifest.name, "meow")
        self.assertEqual(manifest.version, "1.0.0")
        self.assertIsNone(manifest.description)
        self.assertIsNone(manifest.bin)
        self.assertEqual(manifest.metadata["license"], "MIT")

    def testMetadataIsReadOnly(self):
        manifest = Manifest.from_mapping({"name": "meow"})
        with self.assertRaises(TypeError):
            manifest.metadata["name"] = "purr"  # type: ignore[index]

    def testTitleFromBinMapping(self):
        self.assertEqual(Manifest(name="unicorns", bin={"uni": "cli.js"}).title, "uni")

    def testTitleFromBinString(self):
        self.assertEqual(Manifest(name="browser-sync", bin="bin/browser-sync.js").title, "browser-sync")

    def testTitleWithoutBin(self):
        self.assertEqual(Manifest(name="unicorns").title, "unicorns")
        self.assertIsNone(Manifest().title)

    def testBadFieldsRejected(self):
        with self.assertRaises(TypeError):
            Manifest(name=5)
        with self.assertRaises(TypeError):
            Manifest(bin=["cli.js"])

    def testCoerce(self):
        manifest = Manifest(name="unicorns")
        self.assertIs(Manifest.coerce(manifest), manifest)
        self.assertEqual(Manifest.coerce({"name": "unicorns"}).name, "unicorns")
        with self.assertRaises(TypeError):
            Manifest.coerce("unicorns")

    def testFromDistribution(self):
        manifest = Manifest.from_distribution("rich")
        self.assertEqual(manifest.name.lower(), "rich")
        self.assertEqual(manifest.version, importlib.metadata.version("rich"))

    def testFromMissingDistribution(self):
        manifest = Manifest.from_distribution("whisker-definitely-not-installed")
        self.assertEqual(manifest.name, "whisker-definitely-not-installed")
        self.assertIsNone(manifest.version)

    def testDiscoverFallsBackToProgramName(self):
        with patch.object(sys, "argv", ["/usr/local/bin/unicorns.py"]), \
                patch.dict(sys.modules, {"__main__": type(sys)("__main__")}):
            manifest = Manifest.discover()
        self.assertEqual(manifest.name, "unicorns")

    def testRepr(self):
        self.assertEqual(repr(Manifest(name="meow", version="1.0.0")), "manifest(name='meow', version='1.0.0')")


class TestEnvironment(TestCase):
    """Behavioral tests for the injected collaborators."""

    def testArgvSequence(self):
        self.assertEqual(Environment(argv=["a", "b"]).arguments(), ["a", "b"])

    def testArgvCallable(self):
        self.assertEqual(Environment(argv=lambda: ("a",)).arguments(), ["a"])

    def testDefaultArgvReadsProcessArguments(self):
        environment = Environment()
        with patch.object(sys, "argv", ["prog", "--foo", "bar"]):
            self.assertEqual(environment.arguments(), ["--foo", "bar"])

    def testStringArgvRejected(self):
        with self.assertRaises(TypeError):
            Environment(argv="--foo")

    def testNonStringArgumentsRejected(self):
        with self.assertRaises(TypeError):
            Environment(argv=lambda: [1]).arguments()

    def testWriteRoutesStreams(self):
        stdout, stderr = io.StringIO(), io.StringIO()
        environment = Environment(
            stdout=Console(file=stdout, color_system=None),
            stderr=Console(file=stderr, color_system=None),
        )
        environment.write("[bold]out[/bold]")
        environment.write("err", error=True)
        self.assertEqual(stdout.getvalue(), "[bold]out[/bold]\n")
        self.assertEqual(stderr.getvalue(), "err\n")

    def testWriteKeepsTabs(self):
        stdout = io.StringIO()
        Environment(stdout=Console(file=stdout, color_system=None)).write("  --rainbow\tInclude a rainbow")
        self.assertEqual(stdout.getvalue(), "  --rainbow\tInclude a rainbow\n")

    def testTerminate(self):
        codes = []
        Environment(exit=codes.append).terminate(4)
        self.assertEqual(codes, [4])

    def testRetitleOnlyWithHook(self):
        titles = []
        Environment(retitle=titles.append).retitle("unicorns")
        Environment().retitle("ignored")
        self.assertEqual(titles, ["unicorns"])

    def testBadHooksRejected(self):
        with self.assertRaises(TypeError):
            Environment(exit=5)
        with self.assertRaises(TypeError):
            Environment(stdout=io.StringIO())


if __name__ == "__main__":
    unittest.main()
