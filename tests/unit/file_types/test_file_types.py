"""Tests for extension classification and filtering."""

from __future__ import annotations

import unittest

from contextbuilder.file_types import (
    analyze_file_types,
    extension_of,
    extensions_for_preset,
    include_by_extension,
    preset_of,
)


class ExtensionOfTests(unittest.TestCase):
    def test_extension_of_dotfiles_and_plain_names(self) -> None:
        self.assertEqual(extension_of(".gitignore"), "gitignore")
        self.assertEqual(extension_of("README"), "")
        self.assertEqual(extension_of("a.b.tsx"), "tsx")

    def test_extension_is_lowercased(self) -> None:
        self.assertEqual(extension_of("Main.PY"), "py")
        self.assertEqual(extension_of(".ENV"), "env")

    def test_dotfile_with_second_dot_uses_last_part(self) -> None:
        self.assertEqual(extension_of(".env.local"), "local")


class PresetTests(unittest.TestCase):
    def test_first_matching_preset_wins(self) -> None:
        self.assertEqual(preset_of("tsx"), "frontend")
        self.assertEqual(preset_of("json"), "config")
        self.assertEqual(preset_of("csv"), "data")
        self.assertEqual(preset_of("PY"), "backend")
        self.assertIsNone(preset_of("lock"))

    def test_extensions_for_unknown_preset_is_empty(self) -> None:
        self.assertEqual(extensions_for_preset("nope"), frozenset())
        self.assertIn("md", extensions_for_preset("docs"))


class IncludeByExtensionTests(unittest.TestCase):
    def test_empty_allow_set_includes_everything(self) -> None:
        self.assertTrue(include_by_extension("anything", set()))

    def test_allow_set_membership(self) -> None:
        self.assertTrue(include_by_extension("App.tsx", {"tsx"}))
        self.assertFalse(include_by_extension("README", {"tsx"}))
        self.assertFalse(include_by_extension("main.py", {"tsx", "ts"}))


class AnalyzeFileTypesTests(unittest.TestCase):
    def test_counts_extensions_and_presets(self) -> None:
        stats = analyze_file_types(["src/App.tsx", "src/index.tsx", "package.json", "LICENSE", "docs/README.md"])
        self.assertEqual(stats.total, 4)
        self.assertEqual(stats.extensions["tsx"], 2)
        self.assertEqual(stats.presets["frontend"], 2)
        self.assertEqual(stats.presets["config"], 1)
        self.assertEqual(stats.presets["docs"], 1)
        self.assertNotIn("", stats.extensions)


if __name__ == "__main__":
    unittest.main()
