"""Tests for bundle assembly over a fixed in-memory provider."""

from __future__ import annotations

import unittest

from contextbuilder.bundle import (
    ContentProvider,
    DirectoryMarker,
    FileContent,
    Unreadable,
    build_bundle,
    parse_entry,
    render_entry,
)
from contextbuilder.file_tree_model import FileTree
from contextbuilder.gitignore import GitIgnoreMatcher


class FixedProvider(ContentProvider):
    def __init__(self, files: dict[str, str], directories: tuple[str, ...] = (), broken: tuple[str, ...] = ()) -> None:
        self.files = files
        self.directories = directories
        self.broken = broken
        self.classified: list[str] = []

    def list_directory(self, path: str) -> FileTree:
        return FileTree(root_label=path)

    def read_gitignore(self, root_path: str) -> str | None:
        return None

    def read_files(self, root_path: str, rel_paths: list[str], include_file_map: bool = True) -> str:
        return build_bundle(root_path, rel_paths, self, include_file_map=include_file_map)

    def classify(self, root_path: str, rel_path: str):
        self.classified.append(rel_path)
        if rel_path in self.broken:
            raise PermissionError(13, "Permission denied", rel_path)
        if rel_path in self.directories:
            return DirectoryMarker()
        if rel_path in self.files:
            return FileContent(self.files[rel_path])
        return Unreadable()


class BuildBundleTests(unittest.TestCase):
    def test_two_files_with_map(self) -> None:
        provider = FixedProvider({"src/App.tsx": "export default App;", "package.json": "{}"})
        bundle = build_bundle("/proj", ["src/App.tsx", "package.json"], provider)
        self.assertEqual(
            bundle,
            "<files>\n"
            "  <file_map>\n"
            "/proj\n"
            "├── src\n"
            "│   └── App.tsx\n"
            "└── package.json\n"
            "  </file_map>\n"
            "\n"
            '  <file path="src/App.tsx">\n'
            "export default App;\n"
            "  </file>\n"
            '  <file path="package.json">\n'
            "{}\n"
            "  </file>\n"
            "</files>",
        )
        self.assertEqual(bundle.count("<file path="), 2)

    def test_without_map(self) -> None:
        provider = FixedProvider({"a.txt": "A"})
        bundle = build_bundle("/proj", ["a.txt"], provider, include_file_map=False)
        self.assertEqual(bundle, '<files>\n  <file path="a.txt">\nA\n  </file>\n</files>')

    def test_empty_selection_is_bare_envelope(self) -> None:
        self.assertEqual(build_bundle("/proj", [], FixedProvider({})), "<files>\n</files>")

    def test_directory_and_unreadable_entries(self) -> None:
        provider = FixedProvider({}, directories=("src",), broken=("secret.txt",))
        bundle = build_bundle("/proj", ["src", "missing.txt", "secret.txt"], provider, include_file_map=False)
        self.assertIn('  <directory path="src" />\n', bundle)
        self.assertIn('  <file path="missing.txt" error="Unable to read" />\n', bundle)
        self.assertIn('  <file path="secret.txt" error="Unable to read" />\n', bundle)

    def test_gitignore_and_ignored_paths_only_appear_in_map(self) -> None:
        provider = FixedProvider({".gitignore": "dist", "dist/app.js": "x", "main.py": "pass"})
        matcher = GitIgnoreMatcher.from_patterns(["dist/**"])
        bundle = build_bundle("/proj", [".gitignore", "dist/app.js", "main.py"], provider, matcher=matcher)
        self.assertEqual(provider.classified, ["main.py"])
        self.assertIn("├── dist", bundle)
        self.assertIn("app.js", bundle)
        self.assertNotIn('<file path="dist/app.js"', bundle)
        self.assertNotIn('<file path=".gitignore"', bundle)

    def test_contents_are_not_escaped(self) -> None:
        entry = render_entry("a.html", FileContent("<b>&</b>"))
        self.assertEqual(entry, '  <file path="a.html">\n<b>&</b>\n  </file>\n')


class ParseEntryTests(unittest.TestCase):
    def test_single_path_bundles_parse_back(self) -> None:
        text = build_bundle("/proj", ["a.html"], FixedProvider({"a.html": "<p>\n  </file>\n</p>"}), include_file_map=False)
        self.assertEqual(parse_entry("a.html", text), FileContent("<p>\n  </file>\n</p>"))

        empty = build_bundle("/proj", ["blank.txt"], FixedProvider({"blank.txt": ""}), include_file_map=False)
        self.assertEqual(parse_entry("blank.txt", empty), FileContent(""))

    def test_directory_and_missing_elements(self) -> None:
        text = build_bundle("/proj", ["src"], FixedProvider({}, directories=("src",)), include_file_map=False)
        self.assertEqual(parse_entry("src", text), DirectoryMarker())
        self.assertEqual(parse_entry("gone.txt", "<files>\n</files>"), Unreadable())
        errored = '<files>\n  <file path="x.txt" error="Unable to read" />\n</files>'
        self.assertEqual(parse_entry("x.txt", errored), Unreadable())


class ProviderContractTests(unittest.TestCase):
    def test_provider_without_classify_cannot_be_created(self) -> None:
        class ListingOnly(ContentProvider):
            def list_directory(self, path: str) -> FileTree:
                return FileTree(root_label=path)

            def read_gitignore(self, root_path: str) -> str | None:
                return None

            def read_files(self, root_path: str, rel_paths: list[str], include_file_map: bool = True) -> str:
                return ""

        with self.assertRaises(TypeError):
            ListingOnly()


if __name__ == "__main__":
    unittest.main()
