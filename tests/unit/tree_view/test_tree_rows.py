"""Tests for tree row rendering and bundle highlighting."""

from __future__ import annotations

import re
import unittest

from contextbuilder.file_tree_model import DirectoryNode, FileNode, FileTree
from contextbuilder.highlight import colorize_bundle, normalize_style, sanitize_terminal_text
from contextbuilder.selection import SelectionEngine
from contextbuilder.tree_view import format_size, highlight_substring, render_tree_rows

ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


def engine_for_sample() -> SelectionEngine:
    tree = FileTree(
        root_label="/p/app",
        children=(
            DirectoryNode("src", "src", (FileNode("Button.tsx", "src/Button.tsx", 20 * 1024),)),
            FileNode("notes.md", "notes.md", 10),
        ),
    )
    return SelectionEngine(tree)


class TreeRowTests(unittest.TestCase):
    def test_rows_follow_expansion(self) -> None:
        engine = engine_for_sample()
        self.assertEqual(render_tree_rows(engine), ["[ ] ▸ app/"])
        engine.expand_all()
        self.assertEqual(
            render_tree_rows(engine),
            [
                "[ ] ▾ app/",
                "  [ ] ▾ src/",
                "    [ ]   Button.tsx [20 KB]",
                "  [ ]   notes.md",
            ],
        )

    def test_checkbox_states_and_preset_labels(self) -> None:
        engine = engine_for_sample()
        engine.toggle("src")
        rows = render_tree_rows(engine, expand_everything=True, show_presets=True)
        self.assertEqual(rows[0], "[-] ▸ app/")
        self.assertEqual(rows[1], "  [x] ▸ src/")
        self.assertEqual(rows[2], "    [x]   Button.tsx [20 KB] (frontend)")
        self.assertEqual(rows[3], "  [ ]   notes.md (docs)")

    def test_highlight_and_size_helpers(self) -> None:
        self.assertEqual(highlight_substring("Button.tsx", "but"), "[But]ton.tsx")
        self.assertEqual(highlight_substring("Button.tsx", "zzz"), "Button.tsx")
        self.assertEqual(format_size(None), "")
        self.assertEqual(format_size(1024), "")
        self.assertEqual(format_size(12 * 1024), " [12 KB]")


class HighlightTests(unittest.TestCase):
    def test_colorize_keeps_text(self) -> None:
        bundle = '<files>\n  <file path="a.py">\nx = 1\n  </file>\n</files>'
        self.assertEqual(ANSI_RE.sub("", colorize_bundle(bundle)), bundle)

    def test_control_bytes_are_escaped(self) -> None:
        self.assertEqual(sanitize_terminal_text("a\x07b\n"), "a\\x07b\n")

    def test_unknown_style_falls_back(self) -> None:
        self.assertEqual(normalize_style("definitely-not-a-style"), "monokai")
        self.assertEqual(normalize_style("default"), "default")


if __name__ == "__main__":
    unittest.main()
