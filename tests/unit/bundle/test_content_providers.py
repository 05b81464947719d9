"""Tests for the local and HTTP-backed content providers."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest import mock

import requests

from contextbuilder.bundle import (
    DirectoryMarker,
    FileContent,
    LocalContentProvider,
    RemoteContentProvider,
    Unreadable,
    build_bundle,
    get_content_provider,
)
from contextbuilder.errors import ProviderError, TransportError
from contextbuilder.file_tree_model import DirectoryNode, FileNode


class LocalContentProviderTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.root = Path(self._tmp.name)
        (self.root / ".gitignore").write_text("*.log\n", encoding="utf-8")
        (self.root / "src").mkdir()
        (self.root / "src" / "main.py").write_text("print('hi')", encoding="utf-8")
        (self.root / "app.log").write_text("noise", encoding="utf-8")
        self.provider = LocalContentProvider()

    def test_list_directory_uses_gitignore_and_keeps_path_as_label(self) -> None:
        tree = self.provider.list_directory(str(self.root))
        self.assertEqual(tree.root_label, str(self.root))
        self.assertEqual([node.path for node in tree.children], ["src"])

    def test_list_missing_directory_raises(self) -> None:
        with self.assertRaises(ProviderError):
            self.provider.list_directory(str(self.root / "missing"))

    def test_read_gitignore(self) -> None:
        self.assertEqual(self.provider.read_gitignore(str(self.root)), "*.log\n")
        self.assertIsNone(self.provider.read_gitignore(str(self.root / "src")))

    def test_classify(self) -> None:
        root = str(self.root)
        self.assertEqual(self.provider.classify(root, "src"), DirectoryMarker())
        self.assertEqual(self.provider.classify(root, "src/main.py"), FileContent("print('hi')"))
        self.assertIsInstance(self.provider.classify(root, "nope.txt"), Unreadable)

    def test_classify_falls_back_for_non_utf8_bytes(self) -> None:
        (self.root / "latin.txt").write_bytes(b"caf\xe9")
        self.assertEqual(self.provider.classify(str(self.root), "latin.txt"), FileContent("café"))

    def test_classify_strips_utf8_bom(self) -> None:
        (self.root / "bom.txt").write_bytes(b"\xef\xbb\xbfhello")
        self.assertEqual(self.provider.classify(str(self.root), "bom.txt"), FileContent("hello"))

    def test_read_files_skips_ignored_paths(self) -> None:
        bundle = self.provider.read_files(str(self.root), ["src/main.py", "app.log", ".gitignore"], include_file_map=False)
        self.assertEqual(bundle, "<files>\n  <file path=\"src/main.py\">\nprint('hi')\n  </file>\n</files>")


def fake_response(ok: bool = True, payload=None, text: str = "", status_code: int = 200, json_error: bool = False):
    response = mock.Mock()
    response.ok = ok
    response.status_code = status_code
    response.text = text
    if json_error:
        response.json.side_effect = ValueError("not json")
    else:
        response.json.return_value = payload
    return response


class RemoteContentProviderTests(unittest.TestCase):
    def setUp(self) -> None:
        self.session = mock.Mock()
        self.provider = RemoteContentProvider("http://localhost:5000/", session=self.session)

    def test_list_directory_decodes_tree(self) -> None:
        self.session.get.return_value = fake_response(
            payload=[
                {
                    "name": "src",
                    "path": "src",
                    "type": "directory",
                    "children": [{"name": "a.py", "path": "src/a.py", "type": "file", "size": 3}],
                }
            ]
        )
        tree = self.provider.list_directory("/proj")
        self.session.get.assert_called_once_with(
            "http://localhost:5000/api/list-directory",
            params={"dirPath": "/proj"},
            timeout=30.0,
        )
        self.assertEqual(tree.root_label, "/proj")
        self.assertEqual(tree.children, (DirectoryNode("src", "src", (FileNode("a.py", "src/a.py", 3),)),))

    def test_server_error_becomes_provider_error(self) -> None:
        self.session.get.return_value = fake_response(ok=False, payload={"error": "Unable to read directory"}, status_code=500)
        with self.assertRaisesRegex(ProviderError, "Unable to read directory"):
            self.provider.list_directory("/nope")

    def test_connection_failure_becomes_transport_error(self) -> None:
        self.session.get.side_effect = requests.exceptions.ConnectionError("refused")
        with self.assertRaises(TransportError):
            self.provider.list_directory("/proj")

    def test_non_json_listing_is_transport_error(self) -> None:
        self.session.get.return_value = fake_response(json_error=True)
        with self.assertRaises(TransportError):
            self.provider.list_directory("/proj")

    def test_read_files_posts_selection(self) -> None:
        self.session.post.return_value = fake_response(text="<files>\n</files>")
        bundle = self.provider.read_files("/proj", ["a.py"], include_file_map=False)
        self.assertEqual(bundle, "<files>\n</files>")
        self.session.post.assert_called_once_with(
            "http://localhost:5000/api/get-files",
            json={"dirPath": "/proj", "selections": ["a.py"], "includeFileMap": False},
            timeout=30.0,
        )

    def test_read_files_failure_is_transport_error(self) -> None:
        self.session.post.return_value = fake_response(ok=False, text="Internal server error", status_code=500)
        with self.assertRaises(TransportError):
            self.provider.read_files("/proj", ["a.py"])

    def test_classify_fetches_single_path_without_map(self) -> None:
        self.session.post.return_value = fake_response(
            text='<files>\n  <file path="src/a.py">\nx = 1\n  </file>\n</files>'
        )
        self.assertEqual(self.provider.classify("/proj", "src/a.py"), FileContent("x = 1"))
        self.session.post.assert_called_once_with(
            "http://localhost:5000/api/get-files",
            json={"dirPath": "/proj", "selections": ["src/a.py"], "includeFileMap": False},
            timeout=30.0,
        )

    def test_bundle_over_remote_provider(self) -> None:
        self.session.post.side_effect = [
            fake_response(text='<files>\n  <directory path="src" />\n</files>'),
            fake_response(text="<files>\n</files>"),
        ]
        bundle = build_bundle("/proj", ["src", "secret.txt"], self.provider, include_file_map=False)
        self.assertEqual(
            bundle,
            '<files>\n  <directory path="src" />\n  <file path="secret.txt" error="Unable to read" />\n</files>',
        )

    def test_bundle_over_unreachable_server_fails(self) -> None:
        self.session.post.side_effect = requests.exceptions.ConnectionError("refused")
        with self.assertRaises(TransportError):
            build_bundle("/proj", ["a.txt"], self.provider)

    def test_remote_gitignore_is_unknown(self) -> None:
        self.assertIsNone(self.provider.read_gitignore("/proj"))


class ProviderFactoryTests(unittest.TestCase):
    def test_factory_picks_remote_only_with_url(self) -> None:
        self.assertIsInstance(get_content_provider(None), LocalContentProvider)
        self.assertIsInstance(get_content_provider("http://example.invalid"), RemoteContentProvider)
        self.assertTrue(get_content_provider(show_hidden=True).show_hidden)


if __name__ == "__main__":
    unittest.main()
