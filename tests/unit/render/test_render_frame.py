"""Tests for frame composition: list rows, mark pane, status line, and help."""

from __future__ import annotations

import unittest
from unittest import mock

from lazydu import render
from lazydu.render import build_frame_lines, build_status_line, list_rows, mark_pane_rows
from lazydu.render.ansi import display_width, strip_ansi
from lazydu.ui_theme import PLAIN_THEME
from tests.fakes import MemoryFileSystem, scanned_app


class RenderFrameTests(unittest.TestCase):
    def setUp(self) -> None:
        fs = MemoryFileSystem(
            {"/v/big.bin": 3 * 1024, "/v/docs/readme": 1024},
        )
        self.app = scanned_app(fs, ["/v"])
        self.app.tree.record_error(self.app.traversal.initial_root, "/v/locked", "Permission denied")

    def _plain(self, width: int = 80, height: int = 12) -> list[str]:
        context = self.app.render_context(width, height, theme=PLAIN_THEME)
        return [strip_ansi(line) for line in build_frame_lines(context)]

    def test_frame_has_header_rows_and_status(self) -> None:
        lines = self._plain()

        self.assertEqual(len(lines), 12)
        self.assertIn("/v", lines[0])
        self.assertIn("4.00 KB", lines[0])
        self.assertIn("big.bin", lines[1])
        self.assertIn("75.0%", lines[1])
        self.assertIn("docs/", lines[2])
        self.assertIn("sort: size ↓", lines[-1])
        self.assertIn("1 errors", lines[-1])
        self.assertTrue(lines[-1].rstrip().endswith("? Help"))

    def test_rows_fit_width(self) -> None:
        context = self.app.render_context(30, 8)
        for line in build_frame_lines(context)[:-1]:
            self.assertEqual(display_width(line), 30)

    def test_mark_pane_and_marker(self) -> None:
        self.app.process_events(["d"])
        lines = self._plain(width=120)

        self.assertTrue(lines[1].startswith("*"))
        self.assertTrue(any("marked (1)" in line for line in lines))
        self.assertTrue(any("/v/big.bin" in line for line in lines))
        self.assertIn("1 marked (3.00 KB)", lines[-1])

    def test_confirm_prompt_replaces_status(self) -> None:
        self.app.process_events(["d", "TAB", "x"])

        self.assertIn("Delete 1 marked entries (3.00 KB) permanently? [y/N]", self._plain()[-1])

    def test_help_overlay_lists_keys_and_scan_errors(self) -> None:
        self.app.process_events(["?"])
        lines = self._plain(height=60)

        self.assertTrue(any("NAVIGATION" in line for line in lines))
        self.assertTrue(any("/v/locked: Permission denied" in line for line in lines))

    def test_virtual_root_header_counts_roots(self) -> None:
        fs = MemoryFileSystem({"/a/x": 1, "/b/y": 1})
        app = scanned_app(fs, ["/a", "/b"])
        header = strip_ansi(build_frame_lines(app.render_context(60, 8, theme=PLAIN_THEME))[0])

        self.assertIn("2 roots", header)

    def test_render_frame_writes_one_buffer(self) -> None:
        with mock.patch.object(render.os, "write") as write, mock.patch.object(render.sys, "stdout") as stdout:
            stdout.fileno.return_value = 1
            render.render_frame(self.app.render_context(40, 6))

        payload = write.call_args[0][1].decode("utf-8")
        self.assertTrue(payload.startswith("\033[H\033[J"))
        self.assertEqual(payload.count("\r\n"), 5)


class LayoutHelperTests(unittest.TestCase):
    def test_status_line_right_aligns_help_hint(self) -> None:
        line = build_status_line("left", 20)

        self.assertEqual(len(line), 19)
        self.assertTrue(line.startswith("left"))
        self.assertTrue(line.endswith("│ ? Help"))

    def test_mark_pane_takes_rows_only_when_marked(self) -> None:
        self.assertEqual(mark_pane_rows(30, 0), 0)
        self.assertEqual(mark_pane_rows(30, 2), 3)
        self.assertEqual(list_rows(30, 0), 28)
        self.assertEqual(list_rows(30, 2), 25)


if __name__ == "__main__":
    unittest.main()
