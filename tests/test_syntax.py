from __future__ import annotations

import unittest

from gitt.history import DetailLine, LineRole
from gitt.render.ansi import ANSI_ESCAPE_RE, display_width
from gitt.render.frame import RenderContext, render_detail_line
from gitt.render.layout import compute_layout
from gitt.render.syntax import colorize_code_line
from gitt.render.theme import DEFAULT_THEME


class SyntaxColoringTests(unittest.TestCase):
    def test_known_language_is_colored(self) -> None:
        colored = colorize_code_line("def run(): return 1", "src/app.py")

        self.assertIsNotNone(colored)
        self.assertEqual(ANSI_ESCAPE_RE.sub("", colored), "def run(): return 1")

    def test_unknown_file_or_missing_name_is_not_colored(self) -> None:
        self.assertIsNone(colorize_code_line("plain words", "notes.unknown-extension"))
        self.assertIsNone(colorize_code_line("x = 1", None))
        self.assertIsNone(colorize_code_line("", "a.py"))

    def test_invalid_style_falls_back(self) -> None:
        self.assertIsNotNone(colorize_code_line("x = 1", "a.py", style="no-such-style"))

    def test_added_line_gets_background_and_exact_width(self) -> None:
        ctx = RenderContext(engine=None, layout=compute_layout(40, 10), theme=DEFAULT_THEME)  # type: ignore[arg-type]

        row = render_detail_line(DetailLine(LineRole.ADDED, "+x = 1"), "a.py", 30, ctx)

        self.assertIn(DEFAULT_THEME.added_bg_sgr, row)
        self.assertEqual(display_width(row), 30)
        self.assertTrue(row.endswith(DEFAULT_THEME.reset))
        self.assertEqual(ANSI_ESCAPE_RE.sub("", row).rstrip(), "+x = 1")


if __name__ == "__main__":
    unittest.main()
