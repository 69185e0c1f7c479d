#!/usr/bin/env python3
"""
Kanji App - Terminal Interface
A curses-based list/detail browser for the kanji backend.

Keys: ↑/↓ move the cursor, Enter opens (or closes) a kanji, ←/→/Space step
through the current level, [ and ] switch level, g toggles level grouping,
r reloads, q quits.
"""

import argparse
import curses
import os
import sys
import traceback
from typing import Any, Dict, List

from kanji_app.client import DEFAULT_BASE_URL, KanjiApiClient, KanjiBrowser
from kanji_app.config import load_env_file

SIDEBAR_WIDTH = 18

KEY_NAMES = {
    curses.KEY_RIGHT: "ArrowRight",
    curses.KEY_LEFT: "ArrowLeft",
    ord(' '): " ",
}


class KanjiTerminalApp:
    def __init__(self, stdscr: Any, browser: KanjiBrowser) -> None:
        self.stdscr = stdscr
        self.browser = browser
        self.cursor = 0
        self.level_index = 0

        curses.curs_set(0)
        curses.start_color()
        curses.use_default_colors()
        curses.init_pair(1, curses.COLOR_WHITE, curses.COLOR_BLUE)    # Header
        curses.init_pair(2, curses.COLOR_BLACK, curses.COLOR_WHITE)   # Cursor
        curses.init_pair(3, curses.COLOR_GREEN, -1)                  # Selected
        curses.init_pair(4, curses.COLOR_RED, -1)                    # Error
        curses.init_pair(6, curses.COLOR_CYAN, -1)                   # Info
        curses.init_pair(7, curses.COLOR_MAGENTA, -1)                # Accent

    def visible_records(self) -> List[Dict[str, Any]]:
        if self.browser.grouped and self.browser.levels:
            level = self.browser.levels[self.level_index % len(self.browser.levels)]
            return self.browser.groups[level]
        return self.browser.records

    def _addstr(self, y: int, x: int, text: str, attr: int = 0) -> None:
        height, width = self.stdscr.getmaxyx()
        if 0 <= y < height and x < width:
            try:
                self.stdscr.addstr(y, x, text[: max(0, width - x - 1)], attr)
            except curses.error:
                pass

    def draw_header(self) -> None:
        _, width = self.stdscr.getmaxyx()
        title = " Kanji Learning App "
        if self.browser.grouped and self.browser.levels:
            title += f"- {self.browser.levels[self.level_index % len(self.browser.levels)]} "
        self._addstr(0, 0, title.ljust(width), curses.color_pair(1) | curses.A_BOLD)

    def draw_footer(self) -> None:
        height, _ = self.stdscr.getmaxyx()
        hint = "↑↓ move  Enter open  ←→/Space next  [ ] level  g group  r reload  q quit"
        self._addstr(height - 1, 0, hint, curses.color_pair(6))

    def draw_sidebar(self) -> None:
        height, _ = self.stdscr.getmaxyx()
        records = self.visible_records()
        self._addstr(2, 1, "Kanji List", curses.color_pair(7) | curses.A_BOLD)
        if not records:
            self._addstr(4, 1, "No Kanji available.")
            return
        rows = height - 6
        top = max(0, self.cursor - rows + 1)
        selected = self.browser.selected.get("kanji") if self.browser.selected else None
        for i, record in enumerate(records[top:top + rows]):
            index = top + i
            label = f" {record['kanji']} {record.get('level') or ''}"
            attr = 0
            if index == self.cursor:
                attr = curses.color_pair(2) | curses.A_BOLD
            elif record["kanji"] == selected:
                attr = curses.color_pair(3) | curses.A_BOLD
            self._addstr(4 + i, 1, label.ljust(SIDEBAR_WIDTH - 2), attr)

    def draw_detail(self) -> None:
        x = SIDEBAR_WIDTH + 2
        browser = self.browser
        if browser.error:
            self._addstr(2, x, browser.error, curses.color_pair(4) | curses.A_BOLD)
        if browser.detail_loading:
            self._addstr(4, x, "Loading details...")
            return
        kanji = browser.selected
        if kanji is None:
            self._addstr(4, x, "Select a Kanji from the list to see details.")
            return

        lines = [
            ("Meaning", kanji.get("korean_meaning") or ""),
            ("Onyomi", ", ".join(kanji.get("onyomi") or [])),
            ("Kunyomi", ", ".join(kanji.get("kunyomi") or [])),
            ("Strokes", str(kanji.get("strokes") or "")),
        ]
        if kanji.get("level"):
            lines.append(("Level", kanji["level"]))
        if kanji.get("radical"):
            lines.append(("Radical", kanji["radical"]))

        self._addstr(4, x, kanji["kanji"], curses.color_pair(7) | curses.A_BOLD)
        y = 6
        for label, value in lines:
            self._addstr(y, x, f"{label}:", curses.A_BOLD)
            self._addstr(y, x + 10, value)
            y += 1

        if kanji.get("words"):
            y += 1
            self._addstr(y, x, "Words:", curses.A_BOLD)
            for word in kanji["words"]:
                y += 1
                self._addstr(y, x + 2, f"{word['word']} ({word.get('reading') or ''}) {word.get('meaning') or ''}")
        if kanji.get("example_sentences"):
            y += 2
            self._addstr(y, x, "Example Sentences:", curses.A_BOLD)
            for sentence in kanji["example_sentences"]:
                y += 1
                self._addstr(y, x + 2, sentence["sentence"])
                if sentence.get("translation"):
                    y += 1
                    self._addstr(y, x + 4, sentence["translation"], curses.color_pair(6))

    def draw(self) -> None:
        self.stdscr.clear()
        self.draw_header()
        if self.browser.list_status == "loading":
            self._addstr(2, 1, "Loading Kanji data...")
        elif self.browser.list_status == "error":
            self._addstr(2, 1, self.browser.error or "", curses.color_pair(4) | curses.A_BOLD)
        else:
            self.draw_sidebar()
            self.draw_detail()
        self.draw_footer()
        self.stdscr.refresh()

    def switch_level(self, offset: int) -> None:
        levels = self.browser.levels
        if not levels:
            return
        self.level_index = (self.level_index + offset) % len(levels)
        self.cursor = 0
        if self.browser.grouped:
            self.browser.select_level(levels[self.level_index])

    def sync_cursor(self) -> None:
        """Keep the cursor on the displayed kanji after keyboard navigation."""
        if self.browser.selected is None:
            return
        characters = [r["kanji"] for r in self.visible_records()]
        if self.browser.selected["kanji"] in characters:
            self.cursor = characters.index(self.browser.selected["kanji"])

    def run(self) -> None:
        self.draw()
        self.browser.load()
        while True:
            self.draw()
            key = self.stdscr.getch()
            records = self.visible_records()

            if key in (ord('q'), ord('Q')):
                break
            elif key == curses.KEY_UP and self.cursor > 0:
                self.cursor -= 1
            elif key == curses.KEY_DOWN and self.cursor < len(records) - 1:
                self.cursor += 1
            elif key in (ord('\n'), ord('\r'), curses.KEY_ENTER) and records:
                self.browser.select(records[self.cursor]["kanji"])
            elif key in KEY_NAMES:
                self.browser.handle_key(KEY_NAMES[key])
                self.sync_cursor()
            elif key == ord(']'):
                self.switch_level(1)
            elif key == ord('['):
                self.switch_level(-1)
            elif key == ord('g'):
                self.browser.grouped = not self.browser.grouped
                self.cursor = 0
            elif key == ord('r'):
                self.browser.load()
                self.cursor = 0


def main(stdscr: Any, base_url: str, grouped: bool) -> None:
    """Main entry point for the curses application."""
    try:
        browser = KanjiBrowser(KanjiApiClient(base_url), grouped=grouped)
        KanjiTerminalApp(stdscr, browser).run()
    except Exception as e:
        # Show error in a safe way
        stdscr.clear()
        stdscr.addstr(0, 0, f"Error: {str(e)}")
        stdscr.addstr(2, 0, "Traceback:")
        error_lines = traceback.format_exc().split('\n')
        for i, line in enumerate(error_lines[:10]):  # Show first 10 lines
            stdscr.addstr(3 + i, 0, line[:80])  # Truncate long lines
        stdscr.addstr(15, 0, "Press any key to exit...")
        stdscr.refresh()
        stdscr.getch()


if __name__ == "__main__":
    load_env_file()
    parser = argparse.ArgumentParser(description="Kanji App terminal browser")
    parser.add_argument("--url", default=os.environ.get("KANJI_API_URL", DEFAULT_BASE_URL),
                        help=f"Backend base URL (default: {DEFAULT_BASE_URL})")
    parser.add_argument("--grouped", action="store_true", help="Group kanji by level")
    args = parser.parse_args()

    try:
        curses.wrapper(main, args.url, args.grouped)
    except KeyboardInterrupt:
        print("\nExiting...")
        sys.exit(0)
    except Exception as e:
        print(f"Fatal error: {e}")
        traceback.print_exc()
