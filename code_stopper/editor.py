"""
Code Stopper Text Buffer

The live editing surface the controller reads the current line from.
Error markers are keyed by line index and follow their line when lines
above are inserted or merged away.
"""

from typing import Any, Dict, List, Optional

from .languages import Language

BLOCK_OPENERS = (":", "{")


class CodeEditor:
    """Line buffer with one cursor and per-line error markers"""

    def __init__(self, language: Optional[Language] = Language.PYTHON, text: str = ""):
        self.language = language
        self.lines: List[str] = [""]
        self.cursor_line: int = 0
        self.cursor_col: int = 0
        self.indent_unit: str = "    "
        self.auto_indent: bool = True
        self.error_lines: Dict[int, str] = {}

        if text:
            self.set_text(text)

    # --- Content ---

    def get_text(self) -> str:
        return "\n".join(self.lines)

    def set_text(self, text: str):
        """Replace the whole buffer; markers no longer apply"""
        self.lines = text.split("\n") if text else [""]
        self.cursor_line = min(self.cursor_line, len(self.lines) - 1)
        self.cursor_col = min(self.cursor_col, len(self.current))
        self.error_lines.clear()

    def get_line(self, line_num: int) -> str:
        """Line at a 0-based index, empty outside the buffer"""
        if 0 <= line_num < len(self.lines):
            return self.lines[line_num]
        return ""

    @property
    def current(self) -> str:
        return self.lines[self.cursor_line]

    def get_current_line(self) -> str:
        """The line a submission would leave"""
        return self.current

    @property
    def line_count(self) -> int:
        return len(self.lines)

    # --- Edits ---

    def _splice(self, start: int, end: int, text: str = ""):
        line = self.current
        self.lines[self.cursor_line] = line[:start] + text + line[end:]

    def insert_char(self, char: str):
        if char == "\n":
            self.insert_newline()
        elif char == "\t":
            width = len(self.indent_unit)
            pad = " " * (width - self.cursor_col % width)
            self._splice(self.cursor_col, self.cursor_col, pad)
            self.cursor_col += len(pad)
        else:
            self._splice(self.cursor_col, self.cursor_col, char)
            self.cursor_col += 1

    def _indent_for_split(self, head: str) -> str:
        if not self.auto_indent:
            return ""
        indent = head[:len(head) - len(head.lstrip(" \t"))]
        if head.rstrip().endswith(BLOCK_OPENERS):
            indent += self.indent_unit
        return indent

    def insert_newline(self):
        """Split at the cursor; the tail moves down with the line's indentation"""
        head, tail = self.current[:self.cursor_col], self.current[self.cursor_col:]
        indent = self._indent_for_split(head)

        # Splitting at column 0 pushes the whole line, marker included, down
        first_moved = self.cursor_line if not head else self.cursor_line + 1
        self._shift_markers(first_moved, 1)

        self.lines[self.cursor_line] = head
        self.lines.insert(self.cursor_line + 1, indent + tail)
        self.cursor_line += 1
        self.cursor_col = len(indent)

    def backspace(self) -> bool:
        if self.cursor_col > 0:
            self._splice(self.cursor_col - 1, self.cursor_col)
            self.cursor_col -= 1
            return True
        if self.cursor_line == 0:
            return False
        self.cursor_line -= 1
        self.cursor_col = len(self.current)
        self._merge_next()
        return True

    def delete(self) -> bool:
        if self.cursor_col < len(self.current):
            self._splice(self.cursor_col, self.cursor_col + 1)
            return True
        if self.cursor_line == len(self.lines) - 1:
            return False
        self._merge_next()
        return True

    def _merge_next(self):
        """Join the following line onto the cursor line"""
        merged = self.cursor_line
        self.lines[merged] += self.lines.pop(merged + 1)
        self.error_lines.pop(merged, None)
        self.error_lines.pop(merged + 1, None)
        self._shift_markers(merged + 2, -1)

    def _shift_markers(self, first: int, delta: int):
        """Move markers on lines >= first by delta"""
        self.error_lines = {
            line + delta if line >= first else line: message
            for line, message in self.error_lines.items()
        }

    # --- Cursor ---

    def move_cursor(self, direction: str) -> bool:
        """Move left, right, up, down, home or end; False if nothing moved"""
        line, col = self.cursor_line, self.cursor_col
        last = len(self.lines) - 1

        if direction == "left":
            if col > 0:
                col -= 1
            elif line > 0:
                line -= 1
                col = len(self.lines[line])
        elif direction == "right":
            if col < len(self.lines[line]):
                col += 1
            elif line < last:
                line, col = line + 1, 0
        elif direction in ("up", "down"):
            line = max(0, min(last, line + (1 if direction == "down" else -1)))
            col = min(col, len(self.lines[line]))
        elif direction == "home":
            col = 0
        elif direction == "end":
            col = len(self.lines[line])
        else:
            return False

        moved = (line, col) != (self.cursor_line, self.cursor_col)
        self.cursor_line, self.cursor_col = line, col
        return moved

    def go_to_line(self, line_num: int):
        """Put the cursor at the end of a 1-indexed line, clamped"""
        self.cursor_line = max(0, min(line_num - 1, len(self.lines) - 1))
        self.cursor_col = len(self.current)

    # --- Markers ---

    def set_error(self, line_num: int, message: str):
        self.error_lines[line_num] = message

    def clear_error(self, line_num: int):
        self.error_lines.pop(line_num, None)

    def clear_errors(self):
        self.error_lines.clear()

    def get_cursor_info(self) -> Dict[str, Any]:
        return {"line": self.cursor_line + 1, "col": self.cursor_col + 1}
