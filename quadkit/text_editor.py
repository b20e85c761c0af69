"""Text editing state behind an edit box: cursor, selection, clicks and undo."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Protocol

DOUBLE_CLICK_TIME = 0.5


def _char_at(text: str, index: int, default: str) -> str:
    return text[index] if 0 <= index < len(text) else default


class _Command(Protocol):
    def apply(self, text: str) -> tuple[int, str]: ...

    def unapply(self, text: str) -> tuple[int, str]: ...


@dataclass(frozen=True)
class _InsertCharacter:
    cursor: int
    character: str

    def apply(self, text: str) -> tuple[int, str]:
        c = self.cursor
        if c <= len(text):
            text = text[:c] + self.character + text[c:]
        return c + 1, text

    def unapply(self, text: str) -> tuple[int, str]:
        c = self.cursor
        if c < len(text):
            text = text[:c] + text[c + 1 :]
        return c, text


@dataclass(frozen=True)
class _InsertString:
    cursor: int
    data: str

    def apply(self, text: str) -> tuple[int, str]:
        c = self.cursor
        if c <= len(text):
            text = text[:c] + self.data + text[c:]
        return c + len(self.data), text

    def unapply(self, text: str) -> tuple[int, str]:
        c = self.cursor
        if c < len(text):
            end = min(c + len(self.data), len(text))
            text = text[:c] + text[end:]
        return c, text


@dataclass(frozen=True)
class _DeleteCharacter:
    cursor: int
    character: str

    def apply(self, text: str) -> tuple[int, str]:
        c = self.cursor
        if c < len(text):
            text = text[:c] + text[c + 1 :]
        return c, text

    def unapply(self, text: str) -> tuple[int, str]:
        c = self.cursor
        if c <= len(text):
            text = text[:c] + self.character + text[c:]
        return c + 1, text


@dataclass(frozen=True)
class _DeleteRange:
    low: int
    high: int
    data: str

    def apply(self, text: str) -> tuple[int, str]:
        return self.low, text[: self.low] + text[self.high :]

    def unapply(self, text: str) -> tuple[int, str]:
        return self.low, text[: self.low] + self.data + text[self.low :]


class ClickState(enum.Enum):
    """What a mouse drag inside the edit box is currently selecting."""

    NONE = "none"
    SELECTING_CHARS = "selecting_chars"
    SELECTING_WORDS = "selecting_words"
    SELECTING_LINES = "selecting_lines"
    SELECTED = "selected"


@dataclass
class EditboxState:
    """Cursor, selection, click tracking and undo history of one edit box.

    Methods that change the text take the current text and return the new one.
    """

    cursor: int = 0
    click_state: ClickState = ClickState.NONE
    # start of a character drag, or the word/line range being extended
    click_range: tuple[int, int] = (0, 0)
    clicks_counter: int = 0
    current_click: int = 0
    last_click_time: float = 0.0
    last_click: int = 0
    selection: tuple[int, int] | None = None
    _undo_stack: list[_Command] = field(default_factory=list, repr=False)
    _redo_stack: list[_Command] = field(default_factory=list, repr=False)

    def _run(self, command: _Command, text: str) -> str:
        self.cursor, text = command.apply(text)
        self._undo_stack.append(command)
        return text

    def clamp_selection(self, text: str) -> None:
        """Keep the selection inside the text after an outside change."""
        if self.selection is not None:
            start, end = self.selection
            self.selection = (min(start, len(text)), min(end, len(text)))

    def selected_text(self, text: str) -> str | None:
        """The selected part of the text, or None without a selection."""
        if self.selection is None:
            return None
        low, high = sorted(self.selection)
        if high > len(text):
            raise ValueError("selection lies outside the text")
        return text[low:high]

    def in_selected_range(self, cursor: int) -> bool:
        """True if the character at the given index is selected."""
        if self.selection is None:
            return False
        low, high = sorted(self.selection)
        return low <= cursor < high

    def find_line_begin(self, text: str) -> int:
        """Distance from the cursor back to the start of its line."""
        pos = self.cursor
        while pos > 0 and _char_at(text, pos - 1, "x") != "\n":
            pos -= 1
        return self.cursor - pos

    def find_line_end(self, text: str) -> int:
        """Distance from the cursor forward to the end of its line."""
        pos = self.cursor
        while pos < len(text) and text[pos] != "\n":
            pos += 1
        return max(pos - self.cursor, 0)

    @staticmethod
    def word_delimiter(character: str) -> bool:
        """True for characters that separate words."""
        return character in (" ", "(", ")", ";", '"')

    def find_word_begin(self, text: str, cursor: int) -> int:
        """Distance from cursor back to the start of the word."""
        pos = cursor
        while pos > 0:
            current = _char_at(text, pos - 1, " ")
            if self.word_delimiter(current) or current == "\n":
                break
            pos -= 1
        return cursor - pos

    def find_word_end(self, text: str, cursor: int) -> int:
        """Distance from cursor forward past the word and its trailing delimiters."""
        pos = cursor
        space_skipping = False
        while pos < len(text):
            current = text[pos]
            if self.word_delimiter(current) or current == "\n":
                space_skipping = True
            if space_skipping and not self.word_delimiter(current):
                break
            pos += 1
        return pos - cursor if pos > cursor else 0

    def insert_character(self, text: str, character: str) -> str:
        """Insert one character at the cursor."""
        self._redo_stack.clear()
        self.selection = None
        return self._run(_InsertCharacter(self.cursor, character), text)

    def insert_string(self, text: str, string: str) -> str:
        """Insert a string at the cursor."""
        self._redo_stack.clear()
        self.selection = None
        return self._run(_InsertString(self.cursor, string), text)

    def delete_selected(self, text: str) -> str:
        """Remove the selected text, if any, and clear the selection."""
        self._redo_stack.clear()
        if self.selection is not None:
            low, high = sorted(self.selection)
            text = self._run(_DeleteRange(low, high, text[low:high]), text)
        self.selection = None
        return text

    def delete_next_character(self, text: str) -> str:
        """Remove the character under the cursor."""
        self._redo_stack.clear()
        if 0 <= self.cursor < len(text):
            text = self._run(_DeleteCharacter(self.cursor, text[self.cursor]), text)
        return text

    def delete_current_character(self, text: str) -> str:
        """Remove the character before the cursor."""
        if self.cursor > 0:
            self.cursor -= 1
            text = self.delete_next_character(text)
        return text

    def move_cursor_next_word(self, text: str, shift: bool) -> None:
        """Jump to the start of the next word."""
        next_word = self.find_word_end(text, self.cursor + 1) + 1
        self.move_cursor(text, next_word, shift)

    def move_cursor_prev_word(self, text: str, shift: bool) -> None:
        """Jump to the start of the previous word."""
        if self.cursor > 1:
            prev_word = self.find_word_begin(text, self.cursor - 1) + 1
            self.move_cursor(text, -prev_word, shift)

    def move_cursor(self, text: str, dx: int, shift: bool) -> None:
        """Move the cursor by dx; with shift, extend the selection."""
        start = self.cursor
        end = start
        target = self.cursor + dx
        if 0 <= target <= len(text):
            end = target
            self.cursor = target

        if not shift:
            self.selection = None
        elif self.selection is None:
            self.selection = (start, end)
        else:
            self.selection = (self.selection[0], end)

    def move_cursor_within_line(self, text: str, dx: int, shift: bool) -> None:
        """Move right by up to dx, stopping at the end of the line."""
        if dx < 0:
            raise ValueError("only forward movement within a line is supported")
        for _ in range(dx):
            if _char_at(text, self.cursor, "x") == "\n" or self.cursor == len(text):
                break
            self.move_cursor(text, 1, shift)

    def select_all(self, text: str) -> None:
        """Select the whole text."""
        self.selection = (0, len(text))
        self.click_state = ClickState.NONE

    def deselect(self) -> None:
        """Drop the selection and any click in progress."""
        self.click_state = ClickState.NONE
        self.selection = None

    def select_word(self, text: str) -> tuple[int, int]:
        """Select the word under the cursor and return its range."""
        begin = self.find_word_begin(text, self.cursor)
        end = self.find_word_end(text, self.cursor)
        self.selection = (self.cursor - begin, self.cursor + end)
        return self.selection

    def select_line(self, text: str) -> tuple[int, int]:
        """Select the line under the cursor and return its range."""
        begin = self.find_line_begin(text)
        end = self.find_line_end(text)
        self.selection = (self.cursor - begin, self.cursor + end)
        return self.selection

    def click_down(self, time: float, text: str, cursor: int) -> None:
        """Handle a mouse press on character index cursor at the given time."""
        self.current_click = cursor

        if self.last_click == cursor and time - self.last_click_time < DOUBLE_CLICK_TIME:
            self.clicks_counter += 1
            phase = self.clicks_counter % 3
            if phase == 0:
                self.deselect()
            elif phase == 1:
                self.click_range = self.select_word(text)
                self.click_state = ClickState.SELECTING_WORDS
            else:
                self.click_range = self.select_line(text)
                self.click_state = ClickState.SELECTING_LINES
        else:
            self.clicks_counter = 0
            if self.click_state in (ClickState.NONE, ClickState.SELECTED):
                self.click_state = ClickState.SELECTING_CHARS
                self.click_range = (cursor, cursor)
                self.selection = (cursor, cursor)
            else:
                self.click_state = ClickState.NONE
                self.selection = None
                self.cursor = cursor

        self.last_click_time = time

    def click_move(self, text: str, cursor: int) -> None:
        """Handle a mouse drag onto character index cursor."""
        self.cursor = cursor
        if self.cursor != self.last_click:
            self.clicks_counter = 0

        low, high = self.click_range
        if self.click_state is ClickState.SELECTING_CHARS:
            self.selection = (low, cursor)
        elif self.click_state is ClickState.SELECTING_WORDS:
            if cursor < low:
                word_begin = self.cursor - self.find_word_begin(text, self.cursor)
                self.selection = (word_begin, high)
                self.cursor = word_begin
            elif cursor > high:
                word_end = self.cursor + self.find_word_end(text, self.cursor)
                self.selection = (low, word_end)
                self.cursor = word_end
            else:
                self.selection = (low, high)
                self.cursor = high
        elif self.click_state is ClickState.SELECTING_LINES:
            if cursor < low:
                line_begin = self.cursor - self.find_line_begin(text)
                line_end = self.cursor + self.find_line_end(text)
                self.selection = (line_begin, high)
                self.cursor = line_end
            elif cursor > high:
                line_end = self.cursor + self.find_line_end(text)
                self.selection = (low, line_end)
                self.cursor = line_end
            else:
                self.selection = (low, high)
                self.cursor = high

        self.last_click = cursor

    def click_up(self, text: str) -> None:
        """Handle a mouse release, keeping a non-empty selection."""
        self.click_state = ClickState.NONE
        if self.selection is not None:
            start, end = self.selection
            if start != end:
                self.click_state = ClickState.SELECTED
            else:
                self.selection = None

    def undo(self, text: str) -> str:
        """Revert the last edit."""
        if self._undo_stack:
            command = self._undo_stack.pop()
            self.cursor, text = command.unapply(text)
            self._redo_stack.append(command)
        return text

    def redo(self, text: str) -> str:
        """Apply again the last reverted edit."""
        if self._redo_stack:
            command = self._redo_stack.pop()
            self.cursor, text = command.apply(text)
            self._undo_stack.append(command)
        return text