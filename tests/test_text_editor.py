import pytest

from quadkit.text_editor import ClickState, EditboxState


def test_insert_character_undo_redo():
    state = EditboxState()
    text = state.insert_character("bc", "a")
    assert text == "abc"
    assert state.cursor == 1
    undone = state.undo(text)
    assert undone == "bc"
    assert state.cursor == 0
    assert state.redo(undone) == text
    assert state.cursor == 1


def test_insert_string_moves_cursor_and_undoes():
    state = EditboxState()
    text = state.insert_string("world", "hello ")
    assert text.startswith("hello ")
    assert text.endswith("world")
    assert state.cursor == len("hello ")
    assert state.undo(text) == "world"


def test_insert_clears_selection_and_redo():
    state = EditboxState()
    text = state.insert_character("", "a")
    text = state.undo(text)
    state.selection = (0, 0)
    text = state.insert_character(text, "b")
    assert state.selection is None
    assert state.redo(text) == text


def test_delete_next_character_at_end_does_nothing():
    state = EditboxState(cursor=3)
    text = state.delete_next_character("abc")
    assert text == "abc"
    assert state.undo(text) == "abc"


def test_backspace_and_undo_restore():
    state = EditboxState(cursor=3)
    text = state.delete_current_character("abcd")
    assert len(text) == 3
    assert state.cursor == 2
    assert "c" not in text
    assert state.undo(text) == "abcd"
    assert state.cursor == 3


def test_backspace_at_start_is_noop():
    state = EditboxState()
    assert state.delete_current_character("abc") == "abc"
    assert state.cursor == 0


def test_select_all_and_delete():
    state = EditboxState()
    state.select_all("hello")
    assert state.selected_text("hello") == "hello"
    text = state.delete_selected("hello")
    assert text == ""
    assert state.cursor == 0
    assert state.selection is None
    assert state.undo(text) == "hello"


def test_delete_reversed_selection():
    state = EditboxState(selection=(4, 1))
    text = state.delete_selected("abcdef")
    assert len(text) == 3
    assert state.cursor == 1
    assert state.undo(text) == "abcdef"


def test_reversed_selection_range():
    state = EditboxState(selection=(5, 1))
    assert state.selected_text("abcdefg") == "abcdefg"[1:5]
    assert state.in_selected_range(1)
    assert not state.in_selected_range(5)
    assert not state.in_selected_range(0)


def test_no_selection():
    state = EditboxState()
    assert state.selected_text("abc") is None
    assert not state.in_selected_range(0)


def test_clamp_selection():
    state = EditboxState(selection=(10, 20))
    state.clamp_selection("abc")
    assert state.selection == (3, 3)
    assert state.selected_text("abc") == ""


def test_selected_text_outside_raises():
    state = EditboxState(selection=(0, 10))
    with pytest.raises(ValueError):
        state.selected_text("abc")


def test_find_line_bounds():
    text = "ab\ncdef\ngh"
    state = EditboxState(cursor=5)
    begin = state.find_line_begin(text)
    end = state.find_line_end(text)
    assert text[state.cursor - begin - 1] == "\n"
    assert text[state.cursor + end] == "\n"
    assert "\n" not in text[state.cursor - begin : state.cursor + end]


@pytest.mark.parametrize("character", [" ", "(", ")", ";", '"'])
def test_word_delimiters(character):
    assert EditboxState.word_delimiter(character)


@pytest.mark.parametrize("character", ["a", "\n", "1", "_"])
def test_non_delimiters(character):
    assert not EditboxState.word_delimiter(character)


def test_select_word_includes_trailing_space():
    text = "hello world"
    state = EditboxState(cursor=2)
    selection = state.select_word(text)
    assert state.selection == selection
    assert state.selected_text(text) == "hello "


def test_select_line():
    text = "ab\ncd\nef"
    state = EditboxState(cursor=4)
    state.select_line(text)
    assert state.selected_text(text) == "cd"


def test_move_cursor_with_and_without_shift():
    state = EditboxState(cursor=1)
    state.move_cursor("abcdef", 2, True)
    assert state.cursor == 3
    assert state.selection == (1, 3)
    state.move_cursor("abcdef", 1, True)
    assert state.selection == (1, 4)
    state.move_cursor("abcdef", -1, False)
    assert state.selection is None
    assert state.cursor == 3


def test_move_cursor_out_of_range_is_ignored():
    state = EditboxState(cursor=2)
    state.move_cursor("abc", 5, False)
    assert state.cursor == 2
    state.move_cursor("abc", -3, False)
    assert state.cursor == 2


def test_move_within_line_stops_at_newline():
    text = "ab\ncd"
    state = EditboxState()
    state.move_cursor_within_line(text, 5, False)
    assert state.cursor == text.index("\n")


def test_move_within_line_rejects_negative():
    with pytest.raises(ValueError):
        EditboxState().move_cursor_within_line("abc", -1, False)


def test_word_jumps():
    text = "foo bar baz"
    state = EditboxState()
    state.move_cursor_next_word(text, False)
    assert state.cursor == text.index("bar")
    state.cursor = text.index("baz")
    state.move_cursor_prev_word(text, False)
    assert state.cursor == text.index("bar")


def test_drag_selection():
    text = "hello world"
    state = EditboxState()
    state.click_down(0.0, text, 2)
    assert state.click_state is ClickState.SELECTING_CHARS
    state.click_move(text, 5)
    state.click_up(text)
    assert state.selection == (2, 5)
    assert state.click_state is ClickState.SELECTED
    assert state.cursor == 5


def test_click_without_drag_clears_selection():
    text = "hello"
    state = EditboxState()
    state.click_down(0.0, text, 2)
    state.click_move(text, 2)
    state.click_up(text)
    assert state.selection is None
    assert state.click_state is ClickState.NONE


def test_double_click_selects_word_triple_selects_line():
    text = "hello world\nnext"
    state = EditboxState()
    state.click_down(0.0, text, 2)
    state.click_move(text, 2)
    state.click_up(text)
    state.click_down(0.1, text, 2)
    assert state.click_state is ClickState.SELECTING_WORDS
    assert state.selected_text(text).startswith("hello")
    state.click_down(0.2, text, 2)
    assert state.click_state is ClickState.SELECTING_LINES
    assert state.selected_text(text) == text.split("\n")[0]


def test_undo_on_empty_history():
    state = EditboxState()
    assert state.undo("abc") == "abc"
    assert state.redo("abc") == "abc"