"""Tests for the active-note state."""

from notenamer.state import get_app_state, reset_app_state


def test_state_is_shared():
    """Every caller sees the same state until it is reset."""
    get_app_state().select("a.md")
    assert get_app_state().active_document == "a.md"

    reset_app_state()
    assert get_app_state().active_document is None


def test_follow_rename_only_moves_matching_selection():
    """Only a rename of the selected note moves the selection."""
    state = get_app_state()
    state.select("a.md")

    assert not state.follow_rename("b.md", "c.md")
    assert state.active_document == "a.md"
    assert state.follow_rename("a.md", "d.md")
    assert state.active_document == "d.md"


def test_forget_only_clears_matching_selection():
    """Forgetting another note keeps the selection."""
    state = get_app_state()
    state.select("a.md")

    state.forget("b.md")
    assert state.active_document == "a.md"
    state.forget("a.md")
    assert state.active_document is None
