"""
Tests for EditorSession key routing.
"""

from code_stopper.controller import StopperConfig, StopperState
from code_stopper.languages import Language
from code_stopper.session import EditorSession


def make_session(scheduler, language=Language.PYTHON, **kwargs):
    session = EditorSession.create(language=language, scheduler=scheduler, **kwargs)
    session.set_text("")
    return session


class TestCreate:
    """Session creation."""

    def test_seeded_with_starter_code(self, scheduler):
        session = EditorSession.create(language="java", scheduler=scheduler)
        assert session.editor.get_text().startswith("// Java")
        assert session.language is Language.JAVA
        # cursor on the trailing empty line
        assert session.editor.get_current_line() == ""

    def test_language_without_starter_code(self, scheduler):
        session = EditorSession.create(language=Language.GO, scheduler=scheduler)
        assert session.editor.get_text() == ""
        assert session.language is Language.GO

    def test_config_is_injected(self, scheduler):
        session = EditorSession.create(config=StopperConfig(enabled=False), scheduler=scheduler)
        assert not session.stopper.enabled


class TestTyping:
    """Typing through the controller."""

    def test_invalid_line_blocks_newline(self, scheduler):
        session = make_session(scheduler)

        results = session.type_text("for i in range(3)\n")

        assert results[-1].cancelled
        assert results[-1].rejected.line_number == 1
        assert session.editor.lines == ["for i in range(3)"]
        assert session.editor.error_lines == {0: "Python 'for' blocks must end with a colon ':'"}
        assert session.stopper.state == StopperState.ERROR_SHOWN

    def test_fixing_line_then_enter(self, scheduler):
        session = make_session(scheduler)
        session.type_text("for i in range(3)\n")

        session.press_key(":")
        assert session.stopper.state == StopperState.IDLE
        result = session.press_key("Enter")

        assert not result.cancelled
        assert session.editor.lines == ["for i in range(3):", "    "]
        assert session.editor.error_lines == {}

    def test_shift_enter_inserts_literal_newline(self, scheduler):
        session = make_session(scheduler, language=Language.RUST)
        session.type_text("let x = 5")

        result = session.press_key("Enter", shift=True)

        assert not result.cancelled
        assert session.editor.lines == ["let x = 5", ""]

    def test_disabled_session_allows_anything(self, scheduler):
        session = make_session(scheduler, config=StopperConfig(enabled=False))

        session.type_text("for i in range(3)\n")

        assert session.editor.lines == ["for i in range(3)", ""]
        assert session.last_rejection is None

    def test_observer_still_called(self, scheduler, rejections):
        session = make_session(scheduler, language="javascript", on_validation_error=rejections.append)

        session.type_text("const f = (x) =>\n")

        assert [r.verdict.message for r in rejections] == ["Arrow function needs a body or expression."]

    def test_editing_keys(self, scheduler):
        session = make_session(scheduler)
        session.type_text("ab")
        session.press_key("ArrowLeft")
        session.press_key("Backspace")
        session.press_key("End")
        session.press_key("Tab")
        assert session.editor.get_text() == "b   "

    def test_unknown_language_never_blocks(self, scheduler):
        session = make_session(scheduler, language="cobol")
        session.type_text("for i in range(3)\n")
        assert session.language is None
        assert session.editor.line_count == 2


class TestSessionState:
    """Language switching and snapshots."""

    def test_set_language_clears_banner(self, scheduler):
        session = make_session(scheduler)
        session.type_text("let x = 5")

        session.set_language("rust")
        session.press_key("Enter")
        assert session.stopper.state == StopperState.ERROR_SHOWN

        session.set_language("python")
        assert session.stopper.state == StopperState.IDLE
        assert session.editor.error_lines == {}

    def test_to_dict(self, scheduler):
        session = make_session(scheduler, language="go")
        session.type_text("if x > 0\n")

        data = session.to_dict()

        assert data["language"] == "go"
        assert data["text"] == "if x > 0"
        assert data["errors"] == {"1": "Go control statements must end with '{'"}
        assert data["stopper"] == {
            "state": "error_shown",
            "enabled": True,
            "banner_visible": True,
            "banner_message": "Go control statements must end with '{'",
        }

    def test_close_cancels_timer(self, scheduler):
        session = make_session(scheduler)
        session.type_text("while x\n")
        session.close()
        assert scheduler.pending == []


class TestMarkersThroughKeys:
    """Error markers in the snapshot stay on the rejected line."""

    def test_literal_newline_above_rejected_line(self, scheduler):
        session = make_session(scheduler, language=Language.RUST)
        session.set_text("fn main() {\nlet x = 5")
        session.press_key("Enter")

        session.press_key("ArrowUp")
        session.press_key("Home")
        session.press_key("Enter", shift=True)

        data = session.to_dict()
        assert data["text"] == "\nfn main() {\nlet x = 5"
        assert data["errors"] == {"3": "Rust let statements must end with ';'"}

    def test_shift_enter_keeps_marker_on_rejected_line(self, scheduler):
        session = make_session(scheduler, language=Language.RUST)
        session.type_text("let x = 5\n")

        session.press_key("Enter", shift=True)

        assert session.editor.error_lines == {0: "Rust let statements must end with ';'"}

    def test_only_latest_rejection_kept(self, scheduler):
        session = make_session(scheduler, language=Language.RUST)
        first = session.type_text("let x = 5\n")[-1].rejected
        session.press_key("Backspace")
        second = session.press_key("Enter").rejected

        assert first is not None and second is not None
        assert first is not second
        assert session.last_rejection is second
        assert session.press_key("x").rejected is None
