"""
Code Stopper Editor Session

One editor as the host sees it: a buffer, the active language and the
controller guarding line submission.
"""

import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from loguru import logger

from .controller import CodeStopper, RejectedLine, StopperConfig, SUBMIT_KEY
from .editor import CodeEditor
from .languages import Language, get_language_by_id

CURSOR_KEYS = {
    "ArrowLeft": "left",
    "ArrowRight": "right",
    "ArrowUp": "up",
    "ArrowDown": "down",
    "Home": "home",
    "End": "end",
}


@dataclass
class KeyResult:
    """Outcome of one key press"""
    key: str
    cancelled: bool = False
    rejected: Optional[RejectedLine] = None


@dataclass
class EditorSession:
    """An editor instance with its syntax gate"""
    id: str = field(default_factory=lambda: str(uuid.uuid4())[:8])
    editor: CodeEditor = field(default_factory=CodeEditor)
    stopper: CodeStopper = field(default_factory=CodeStopper)
    last_rejection: Optional[RejectedLine] = None

    def __post_init__(self):
        observer = self.stopper.on_validation_error

        def record(rejected: RejectedLine):
            self.last_rejection = rejected
            self.editor.set_error(rejected.line_number - 1, rejected.verdict.message)
            if observer is not None:
                observer(rejected)

        self.stopper.on_validation_error = record

    @classmethod
    def create(
        cls,
        language: Union[Language, str, None] = Language.PYTHON,
        config: Optional[StopperConfig] = None,
        **stopper_kwargs,
    ) -> "EditorSession":
        """Open a session seeded with the language's starter code, if any"""
        tag = Language.parse(language)
        editor = CodeEditor(language=tag)
        starter = get_language_by_id(tag.value) if tag is not None else None
        if starter is not None:
            editor.set_text(starter.default_code)
            editor.go_to_line(editor.line_count)
        session = cls(editor=editor, stopper=CodeStopper(config=config, **stopper_kwargs))
        logger.info(f"Editor session {session.id} opened ({tag.value if tag else 'no language'})")
        return session

    @property
    def language(self) -> Optional[Language]:
        return self.editor.language

    def set_language(self, language: Union[Language, str, None]):
        """Switch language; unknown tags leave the buffer unguarded"""
        self.editor.language = Language.parse(language)
        self.editor.clear_errors()
        self.stopper.notify_edit()

    def set_text(self, text: str):
        self.editor.set_text(text)
        self.editor.go_to_line(self.editor.line_count)
        self.stopper.notify_edit()

    def press_key(self, key: str, shift: bool = False) -> KeyResult:
        """Run a key press through the controller, then apply it if allowed"""
        before = self.last_rejection
        cancelled = self.stopper.intercept_key(key, self.editor, self.language, shift=shift)
        result = KeyResult(key=key, cancelled=cancelled)
        if self.last_rejection is not before:
            result.rejected = self.last_rejection
        if cancelled:
            return result

        if key == SUBMIT_KEY:
            if not shift:
                self.editor.clear_error(self.editor.cursor_line)
            self.editor.insert_newline()
        elif key == "Backspace":
            self.editor.backspace()
        elif key == "Delete":
            self.editor.delete()
        elif key == "Tab":
            self.editor.insert_char('\t')
        elif key in CURSOR_KEYS:
            self.editor.move_cursor(CURSOR_KEYS[key])
        elif len(key) == 1:
            self.editor.insert_char(key)
        return result

    def type_text(self, text: str) -> List[KeyResult]:
        """Press one key per character, newlines as Enter"""
        return [
            self.press_key(SUBMIT_KEY if char == '\n' else char)
            for char in text
        ]

    def close(self):
        self.stopper.dispose()
        logger.info(f"Editor session {self.id} closed")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "language": self.language.value if self.language else None,
            "text": self.editor.get_text(),
            "cursor": self.editor.get_cursor_info(),
            "errors": {str(line + 1): msg for line, msg in self.editor.error_lines.items()},
            "stopper": self.stopper.to_dict(),
        }
