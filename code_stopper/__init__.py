"""
Code Stopper
============

A per-keystroke syntax gate for a multi-language code editor. When the user
presses Enter, the line being left is checked with a small set of
language-specific heuristics and the newline is held back if the line is
clearly malformed.

Components:
- Classifier: blank and comment lines always pass
- Rule sets: Java, Python, JavaScript/TypeScript, C/C++, Go, Rust
- Dispatcher: validate(line, language) -> Verdict, fail-open
- Controller: Idle / ErrorShown state machine with auto-dismiss
- Editor session: text buffer plus controller, driven by key presses

Architecture:
    [Key press] → [Controller] → [Dispatcher] → [Classifier | Rule set]
                        ↓
    [Banner / observer] ← [Verdict]
"""

from .languages import Language, LanguageConfig, EDITOR_LANGUAGES, get_language_by_id, get_language_by_extension
from .verdict import Verdict
from .validator import validate, RULE_SETS
from .editor import CodeEditor
from .controller import CodeStopper, StopperConfig, StopperState, RejectedLine
from .session import EditorSession, KeyResult

__version__ = "1.0.0"
__all__ = [
    "Language",
    "LanguageConfig",
    "EDITOR_LANGUAGES",
    "get_language_by_id",
    "get_language_by_extension",
    "Verdict",
    "validate",
    "RULE_SETS",
    "CodeEditor",
    "CodeStopper",
    "StopperConfig",
    "StopperState",
    "RejectedLine",
    "EditorSession",
    "KeyResult",
]
