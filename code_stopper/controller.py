"""
Code Stopper Controller

Intercepts line submission (Enter) on an editor buffer, validates the line
being left and blocks the newline when the line is rejected.

State machine:
    IDLE --submit invalid line--> ERROR_SHOWN
    ERROR_SHOWN --timeout | any key | submit valid line--> IDLE
"""

import asyncio
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Callable, Optional, Protocol, Union

from loguru import logger

from .editor import CodeEditor
from .languages import Language
from .validator import validate
from .verdict import Verdict

SUBMIT_KEY = "Enter"


class StopperState(str, Enum):
    IDLE = "idle"
    ERROR_SHOWN = "error_shown"


@dataclass
class StopperConfig:
    """Settings handed to the controller by its host"""
    enabled: bool = True
    banner_timeout: float = 3.0  # seconds


@dataclass(frozen=True)
class RejectedLine:
    """What the observer gets when a line is rejected"""
    verdict: Verdict
    line_text: str
    language: Language
    line_number: int  # 1-indexed

    def to_dict(self) -> dict:
        return {
            "message": self.verdict.message,
            "line_text": self.line_text,
            "language": self.language.value,
            "line_number": self.line_number,
        }


class TimerHandle(Protocol):
    def cancel(self) -> Any: ...


Scheduler = Callable[[float, Callable[[], None]], Optional[TimerHandle]]


def asyncio_scheduler(delay: float, callback: Callable[[], None]) -> Optional[TimerHandle]:
    """Schedule on the running event loop; without one nothing is armed"""
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        logger.debug("No running event loop, banner will clear on next key")
        return None
    return loop.call_later(delay, callback)


class CodeStopper:
    """
    Per-editor syntax gate.

    Owns the transient banner state. The rule engine it calls is stateless,
    so one controller per editor instance is all the state there is.
    """

    def __init__(
        self,
        config: Optional[StopperConfig] = None,
        on_validation_error: Optional[Callable[[RejectedLine], None]] = None,
        on_dismiss: Optional[Callable[[], None]] = None,
        scheduler: Optional[Scheduler] = None,
    ):
        # Own copy: toggling one controller must not toggle another
        self.config = replace(config) if config is not None else StopperConfig()
        self.on_validation_error = on_validation_error
        self.on_dismiss = on_dismiss
        self.scheduler = scheduler or asyncio_scheduler

        self.last_verdict: Optional[Verdict] = None
        self.banner_visible: bool = False
        self._timer: Optional[TimerHandle] = None
        self._generation: int = 0

    @property
    def enabled(self) -> bool:
        return self.config.enabled

    @property
    def state(self) -> StopperState:
        return StopperState.ERROR_SHOWN if self.banner_visible else StopperState.IDLE

    @property
    def banner_message(self) -> Optional[str]:
        if self.banner_visible and self.last_verdict is not None:
            return self.last_verdict.message
        return None

    def set_enabled(self, enabled: bool):
        """Toggle interception; turning it off also clears a shown banner"""
        self.config.enabled = enabled
        if not enabled:
            self._dismiss()
        logger.debug(f"Code stopper {'enabled' if enabled else 'disabled'}")

    def intercept_key(
        self,
        key: str,
        editor: Optional[CodeEditor],
        language: Union[Language, str, None],
        shift: bool = False,
    ) -> bool:
        """
        Handle a key press before the editor applies it.

        Returns:
            True when the default action must be cancelled
        """
        if key == SUBMIT_KEY and not shift:
            return not self.handle_submission(editor, language)
        self.notify_edit()
        return False

    def handle_submission(
        self,
        editor: Optional[CodeEditor],
        language: Union[Language, str, None],
    ) -> bool:
        """
        Validate the current line on Enter.

        Returns:
            True when the submission may proceed
        """
        if not self.enabled:
            return True

        tag = Language.parse(language)
        if editor is None or tag is None:
            return True

        line_text = editor.get_current_line()
        verdict = validate(line_text, tag)

        if verdict.valid:
            self.last_verdict = verdict
            self._dismiss()
            return True

        line_number = editor.cursor_line + 1
        logger.debug(f"Rejected line {line_number} ({tag.value}): {verdict.message}")
        self._show(verdict)
        self._notify(RejectedLine(
            verdict=verdict,
            line_text=line_text,
            language=tag,
            line_number=line_number,
        ))
        return False

    def notify_edit(self):
        """Any further keystroke clears a shown banner"""
        if self.banner_visible:
            self._dismiss()

    def dispose(self):
        """Release the pending timer when the editor goes away"""
        self._cancel_timer()
        self.banner_visible = False

    def _show(self, verdict: Verdict):
        self._cancel_timer()
        self.last_verdict = verdict
        self.banner_visible = True
        self._generation += 1
        generation = self._generation
        self._timer = self.scheduler(
            self.config.banner_timeout, lambda: self._on_timeout(generation)
        )

    def _on_timeout(self, generation: int):
        # A superseded timer must not clear a newer banner
        if generation != self._generation:
            return
        self._timer = None
        self._dismiss()

    def _dismiss(self):
        self._cancel_timer()
        if not self.banner_visible:
            return
        self.banner_visible = False
        if self.on_dismiss is not None:
            try:
                self.on_dismiss()
            except Exception as e:
                logger.warning(f"Banner dismiss callback failed: {e}")

    def _cancel_timer(self):
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _notify(self, rejected: RejectedLine):
        if self.on_validation_error is None:
            return
        try:
            self.on_validation_error(rejected)
        except Exception as e:
            logger.warning(f"Validation error callback failed: {e}")

    def to_dict(self) -> dict:
        return {
            "state": self.state.value,
            "enabled": self.enabled,
            "banner_visible": self.banner_visible,
            "banner_message": self.banner_message,
        }
