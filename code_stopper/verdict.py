"""
Validation verdicts returned by the line validator.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Verdict:
    """Validity of one line, with a message only when it is rejected"""
    valid: bool
    message: Optional[str] = None

    def __post_init__(self):
        if self.valid and self.message is not None:
            raise ValueError("a valid verdict cannot carry a message")
        if not self.valid and not self.message:
            raise ValueError("a rejected verdict needs a message")

    @classmethod
    def ok(cls) -> "Verdict":
        return cls(valid=True)

    @classmethod
    def reject(cls, message: str) -> "Verdict":
        return cls(valid=False, message=message)

    def to_dict(self) -> Dict[str, Any]:
        return {"valid": self.valid, "message": self.message}
