"""
Code Stopper Validation Dispatcher

Routes a (line, language) pair to the matching rule set. Anything the
dispatcher cannot handle is allowed through.
"""

from typing import Dict, Union

from loguru import logger

from .classifier import classify, normalize
from .languages import Language
from .rules import (
    RuleSet,
    validate_cpp,
    validate_go,
    validate_java,
    validate_javascript,
    validate_python,
    validate_rust,
)
from .verdict import Verdict

RULE_SETS: Dict[Language, RuleSet] = {
    Language.JAVA: validate_java,
    Language.PYTHON: validate_python,
    Language.JAVASCRIPT: validate_javascript,
    Language.TYPESCRIPT: validate_javascript,
    Language.CPP: validate_cpp,
    Language.C: validate_cpp,
    Language.GO: validate_go,
    Language.RUST: validate_rust,
}


def validate(line: str, language: Union[Language, str]) -> Verdict:
    """
    Check one line of source text for the given language.

    Args:
        line: Raw line text as read from the buffer
        language: A Language tag or its string value

    Returns:
        A Verdict. Unknown languages and non-text input are valid; this
        function never raises.
    """
    if not isinstance(line, str):
        return Verdict.ok()

    resolved = classify(line)
    if resolved is not None:
        return resolved

    tag = Language.parse(language)
    rule_set = RULE_SETS.get(tag) if tag is not None else None
    if rule_set is None:
        logger.debug(f"No rule set for language {language!r}, allowing line")
        return Verdict.ok()

    try:
        return rule_set(normalize(line))
    except Exception as e:
        logger.warning(f"Rule set for {tag.value} failed on {line!r}: {e}")
        return Verdict.ok()
