"""
Chirp moderation: a length check followed by profanity replacement.
"""
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

MAX_CHIRP_LENGTH = 140
BANNED_WORDS = frozenset({"kerfuffle", "sharbert", "fornax"})
REPLACEMENT = "****"

TOO_LONG = "too_long"

_BANNED_PATTERN = re.compile(
    "|".join(re.escape(word) for word in sorted(BANNED_WORDS)), re.IGNORECASE
)


class MatchMode(str, Enum):
    WHOLE_WORD = "whole_word"
    SUBSTRING = "substring"


@dataclass(frozen=True)
class ModerationResult:
    is_valid: bool
    cleaned_body: str = ""
    error_reason: Optional[str] = None


def _clean_token(token: str, mode: MatchMode) -> str:
    if mode is MatchMode.SUBSTRING:
        return _BANNED_PATTERN.sub(REPLACEMENT, token)
    if token.lower() in BANNED_WORDS:
        return REPLACEMENT
    return token


# PUBLIC_INTERFACE
def moderate(
    body: str,
    mode: MatchMode = MatchMode.WHOLE_WORD,
    max_length: int = MAX_CHIRP_LENGTH,
) -> ModerationResult:
    """
    Validate and clean a chirp body.

    Bodies longer than max_length characters are rejected with reason
    "too_long". Otherwise banned words are replaced with "****" ignoring
    case, either as whole whitespace-separated tokens or anywhere inside a
    token depending on mode. Tokens are re-joined with single spaces.
    """
    if len(body) > max_length:
        return ModerationResult(is_valid=False, error_reason=TOO_LONG)
    cleaned = " ".join(_clean_token(token, mode) for token in body.split())
    return ModerationResult(is_valid=True, cleaned_body=cleaned)
