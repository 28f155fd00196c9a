import re
from enum import Enum
from typing import Optional, Tuple

from .envfile import Entry
from .errors import InvalidKeyCharsetWarning


SECRET_MARKERS: Tuple[str, ...] = ("token", "pass", "secret")
KEY_CHARSET_RE = re.compile(r"[A-Za-z0-9_]+")

DEFAULT_INCLUDE = ".*"  # everything
DEFAULT_EXCLUDE = "^$"  # nothing (keys are never empty)


class Kind(str, Enum):
    SECRET = "secret"
    VARIABLE = "variable"


def is_secret_key(key: str) -> bool:
    # Plain substring search: PASSWORD, MyTokenValue and SECRETS_DIR all count.
    lowered = key.lower()
    return any(marker in lowered for marker in SECRET_MARKERS)


def is_valid_key(key: str) -> bool:
    return KEY_CHARSET_RE.fullmatch(key) is not None


class SecretClassifier:
    """Dispatch every entry; keys that look sensitive become secrets."""

    def classify(self, entry: Entry) -> Optional[Kind]:
        return Kind.SECRET if is_secret_key(entry.key) else Kind.VARIABLE


class RegexFilter:
    """
    Keep keys matching `include_pattern` and not matching `exclude_pattern`.

    Both patterns are searched (unanchored), like the shell `=~` operator.
    Survivors must consist of `[A-Za-z0-9_]` only and are always variables.
    """

    def __init__(
        self,
        include_pattern: Optional[re.Pattern[str]] = None,
        exclude_pattern: Optional[re.Pattern[str]] = None,
    ) -> None:
        self.include_pattern = include_pattern if include_pattern is not None else re.compile(DEFAULT_INCLUDE)
        self.exclude_pattern = exclude_pattern if exclude_pattern is not None else re.compile(DEFAULT_EXCLUDE)

    def classify(self, entry: Entry) -> Optional[Kind]:
        if not self.include_pattern.search(entry.key):
            return None
        if self.exclude_pattern.search(entry.key):
            return None
        if not is_valid_key(entry.key):
            raise InvalidKeyCharsetWarning(entry.key)
        return Kind.VARIABLE


VARIANTS = ("secrets", "vars")


def policy_for(variant: str, include_pattern=None, exclude_pattern=None):
    if variant == "secrets":
        return SecretClassifier()
    if variant == "vars":
        return RegexFilter(include_pattern, exclude_pattern)
    raise ValueError(f"unknown variant: {variant}")
