from .config import Configuration
from .dispatch import Dispatcher, RunSummary, run
from .envfile import Entry, iter_entries, normalize_line, parse_line, read_entries, read_lines
from .errors import (
    ConfigFileNotFound,
    ConfigFileUnreadable,
    EnvPushError,
    EnvPushWarning,
    ExternalToolMissing,
    ExternalToolUnauthenticated,
    InvalidKeyCharsetWarning,
    MalformedLineWarning,
    StoreCommandFailed,
    UnknownFlag,
)
from .policy import Kind, RegexFilter, SecretClassifier, policy_for
from .store import GhStore, Invocation, build_invocation

__all__ = [
    "Configuration",
    "Dispatcher",
    "RunSummary",
    "run",
    "Entry",
    "iter_entries",
    "normalize_line",
    "parse_line",
    "read_entries",
    "read_lines",
    "ConfigFileNotFound",
    "ConfigFileUnreadable",
    "EnvPushError",
    "EnvPushWarning",
    "ExternalToolMissing",
    "ExternalToolUnauthenticated",
    "InvalidKeyCharsetWarning",
    "MalformedLineWarning",
    "StoreCommandFailed",
    "UnknownFlag",
    "Kind",
    "RegexFilter",
    "SecretClassifier",
    "policy_for",
    "GhStore",
    "Invocation",
    "build_invocation",
]
