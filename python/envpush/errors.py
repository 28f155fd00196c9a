class EnvPushError(RuntimeError):
    pass


class ConfigFileNotFound(EnvPushError):
    def __init__(self, path: str) -> None:
        super().__init__(f"file not found: {path}")
        self.path = path


class ConfigFileUnreadable(EnvPushError):
    def __init__(self, path: str, cause: Exception) -> None:
        super().__init__(f"cannot read {path}: {cause}")
        self.path = path


class ExternalToolMissing(EnvPushError):
    def __init__(self, binary: str) -> None:
        super().__init__(f"'{binary}' not found in PATH. Install the GitHub CLI.")
        self.binary = binary


class ExternalToolUnauthenticated(EnvPushError):
    def __init__(self, binary: str) -> None:
        super().__init__(f"'{binary}' is not authenticated. Run: {binary} auth login")
        self.binary = binary


class StoreCommandFailed(EnvPushError):
    def __init__(self, key: str, returncode: int) -> None:
        super().__init__(f"store command failed for {key} (exit {returncode})")
        self.key = key
        self.returncode = returncode


class UnknownFlag(EnvPushError):
    pass


class EnvPushWarning(UserWarning):
    pass


class MalformedLineWarning(EnvPushWarning):
    pass


class InvalidKeyCharsetWarning(EnvPushWarning):
    def __init__(self, key: str) -> None:
        super().__init__(f"invalid variable name (allowed: A-Z a-z 0-9 _): {key}")
        self.key = key
