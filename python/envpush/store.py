import shutil
import subprocess
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from .errors import ExternalToolMissing, ExternalToolUnauthenticated, StoreCommandFailed
from .policy import Kind


DEFAULT_BINARY = "gh"


@dataclass(frozen=True)
class Invocation:
    argv: Tuple[str, ...]
    kind: Kind
    key: str
    value_length: int

    def redacted(self) -> str:
        # argv ends with ("--body", value); show only the length.
        shown = list(self.argv[:-1])
        shown.append(f"'***{self.value_length} chars***'")
        return " ".join(shown)


def build_invocation(
    kind: Kind,
    key: str,
    value: str,
    environment: str,
    org: Optional[str] = None,
    binary: str = DEFAULT_BINARY,
) -> Invocation:
    argv: List[str] = [binary, kind.value, "set", key, "--env", environment]
    if org:
        argv += ["--org", org]
    # --body keeps spaces and '=' in the value intact.
    argv += ["--body", value]
    return Invocation(argv=tuple(argv), kind=kind, key=key, value_length=len(value))


class GhStore:
    """Secrets/variables store backed by the GitHub CLI."""

    def __init__(
        self,
        binary: str = DEFAULT_BINARY,
        runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
        which: Callable[[str], Optional[str]] = shutil.which,
    ) -> None:
        self.binary = binary
        self.runner = runner
        self.which = which

    def check(self) -> None:
        if self.which(self.binary) is None:
            raise ExternalToolMissing(self.binary)
        try:
            p = self.runner(
                [self.binary, "auth", "status"],
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except FileNotFoundError as e:
            raise ExternalToolMissing(self.binary) from e
        if p.returncode != 0:
            raise ExternalToolUnauthenticated(self.binary)

    def set_secret(self, key: str, value: str, environment: str, org: Optional[str] = None) -> None:
        self._run(build_invocation(Kind.SECRET, key, value, environment, org, self.binary))

    def set_variable(self, key: str, value: str, environment: str, org: Optional[str] = None) -> None:
        self._run(build_invocation(Kind.VARIABLE, key, value, environment, org, self.binary))

    def _run(self, invocation: Invocation) -> None:
        try:
            p = self.runner(list(invocation.argv))
        except FileNotFoundError as e:
            raise ExternalToolMissing(self.binary) from e
        if p.returncode != 0:
            raise StoreCommandFailed(invocation.key, p.returncode)
