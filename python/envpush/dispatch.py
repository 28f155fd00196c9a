import sys
from dataclasses import dataclass
from typing import List, Optional, Protocol, TextIO

from .config import Configuration
from .envfile import Entry, iter_entries, read_lines
from .errors import EnvPushWarning, InvalidKeyCharsetWarning
from .policy import Kind
from .store import DEFAULT_BINARY, build_invocation


class Store(Protocol):
    def check(self) -> None: ...

    def set_secret(self, key: str, value: str, environment: str, org: Optional[str] = None) -> None: ...

    def set_variable(self, key: str, value: str, environment: str, org: Optional[str] = None) -> None: ...


class Policy(Protocol):
    def classify(self, entry: Entry) -> Optional[Kind]: ...


@dataclass
class RunSummary:
    dispatched: int = 0
    secrets: int = 0
    variables: int = 0
    skipped: int = 0
    warnings: int = 0


class Dispatcher:
    def __init__(
        self,
        store: Store,
        config: Configuration,
        out: Optional[TextIO] = None,
        binary: str = DEFAULT_BINARY,
    ) -> None:
        self.store = store
        self.config = config
        self.out = out if out is not None else sys.stdout
        self.binary = binary

    def dispatch(self, entry: Entry, kind: Kind) -> None:
        cfg = self.config
        if cfg.dry_run:
            inv = build_invocation(kind, entry.key, entry.value, cfg.environment_name, cfg.org, self.binary)
            print(f"[dry-run] {inv.redacted()}", file=self.out)
            return

        if kind is Kind.SECRET:
            self.store.set_secret(entry.key, entry.value, cfg.environment_name, cfg.org)
            print(f"SECRET {entry.key}", file=self.out)
        else:
            self.store.set_variable(entry.key, entry.value, cfg.environment_name, cfg.org)
            print(f"OK   {entry.key}", file=self.out)


def run(
    config: Configuration,
    policy: Policy,
    store: Store,
    out: Optional[TextIO] = None,
    err: Optional[TextIO] = None,
    binary: str = DEFAULT_BINARY,
    lines: Optional[List[str]] = None,
) -> RunSummary:
    """
    Parse `config.source_path` and dispatch each accepted entry in file order.

    `lines` may hold the file already read with `read_lines`.
    Per-line problems are reported to `err` and skipped. Store failures
    propagate and stop the run; entries already sent stay sent.
    """
    err = err if err is not None else sys.stderr
    summary = RunSummary()
    dispatcher = Dispatcher(store, config, out=out, binary=binary)

    def warn(lineno: int, w: EnvPushWarning) -> None:
        summary.warnings += 1
        print(f"warning: line {lineno}: {w}", file=err)

    if lines is None:
        lines = read_lines(config.source_path)
    for lineno, entry in iter_entries(lines, on_warning=warn):
        try:
            kind = policy.classify(entry)
        except InvalidKeyCharsetWarning as w:
            warn(lineno, w)
            summary.skipped += 1
            continue
        if kind is None:
            summary.skipped += 1
            continue

        dispatcher.dispatch(entry, kind)
        summary.dispatched += 1
        if kind is Kind.SECRET:
            summary.secrets += 1
        else:
            summary.variables += 1

    return summary
