"""
Upload a .env file to GitHub Actions secrets/variables through `gh`.

Two variants share this entry point:
- secrets: keys containing token/pass/secret become secrets, the rest variables.
- vars: keys are filtered by --include/--exclude regexes and sent as variables.
"""

from __future__ import annotations

import argparse
import re
import sys
from typing import List, Optional, TextIO

from .config import DEFAULT_ENVIRONMENT, DEFAULT_SOURCE, Configuration
from .dispatch import Store, run
from .envfile import read_lines
from .errors import (
    EnvPushError,
    StoreCommandFailed,
    UnknownFlag,
)
from .policy import DEFAULT_EXCLUDE, DEFAULT_INCLUDE, VARIANTS, policy_for
from .store import GhStore


SEPARATOR = "-" * 41

_EXAMPLES = {
    "secrets": """examples:
  %(prog)s --env production --file .env
  %(prog)s -e staging -f .env.local
  %(prog)s --env prod --org my-org
""",
    "vars": """examples:
  %(prog)s --env production --file .env
  %(prog)s -e staging -f .env.local -i '^(APP_|SPRING_)'
  %(prog)s -e production -x '^(PASSWORD|SECRET|TOKEN)'
  %(prog)s --env prod --org my-org
""",
}


class _ArgumentParser(argparse.ArgumentParser):
    help_out: Optional[TextIO] = None

    def error(self, message: str):  # type: ignore[override]
        raise UnknownFlag(message)

    def print_help(self, file: Optional[TextIO] = None) -> None:
        super().print_help(file if file is not None else self.help_out)


def _regex(value: str) -> re.Pattern:
    try:
        return re.compile(value)
    except re.error as e:
        raise argparse.ArgumentTypeError(f"invalid regex {value!r}: {e}") from e


def build_parser(
    variant: str,
    prog: Optional[str] = None,
    help_out: Optional[TextIO] = None,
) -> argparse.ArgumentParser:
    if variant not in VARIANTS:
        raise ValueError(f"unknown variant: {variant}")

    ap = _ArgumentParser(
        prog=prog,
        description=(
            "Send secrets and variables from a .env file to a GitHub environment."
            if variant == "secrets"
            else "Send variables from a .env file to a GitHub environment."
        ),
        epilog=_EXAMPLES[variant],
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    ap.help_out = help_out
    ap.add_argument("-e", "--env", default=DEFAULT_ENVIRONMENT, help="environment name (default: production)")
    ap.add_argument("-f", "--file", default=DEFAULT_SOURCE, help=".env file to read (default: .env)")
    if variant == "vars":
        ap.add_argument(
            "-i",
            "--include",
            type=_regex,
            default=re.compile(DEFAULT_INCLUDE),
            help="regex a variable NAME must match (default: .*)",
        )
        ap.add_argument(
            "-x",
            "--exclude",
            type=_regex,
            default=re.compile(DEFAULT_EXCLUDE),
            help="regex excluding variable NAMEs (default: ^$)",
        )
    ap.add_argument("-n", "--dry-run", action="store_true", help="send nothing; only show what would be done")
    ap.add_argument("-o", "--org", default=None, help="store at organization level (current repo if omitted)")
    return ap


def _print_banner(config: Configuration, variant: str, out: TextIO) -> None:
    print(f"Environment: {config.environment_name}", file=out)
    print(f".env file: {config.source_path}", file=out)
    if variant == "vars":
        print(f"Include regex: {config.include_pattern.pattern}", file=out)
        print(f"Exclude regex: {config.exclude_pattern.pattern}", file=out)
    print(f"Scope: {config.scope_label()}", file=out)
    print(f"Dry-run: {int(config.dry_run)}", file=out)
    print(SEPARATOR, file=out)


def main(
    argv: Optional[List[str]] = None,
    *,
    variant: str = "secrets",
    store: Optional[Store] = None,
    out: Optional[TextIO] = None,
    err: Optional[TextIO] = None,
    prog: Optional[str] = None,
) -> int:
    out = out if out is not None else sys.stdout
    err = err if err is not None else sys.stderr

    ap = build_parser(variant, prog=prog, help_out=out)
    try:
        args = ap.parse_args(argv)
    except UnknownFlag as e:
        ap.print_usage(err)
        print(f"error: {e}", file=err)
        return 1
    except SystemExit as e:
        # --help
        return e.code if isinstance(e.code, int) else 0

    config = Configuration.from_args(args)
    if store is None:
        store = GhStore()

    try:
        lines = read_lines(config.source_path)
        # Nothing is sent in dry-run, so gh does not have to be usable.
        if not config.dry_run:
            store.check()
    except EnvPushError as e:
        print(f"error: {e}", file=err)
        return 1

    _print_banner(config, variant, out)

    policy = policy_for(variant, config.include_pattern, config.exclude_pattern)
    try:
        summary = run(config, policy, store, out=out, err=err, lines=lines)
    except StoreCommandFailed as e:
        print(f"error: {e}", file=err)
        return e.returncode if e.returncode > 0 else 1
    except EnvPushError as e:
        print(f"error: {e}", file=err)
        return 1

    print(SEPARATOR, file=out)
    print(
        f"dispatched={summary.dispatched} (secrets={summary.secrets}, variables={summary.variables}) "
        f"skipped={summary.skipped} warnings={summary.warnings}",
        file=out,
    )
    print("Done.", file=out)
    return 0


def main_secrets(argv: Optional[List[str]] = None) -> int:
    return main(argv, variant="secrets")


def main_vars(argv: Optional[List[str]] = None) -> int:
    return main(argv, variant="vars")


_MODULE_HELP = """usage: python -m envpush {secrets,vars} [options]

variants:
  secrets   keys containing token/pass/secret become secrets, the rest variables
  vars      keys filtered by --include/--exclude, all sent as variables

Run `python -m envpush <variant> --help` for the options of a variant.
"""


def main_module(
    argv: Optional[List[str]] = None,
    *,
    store: Optional[Store] = None,
    out: Optional[TextIO] = None,
    err: Optional[TextIO] = None,
) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    out = out if out is not None else sys.stdout
    err = err if err is not None else sys.stderr

    if argv and argv[0] in ("-h", "--help"):
        print(_MODULE_HELP, end="", file=out)
        return 0
    if not argv or argv[0] not in VARIANTS:
        print(_MODULE_HELP, end="", file=err)
        if argv:
            print(f"error: unknown variant: {argv[0]}", file=err)
        return 1

    variant = argv[0]
    return main(argv[1:], variant=variant, store=store, out=out, err=err, prog=f"python -m envpush {variant}")
