#!/usr/bin/env python3
"""
Push a .env file to a GitHub environment, routing sensitive keys to secrets.

Keys containing token/pass/secret (any case) are stored with `gh secret set`;
everything else with `gh variable set`. Values are never printed.

Usage:
  python tools/push_env_secrets.py --env staging --file .env.staging --dry-run
"""

from __future__ import annotations

from envpush.cli import main


if __name__ == "__main__":
    raise SystemExit(main(variant="secrets"))
