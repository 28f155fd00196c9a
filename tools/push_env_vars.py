#!/usr/bin/env python3
"""
Push selected keys of a .env file to a GitHub environment as variables.

Only keys matching --include and not matching --exclude are sent; names outside
[A-Za-z0-9_] are skipped with a warning.

Usage:
  python tools/push_env_vars.py -e production -i '^(APP_|SPRING_)' -n
"""

from __future__ import annotations

from envpush.cli import main


if __name__ == "__main__":
    raise SystemExit(main(variant="vars"))
