import re
from dataclasses import dataclass
from typing import Any, Optional


DEFAULT_ENVIRONMENT = "production"
DEFAULT_SOURCE = ".env"
CURRENT_REPO = "<current repo>"


@dataclass(frozen=True)
class Configuration:
    environment_name: str = DEFAULT_ENVIRONMENT
    source_path: str = DEFAULT_SOURCE
    dry_run: bool = False
    org: Optional[str] = None
    include_pattern: Optional[re.Pattern[str]] = None
    exclude_pattern: Optional[re.Pattern[str]] = None

    @classmethod
    def from_args(cls, args: Any) -> "Configuration":
        return cls(
            environment_name=args.env,
            source_path=args.file,
            dry_run=bool(args.dry_run),
            org=args.org,
            include_pattern=getattr(args, "include", None),
            exclude_pattern=getattr(args, "exclude", None),
        )

    def scope_label(self) -> str:
        return f"--org {self.org}" if self.org else CURRENT_REPO
