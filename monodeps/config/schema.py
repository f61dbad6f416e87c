"""Configuration schema definitions using Pydantic for validation.

Configuration errors surface early, with the offending field named, instead
of halfway through a monorepo scan.
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

DEFAULT_IGNORE_PATTERNS = [
    "**/node_modules/**",
    "**/dist/**",
    "**/build/**",
    "**/coverage/**",
]


class WorkspaceConfig(BaseModel):
    """Configuration for package discovery and manifest loading.

    Attributes:
        packages: Package directory globs relative to the monorepo root.
            When unset, the root package.json ``workspaces`` field (or
            lerna.json ``packages``) is used.
        ignore_patterns: Extra glob patterns excluded from discovery, on top
            of ``DEFAULT_IGNORE_PATTERNS``.
        on_load_error: ``raise`` aborts on the first manifest that fails to
            load; ``skip`` logs a warning and continues.
        on_collision: ``warn`` keeps the last manifest declaring a name and
            logs a warning; ``error`` fails the load.
    """

    packages: Optional[List[str]] = None
    ignore_patterns: List[str] = Field(default_factory=list)
    on_load_error: Literal["raise", "skip"] = "raise"
    on_collision: Literal["warn", "error"] = "warn"

    model_config = {"extra": "forbid"}

    @field_validator("packages")
    @classmethod
    def validate_packages(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        """Reject empty glob patterns."""
        if v is None:
            return v
        for pattern in v:
            if not pattern or not pattern.strip("!").strip():
                raise ValueError(f"Invalid package glob: {pattern!r}")
        return v

    def all_ignore_patterns(self) -> List[str]:
        """Patterns for the recursive scan: build output plus user patterns."""
        return DEFAULT_IGNORE_PATTERNS + list(self.ignore_patterns)

    def workspace_ignore_patterns(self) -> List[str]:
        """Patterns for declared workspace globs.

        A glob that names a directory such as ``packages/build`` declares it a
        package, so only node_modules and user patterns apply.
        """
        return ["**/node_modules/**", "node_modules"] + list(self.ignore_patterns)


class GraphConfig(BaseModel):
    """Configuration for graph reports.

    Attributes:
        cycle_limit: Maximum number of cycles reported (0 = unlimited).
    """

    cycle_limit: int = Field(default=0, ge=0)

    model_config = {"extra": "forbid"}


class MonodepsConfig(BaseModel):
    """Top-level monodeps configuration."""

    workspace: WorkspaceConfig = Field(default_factory=WorkspaceConfig)
    graph: GraphConfig = Field(default_factory=GraphConfig)

    model_config = {"extra": "forbid"}

    @classmethod
    def default(cls) -> "MonodepsConfig":
        return cls()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MonodepsConfig":
        """Create configuration from dictionary.

        Raises:
            ValidationError: If configuration is invalid.
        """
        return cls.model_validate(data)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()
