"""tsconfig.json models."""

from __future__ import annotations

from typing import Any, Dict, List

from pydantic import BaseModel, Field

from monodeps.configuration_file import ConfigurationFile


class TypescriptProjectReference(BaseModel):
    path: str


class TypescriptParentProjectReferenceFile(BaseModel):
    """A tsconfig.json that only lists project references."""

    # Expected to be empty, but must be present to satisfy the TypeScript
    # compiler.
    files: List[str] = Field(default_factory=list)
    references: List[TypescriptProjectReference] = Field(default_factory=list)


class TypescriptParentProjectReference(
    ConfigurationFile[TypescriptParentProjectReferenceFile]
):
    """Project-reference tsconfig.json, usually at the monorepo root."""

    FILENAME = "tsconfig.json"
    CONTENTS_TYPE = TypescriptParentProjectReferenceFile

    def reference_paths(self) -> List[str]:
        return [reference.path for reference in self.contents.references]


class TypescriptConfig(ConfigurationFile[Dict[str, Any]]):
    """Any tsconfig.json, kept as an untyped mapping."""

    FILENAME = "tsconfig.json"
    CONTENTS_TYPE = Dict[str, Any]


__all__ = [
    "TypescriptConfig",
    "TypescriptParentProjectReference",
    "TypescriptParentProjectReferenceFile",
    "TypescriptProjectReference",
]
