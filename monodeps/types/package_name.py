"""Package name value type."""

from __future__ import annotations

from typing import Any

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema


class PackageName(str):
    """A fully-scoped npm package name, e.g. ``@scope/name`` or ``name``.

    Equality, ordering and hashing are those of the underlying string, so a
    ``PackageName`` and the plain ``str`` it was built from are
    interchangeable as mapping keys.
    """

    __slots__ = ()

    def as_str(self) -> str:
        return str.__str__(self)

    def __repr__(self) -> str:
        return f"PackageName({self.as_str()!r})"

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_after_validator_function(
            cls,
            core_schema.str_schema(min_length=1),
            serialization=core_schema.plain_serializer_function_ser_schema(str),
        )
