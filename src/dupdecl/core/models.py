"""Core data models for dupdecl."""

from enum import Enum
from typing import List, NamedTuple, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

SNIPPET_MAX_LENGTH = 100
SNIPPET_ELLIPSIS = "..."


class DeclarationKind(str, Enum):
    """Kinds of named declarations the detector groups by."""

    FUNCTION = "function"
    CLASS = "class"
    INTERFACE = "interface"
    TYPE = "type"
    VARIABLE = "variable"
    ENUM = "enum"
    NAMESPACE = "namespace"


class IdentityKey(NamedTuple):
    """Grouping key: two occurrences are the same declaration iff keys match."""

    name: str
    kind: DeclarationKind


def make_snippet(text: Optional[str]) -> Optional[str]:
    """Reduce declaration source text to a short one-line excerpt.

    Takes the first line, strips surrounding whitespace and truncates it to
    SNIPPET_MAX_LENGTH characters followed by an ellipsis.

    Args:
        text: Source text of the declaration

    Returns:
        Excerpt, or None when there is no text
    """
    if not text:
        return None
    first_line = text.splitlines()[0].strip()
    if len(first_line) > SNIPPET_MAX_LENGTH:
        return first_line[:SNIPPET_MAX_LENGTH] + SNIPPET_ELLIPSIS
    return first_line


class Occurrence(BaseModel):
    """One concrete appearance of a named declaration.

    Attributes:
        name: Declared identifier
        kind: Declaration kind
        file: Path relative to the scan root, POSIX separators
        line: 1-based line of the declaration
        column: 1-based column of the declaration
        context_snippet: First line of the declaration (informational only)
        is_exported: Whether the declaration is part of its module's public surface
    """

    name: str = Field(min_length=1)
    kind: DeclarationKind
    file: str
    line: int = Field(ge=1)
    column: int = Field(ge=1)
    context_snippet: Optional[str] = None
    is_exported: bool = True

    model_config = ConfigDict(frozen=True)

    @property
    def key(self) -> IdentityKey:
        return IdentityKey(self.name, self.kind)

    def to_location(self) -> "DeclarationLocation":
        return DeclarationLocation(
            file=self.file,
            line=self.line,
            column=self.column,
            context_snippet=self.context_snippet,
        )


class _ReportModel(BaseModel):
    """Base for report models: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DeclarationLocation(_ReportModel):
    """Where a reported duplicate lives."""

    file: str
    line: int
    column: int
    context_snippet: Optional[str] = None


class DuplicateGroup(_ReportModel):
    """A reportable set of same-named, same-kind declarations.

    Attributes:
        name: Shared declaration name
        kind: Shared declaration kind
        count: Number of surviving locations
        locations: Locations in scan order
    """

    name: str
    kind: DeclarationKind
    count: int
    locations: List[DeclarationLocation]

    @model_validator(mode="after")
    def check_count(self) -> "DuplicateGroup":
        if self.count != len(self.locations):
            raise ValueError(
                f"count ({self.count}) does not match number of locations ({len(self.locations)})"
            )
        return self


class ReportSummary(_ReportModel):
    """Aggregate numbers for one detection run.

    Attributes:
        total_files: Number of files in the scanned set
        total_declarations: Occurrences admitted by the grouper, before rules
        duplicate_group_count: Number of reported groups
        duplicate_declaration_count: Sum of reported group counts
    """

    total_files: int = 0
    total_declarations: int = 0
    duplicate_group_count: int = 0
    duplicate_declaration_count: int = 0


class DuplicateReport(_ReportModel):
    """Result of a detection run."""

    summary: ReportSummary = Field(default_factory=ReportSummary)
    duplicates: List[DuplicateGroup] = Field(default_factory=list)

    @property
    def has_duplicates(self) -> bool:
        return len(self.duplicates) > 0

    def to_dict(self) -> dict:
        """Serialize with camelCase keys and plain JSON types."""
        return self.model_dump(mode="json", by_alias=True)
