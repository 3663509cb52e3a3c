from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from react19_lint.errors import FixConflictError


class Position(BaseModel):
    model_config = ConfigDict(frozen=True)

    row: int
    column: int


class TextEdit(BaseModel):
    """Replace ``source[start_byte:end_byte]`` with ``replacement``."""

    model_config = ConfigDict(frozen=True)

    start_byte: int = Field(ge=0)
    end_byte: int = Field(ge=0)
    replacement: str = ""

    @model_validator(mode="after")
    def _check_range(self) -> "TextEdit":
        if self.end_byte < self.start_byte:
            raise ValueError(f"Edit ends before it starts: {self.start_byte}..{self.end_byte}")
        return self


class Fix(BaseModel):
    """An atomic group of edits, all offset against the original source."""

    model_config = ConfigDict(frozen=True)

    edits: list[TextEdit]

    @property
    def start_byte(self) -> int:
        return self.edits[0].start_byte

    @property
    def end_byte(self) -> int:
        return self.edits[-1].end_byte

    @classmethod
    def from_edits(cls, edits: list[TextEdit], source_length: int) -> "Fix":
        """Sort ``edits`` and reject overlapping or out-of-bounds ranges."""
        if not edits:
            raise FixConflictError("A fix needs at least one edit")
        ordered = sorted(edits, key=lambda e: (e.start_byte, e.end_byte))
        for previous, current in zip(ordered, ordered[1:]):
            if current.start_byte < previous.end_byte:
                raise FixConflictError(
                    f"Overlapping edits {previous.start_byte}..{previous.end_byte} "
                    f"and {current.start_byte}..{current.end_byte}"
                )
        if ordered[-1].end_byte > source_length:
            raise FixConflictError(f"Edit ends at {ordered[-1].end_byte}, past end of source ({source_length})")
        return cls(edits=ordered)


class Diagnostic(BaseModel):
    model_config = ConfigDict(frozen=True)

    rule_id: str
    message_id: str
    message: str
    data: dict[str, str] = Field(default_factory=dict)
    node_type: str
    start_byte: int
    end_byte: int
    start_point: Position
    end_point: Position
    fix: Fix | None = None

    @property
    def fixable(self) -> bool:
        return self.fix is not None


class RuleMeta(BaseModel):
    model_config = ConfigDict(frozen=True)

    rule_id: str
    type: Literal["problem", "suggestion", "layout"]
    description: str
    url: str | None = None
    fixable: bool = False
    messages: dict[str, str]
    schema_: list[Any] = Field(default_factory=list, alias="schema")


class LintResult(BaseModel):
    path: str
    language: str
    diagnostics: list[Diagnostic]
    parse_errors: bool = False

    @property
    def fixable_count(self) -> int:
        return sum(1 for d in self.diagnostics if d.fixable)


class FixResult(BaseModel):
    path: str
    language: str
    output: str
    passes: int
    applied: int
    remaining: list[Diagnostic]

    @property
    def changed(self) -> bool:
        return self.applied > 0
