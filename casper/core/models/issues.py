"""Error report models shared by the loader and the resolution engine.

Every non-fatal problem found while loading or resolving records becomes a
ResolutionIssue, grouped in an ErrorReport under the id of the entity it
concerns (or the path of the file, for load errors).
"""

import json
from enum import Enum
from pathlib import Path
from typing import Iterator

from pydantic import BaseModel, Field


class ErrorKind(str, Enum):
    DUPLICATE_ID = "duplicate_id"
    MISSING_FIELD = "missing_field"
    MISSING_REQUIREMENT = "missing_requirement"
    UNDEFINED_REFERENCE = "undefined_reference"
    UNKNOWN_COMPONENT = "unknown_component"
    INVALID_DATA = "invalid_data"
    LOAD_ERROR = "load_error"


class ResolutionIssue(BaseModel):
    """One problem with one record."""

    kind: ErrorKind
    component: str | None = Field(
        default=None, description="Key of the component that reported the issue"
    )
    message: str

    def __str__(self) -> str:
        if self.component:
            return f"[{self.kind.value}] {self.component}: {self.message}"
        return f"[{self.kind.value}] {self.message}"


class ErrorReport(BaseModel):
    """Issues keyed by entity id or file path, in the order they were found."""

    errors: dict[str, list[ResolutionIssue]] = Field(default_factory=dict)

    def add(self, key: str, issue: ResolutionIssue) -> None:
        self.errors.setdefault(key, []).append(issue)

    def extend(self, other: "ErrorReport") -> None:
        """Append every issue of another report."""
        for key, issues in other.errors.items():
            for issue in issues:
                self.add(key, issue)

    def get(self, key: str) -> list[ResolutionIssue]:
        return list(self.errors.get(key, []))

    def keys(self) -> list[str]:
        return list(self.errors)

    def issues(self) -> Iterator[tuple[str, ResolutionIssue]]:
        for key, issues in self.errors.items():
            for issue in issues:
                yield key, issue

    def count(self, kind: ErrorKind | None = None) -> int:
        """Count issues, optionally only those of one kind."""
        return sum(1 for _, issue in self.issues() if kind is None or issue.kind == kind)

    def __len__(self) -> int:
        return len(self.errors)

    def __bool__(self) -> bool:
        return bool(self.errors)

    def __contains__(self, key: object) -> bool:
        return key in self.errors

    def to_dict(self) -> dict[str, list[dict]]:
        return {
            key: [issue.model_dump(mode="json") for issue in issues]
            for key, issues in self.errors.items()
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    def write(self, path: Path | str) -> None:
        """Write the report as JSON, overwriting any previous report."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.to_json() + "\n")
