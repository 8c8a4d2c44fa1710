from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, List

from fast_constraints.contracts.violation import Violation
from fast_constraints.exceptions.resolution_exceptions import ResolutionError


@dataclass
class ValidationResult:
    """
    Ordered violations of one validation run.

    Violations keep declaration order first, then the order in which each
    callback emitted them. `resolution_errors` is only populated by
    non-strict runs.
    """

    violations: List[Violation] = field(default_factory=list)
    resolution_errors: List[ResolutionError] = field(default_factory=list, repr=False)

    @property
    def is_valid(self) -> bool:
        return not self.violations

    def __len__(self) -> int:
        return len(self.violations)

    def __iter__(self) -> Iterator[Violation]:
        return iter(self.violations)

    def __getitem__(self, index: int) -> Violation:
        return self.violations[index]

    def extend(self, violations: Iterable[Violation]) -> None:
        self.violations.extend(violations)

    def merge(self, other: ValidationResult) -> ValidationResult:
        self.violations.extend(other.violations)
        self.resolution_errors.extend(other.resolution_errors)
        return self

    def by_path(self, path: str) -> list[Violation]:
        return [violation for violation in self.violations if violation.path == path]

    def paths(self) -> list[str]:
        """Distinct violation paths in first-seen order."""
        return list(dict.fromkeys(violation.path for violation in self.violations))

    def messages(self) -> list[str]:
        return [violation.message for violation in self.violations]

    def to_errors(self) -> list[dict[str, Any]]:
        return [violation.to_error() for violation in self.violations]
