"""Grid data model: subjects x criteria score matrix kept dense under structural edits."""

import math
from collections.abc import Mapping
from dataclasses import dataclass
from numbers import Real
from types import MappingProxyType

from src.grid.errors import DuplicateName, InvalidName, NotFound

DEFAULT_SUBJECTS = ("Teacher 1", "Teacher 2")
DEFAULT_CRITERIA = ("Teaching Quality", "Communication", "Engagement")


@dataclass(frozen=True)
class ClampPolicy:
    """Inclusive [minimum, maximum] bound applied to scores on write."""

    minimum: float
    maximum: float

    def __post_init__(self):
        if self.minimum > self.maximum:
            raise ValueError(f"clamp minimum {self.minimum} exceeds maximum {self.maximum}")

    def apply(self, value: float) -> float:
        return min(max(value, self.minimum), self.maximum)


@dataclass(frozen=True)
class GridSnapshot:
    """Immutable point-in-time view of subjects, criteria and scores."""

    subjects: tuple[str, ...]
    criteria: tuple[str, ...]
    scores: Mapping[str, Mapping[str, float]]

    # Unhashable: scores holds mappingproxy objects
    __hash__ = None

    def score(self, subject: str, criterion: str) -> float:
        if not isinstance(subject, str) or subject not in self.scores:
            raise NotFound(f"Subject not found: {subject!r}", subject)
        row = self.scores[subject]
        if criterion not in row:
            raise NotFound(f"Criterion not found: {criterion!r}", criterion)
        return row[criterion]

    def row_total(self, subject: str) -> float:
        if not isinstance(subject, str) or subject not in self.scores:
            raise NotFound(f"Subject not found: {subject!r}", subject)
        row = self.scores[subject]
        return sum(row[c] for c in self.criteria)

    def column_average(self, criterion: str) -> float:
        if criterion not in self.criteria:
            raise NotFound(f"Criterion not found: {criterion!r}", criterion)
        if not self.subjects:
            return 0.0
        return sum(self.scores[s][criterion] for s in self.subjects) / len(self.subjects)

    def to_dict(self) -> dict:
        """Plain nested-dict document: {subjects, criteria, scores}."""
        return {
            "subjects": list(self.subjects),
            "criteria": list(self.criteria),
            "scores": {s: {c: self.scores[s][c] for c in self.criteria} for s in self.subjects},
        }


def _require_name(name, what: str) -> None:
    if not isinstance(name, str) or not name.strip():
        raise InvalidName(f"{what} name must be a non-blank string", name if isinstance(name, str) else None)


def _require_number(value) -> None:
    # bool is a Real subclass but never a score
    if isinstance(value, bool) or not isinstance(value, Real):
        raise TypeError(f"Score must be a real number, got {type(value).__name__}")
    if not math.isfinite(value):
        raise ValueError(f"Score must be finite, got {value}")


class GridModel:
    """
    Single source of truth for subjects (rows), criteria (columns) and scores.

    Every live (subject, criterion) pair always has a score; rows and columns
    added later start at 0 and removed ones leave nothing behind. Each
    operation validates before mutating, so a rejected call changes nothing.
    Not thread-safe: callers with several writers serialise access themselves.
    """

    def __init__(
        self,
        subjects=None,
        criteria=None,
        scores: Mapping[str, Mapping[str, float]] | None = None,
        clamp: ClampPolicy | None = None,
    ):
        self.clamp = clamp
        self._subjects: list[str] = []
        self._criteria: list[str] = []
        self._rows: dict[str, dict[str, float]] = {}

        for c in (DEFAULT_CRITERIA if criteria is None else criteria):
            self.add_criterion(c)
        for s in (DEFAULT_SUBJECTS if subjects is None else subjects):
            self.add_subject(s)

        # Restored matrix: only live cells are taken, the rest stay 0
        for s, row in (scores or {}).items():
            if s not in self._rows or not isinstance(row, Mapping):
                continue
            for c, value in row.items():
                if c in self._rows[s]:
                    self.set_score(s, c, value)

    @property
    def subjects(self) -> tuple[str, ...]:
        return tuple(self._subjects)

    @property
    def criteria(self) -> tuple[str, ...]:
        return tuple(self._criteria)

    def _require_subject(self, name: str) -> None:
        if not isinstance(name, str) or name not in self._rows:
            raise NotFound(f"Subject not found: {name!r}", name if isinstance(name, str) else None)

    def _require_criterion(self, name: str) -> None:
        if not isinstance(name, str) or name not in self._criteria:
            raise NotFound(f"Criterion not found: {name!r}", name if isinstance(name, str) else None)

    # --- subjects ---

    def add_subject(self, name: str) -> None:
        """Append a subject with a 0 score for every live criterion."""
        _require_name(name, "Subject")
        if name in self._rows:
            raise DuplicateName(f"Subject already exists: {name!r}", name)
        self._subjects.append(name)
        self._rows[name] = {c: 0 for c in self._criteria}

    def remove_subject(self, name: str) -> None:
        """Drop the subject and every score in its row."""
        self._require_subject(name)
        self._subjects.remove(name)
        del self._rows[name]

    def rename_subject(self, old_name: str, new_name: str) -> None:
        """Re-key a subject in place, keeping its position and scores."""
        self._require_subject(old_name)
        _require_name(new_name, "Subject")
        if new_name == old_name:
            return
        if new_name in self._rows:
            raise DuplicateName(f"Subject already exists: {new_name!r}", new_name)
        self._subjects[self._subjects.index(old_name)] = new_name
        self._rows[new_name] = self._rows.pop(old_name)

    # --- criteria ---

    def add_criterion(self, name: str) -> None:
        """Append a criterion with a 0 score for every live subject."""
        _require_name(name, "Criterion")
        if name in self._criteria:
            raise DuplicateName(f"Criterion already exists: {name!r}", name)
        self._criteria.append(name)
        for row in self._rows.values():
            row[name] = 0

    def remove_criterion(self, name: str) -> None:
        """Drop the criterion and its score in every row."""
        self._require_criterion(name)
        self._criteria.remove(name)
        for row in self._rows.values():
            del row[name]

    def rename_criterion(self, old_name: str, new_name: str) -> None:
        """Re-key a criterion in every row, keeping its position and scores."""
        self._require_criterion(old_name)
        _require_name(new_name, "Criterion")
        if new_name == old_name:
            return
        if new_name in self._criteria:
            raise DuplicateName(f"Criterion already exists: {new_name!r}", new_name)
        self._criteria[self._criteria.index(old_name)] = new_name
        for row in self._rows.values():
            row[new_name] = row.pop(old_name)

    # --- scores ---

    def set_score(self, subject: str, criterion: str, value) -> float:
        """Store a score (after the clamp policy, if any). Returns the stored value."""
        self._require_subject(subject)
        self._require_criterion(criterion)
        _require_number(value)
        if self.clamp is not None:
            value = self.clamp.apply(value)
        self._rows[subject][criterion] = value
        return value

    def score(self, subject: str, criterion: str) -> float:
        self._require_subject(subject)
        self._require_criterion(criterion)
        return self._rows[subject][criterion]

    def row_total(self, subject: str) -> float:
        """Sum of the subject's scores over the live criteria."""
        self._require_subject(subject)
        row = self._rows[subject]
        return sum(row[c] for c in self._criteria)

    def column_average(self, criterion: str) -> float:
        """Mean of the criterion's scores over live subjects; 0 when there are none."""
        self._require_criterion(criterion)
        if not self._subjects:
            return 0.0
        return sum(self._rows[s][criterion] for s in self._subjects) / len(self._subjects)

    def row_totals(self) -> dict[str, float]:
        return {s: self.row_total(s) for s in self._subjects}

    def column_averages(self) -> dict[str, float]:
        return {c: self.column_average(c) for c in self._criteria}

    def snapshot(self) -> GridSnapshot:
        """Copy the current state into a read-only snapshot unaffected by later edits."""
        return GridSnapshot(
            subjects=tuple(self._subjects),
            criteria=tuple(self._criteria),
            scores=MappingProxyType(
                {s: MappingProxyType(dict(self._rows[s])) for s in self._subjects}
            ),
        )

    def __repr__(self) -> str:
        return f"GridModel({len(self._subjects)} subjects x {len(self._criteria)} criteria)"
