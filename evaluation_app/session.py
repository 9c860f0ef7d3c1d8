"""Single-owner session holding the live evaluation grid, bound to a blob store."""

import logging
import math
import threading

from src.charts import chart_payload
from src.grid import GridError, GridModel, GridSnapshot, deserialize, serialize
from src.grid.model import ClampPolicy
from evaluation_app.audit import audit_log
from evaluation_app.store import BlobStore

log = logging.getLogger("evaluation_app.session")


def parse_score_input(raw) -> float:
    """
    Parse a score typed into a cell. Blank input is 0, numeric strings are parsed.
    Raises ValueError for anything that is not a finite number.
    """
    if raw is None:
        return 0
    if isinstance(raw, bool):
        raise ValueError("Score must be a number")
    if isinstance(raw, (int, float)):
        value = raw
    else:
        text = str(raw).strip()
        if text == "":
            return 0
        try:
            value = float(text)
        except ValueError:
            raise ValueError(f"Score must be a number, got {text!r}") from None
    if not math.isfinite(value):
        raise ValueError("Score must be a finite number")
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


class EvaluationSession:
    """
    Owns one GridModel for the lifetime of a session.
    Mutations go through a lock so concurrent request handlers apply them one at a time.
    """

    def __init__(
        self,
        store: BlobStore,
        storage_key: str = "teacherEvaluation",
        clamp: ClampPolicy | None = None,
        autoload: bool = True,
    ):
        self.store = store
        self.storage_key = storage_key
        self.clamp = clamp
        self._lock = threading.Lock()
        self.model = GridModel(clamp=clamp)
        if autoload:
            self.load(missing_ok=True)

    def _mutate(self, action: str, fn, *, subject=None, criterion=None, extra=None):
        with self._lock:
            try:
                result = fn()
            except (GridError, TypeError, ValueError) as e:
                audit_log(
                    action,
                    "error",
                    subject=subject,
                    criterion=criterion,
                    error=str(e),
                    error_code=getattr(e, "kind", type(e).__name__),
                )
                log.info("%s rejected: %s", action, e)
                raise
            audit_log(action, "success", subject=subject, criterion=criterion, extra=extra)
            log.debug("%s applied (subject=%s criterion=%s)", action, subject, criterion)
            return result

    # --- subjects ---

    def add_subject(self, name: str) -> None:
        self._mutate("add_subject", lambda: self.model.add_subject(name), subject=name)

    def rename_subject(self, old_name: str, new_name: str) -> None:
        self._mutate(
            "rename_subject",
            lambda: self.model.rename_subject(old_name, new_name),
            subject=old_name,
            extra={"new_name": new_name},
        )

    def remove_subject(self, name: str) -> None:
        self._mutate("remove_subject", lambda: self.model.remove_subject(name), subject=name)

    # --- criteria ---

    def add_criterion(self, name: str) -> None:
        self._mutate("add_criterion", lambda: self.model.add_criterion(name), criterion=name)

    def rename_criterion(self, old_name: str, new_name: str) -> None:
        self._mutate(
            "rename_criterion",
            lambda: self.model.rename_criterion(old_name, new_name),
            criterion=old_name,
            extra={"new_name": new_name},
        )

    def remove_criterion(self, name: str) -> None:
        self._mutate("remove_criterion", lambda: self.model.remove_criterion(name), criterion=name)

    # --- scores ---

    def set_score(self, subject: str, criterion: str, value) -> float:
        return self._mutate(
            "set_score",
            lambda: self.model.set_score(subject, criterion, value),
            subject=subject,
            criterion=criterion,
        )

    def set_score_input(self, subject: str, criterion: str, raw) -> float:
        """set_score for raw cell input (blank means 0)."""
        return self._mutate(
            "set_score",
            lambda: self.model.set_score(subject, criterion, parse_score_input(raw)),
            subject=subject,
            criterion=criterion,
        )

    # --- reads ---

    def snapshot(self) -> GridSnapshot:
        with self._lock:
            return self.model.snapshot()

    def summary(self) -> dict:
        """Table view: names, scores, row totals and column averages."""
        snap = self.snapshot()
        return {
            **snap.to_dict(),
            "row_totals": {s: snap.row_total(s) for s in snap.subjects},
            "column_averages": {c: snap.column_average(c) for c in snap.criteria},
        }

    def charts(self) -> dict:
        return chart_payload(self.snapshot())

    # --- persistence ---

    def export_blob(self) -> str:
        return serialize(self.snapshot())

    def import_blob(self, blob) -> None:
        """Replace the live grid with the decoded blob. Raises MalformedBlob; the grid is kept on failure."""

        def _replace():
            self.model = deserialize(blob, clamp=self.clamp)

        self._mutate("import", _replace)

    def save(self) -> str:
        with self._lock:
            blob = serialize(self.model.snapshot())
            path = self.store.put(self.storage_key, blob)
        audit_log("save", "success", storage_key=self.storage_key, extra={"bytes": len(blob)})
        log.info("Evaluation saved: key=%s path=%s", self.storage_key, path)
        return blob

    def load(self, missing_ok: bool = False) -> bool:
        """
        Replace the live grid with the stored blob.
        Returns False when nothing is stored and missing_ok; raises FileNotFoundError otherwise.
        """
        blob = self.store.get(self.storage_key)
        if blob is None:
            if missing_ok:
                log.info("No saved evaluation under key=%s, starting with defaults", self.storage_key)
                return False
            raise FileNotFoundError(f"No saved evaluation under key {self.storage_key!r}")

        def _replace():
            self.model = deserialize(blob, clamp=self.clamp)

        self._mutate("load", _replace, extra={"storage_key": self.storage_key})
        log.info("Evaluation loaded: key=%s %r", self.storage_key, self.model)
        return True

    def reset(self) -> None:
        """Back to the default subjects and criteria with all scores 0."""

        def _replace():
            self.model = GridModel(clamp=self.clamp)

        self._mutate("reset", _replace)
