"""Error collection and failed-entity removal.

When an entity fails, it is removed from the run entirely:

- from the manifest and the record store, so no later hook sees it
- from every passed set, so references to it no longer validate
- from every back-reference list it appended itself to
- every live entity that had resolved a reference to it fails as well,
  with an undefined reference issue, charged to the component that made
  the reference
- membership it only implied (implicit categories) and its @id mentions
  are withdrawn without failing anyone
"""

import logging

from ..core.models import ErrorKind, ErrorReport, ResolutionIssue
from .context import RunState, link_items

logger = logging.getLogger(__name__)


class ErrorCollector:
    """Accumulates non-fatal issues and purges failed entities from a run."""

    def __init__(self, report: ErrorReport | None = None):
        self.report = report if report is not None else ErrorReport()

    def add(self, key: str, issue: ResolutionIssue) -> None:
        """Record an issue without touching run state."""
        logger.warning("%s: %s", key, issue)
        self.report.add(key, issue)

    def fail(self, entity_id: str, issue: ResolutionIssue, state: RunState) -> list[str]:
        """Record an entity failure and remove the entity from the run.

        Returns:
            Ids of every entity removed, the failed one first, followed by the
            dependents that failed with it
        """
        removed: list[str] = []
        pending: list[tuple[str, ResolutionIssue]] = [(entity_id, issue)]

        while pending:
            current, current_issue = pending.pop(0)
            if not state.is_live(current):
                continue

            self.add(current, current_issue)
            dependents = state.ledger.dependents(current)
            self._purge(current, state)
            removed.append(current)

            for dependent, component in dependents:
                if state.is_live(dependent):
                    pending.append(
                        (
                            dependent,
                            ResolutionIssue(
                                kind=ErrorKind.UNDEFINED_REFERENCE,
                                component=component,
                                message=(
                                    f"{dependent} references {current}, "
                                    "which failed to resolve"
                                ),
                            ),
                        )
                    )

        return removed

    def _purge(self, entity_id: str, state: RunState) -> None:
        for link in state.ledger.backlinks(entity_id):
            target = state.manifest.get(link.target)
            if target is None or not target.has(link.key):
                continue
            items = link_items(target[link.key], link.attr)
            for i, item in enumerate(items):
                if item is link.item or item == link.item:
                    del items[i]
                    break

        state.manifest.remove(entity_id)
        state.records.pop(entity_id, None)
        state.passed.discard(entity_id)

        # Mentions now render as reference errors
        for text in state.ledger.mentions(entity_id):
            text.rendered = state.render(text.raw)
        state.ledger.forget(entity_id)
