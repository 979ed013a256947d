"""Orchestrator - Wires Functional Core and Imperative Shell.

This module coordinates the flow of data between the pure selection
engine and the record store. It's the "glue" that turns a viewer request
into a list of events.
"""

import logging
from dataclasses import dataclass, field

from event_selector.core.config import Config, validate_config
from event_selector.core.event import Event
from event_selector.core.filters import FilterCriterion
from event_selector.core.search import search_events
from event_selector.core.selector import select_from_snapshot
from event_selector.shell.firestore_store import FirestoreStore
from event_selector.shell.memory_store import MemoryStore


logger = logging.getLogger(__name__)


@dataclass
class SelectionResult:
    """Result of one selection request.

    Attributes:
        viewer_id: Identity the selection ran for
        events: Selected events, in catalog order
        catalog_size: Number of events in the snapshot
        errors: Any errors that occurred
    """
    viewer_id: str
    events: list[Event] = field(default_factory=list)
    catalog_size: int = 0
    errors: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """Returns True if no errors occurred."""
        return len(self.errors) == 0

    @property
    def summary(self) -> str:
        """Human-readable summary of the selection."""
        return (
            f"Selected {len(self.events)} of {self.catalog_size} events "
            f"for {self.viewer_id}"
        )


def create_store(config: Config) -> MemoryStore | FirestoreStore:
    """Create the record store named by config.store.

    Unknown backends fall back to an empty memory store.
    """
    if config.store == "firestore":
        return FirestoreStore(config.firestore)

    if config.store != "memory":
        logger.warning("Unknown store '%s', using empty memory store", config.store)
        return MemoryStore()

    if config.seed_path:
        return MemoryStore.from_seed_file(config.seed_path)
    return MemoryStore()


class Orchestrator:
    """Coordinates event selection.

    This class wires together:
    - A record store (memory or Firestore) that provides snapshots
    - Core functions (visibility, filtering, search)
    - Filter presets from configuration
    """

    def __init__(
        self,
        config: Config,
        store: MemoryStore | FirestoreStore | None = None,
    ) -> None:
        """Initialize orchestrator with configuration.

        Args:
            config: Application configuration
            store: Record store (created from config if not provided)
        """
        self.config = config
        self.store = store or create_store(config)

        validation = validate_config(config)
        for issue in validation.errors:
            log = logger.error if issue.severity == "error" else logger.warning
            log("Config %s: %s", issue.field, issue.message)

    def _resolve_criteria(
        self,
        criteria: list[FilterCriterion],
        preset: str | None,
        errors: list[str],
    ) -> list[FilterCriterion]:
        """Prepend preset criteria, recording unknown preset names."""
        if preset is None:
            return list(criteria)

        found = self.config.get_preset(preset)
        if found is None:
            errors.append(f"Unknown filter preset: {preset}")
            return list(criteria)

        return list(found.criteria) + list(criteria)

    def select(
        self,
        viewer_id: str,
        criteria: list[FilterCriterion] | None = None,
        search: str | None = None,
        preset: str | None = None,
    ) -> SelectionResult:
        """Select the events a viewer may see that match the request.

        This is the main entry point that:
        1. Resolves the preset, if any
        2. Loads a consistent snapshot from the store
        3. Runs the core selection engine
        4. Applies free-text search

        Args:
            viewer_id: Identity the selection runs for
            criteria: Filter criteria
            search: Free-text query over name, description and tags
            preset: Name of a configured filter preset

        Returns:
            SelectionResult with the selected events
        """
        errors: list[str] = []
        resolved = self._resolve_criteria(criteria or [], preset, errors)

        if errors:
            logger.error("; ".join(errors))
            return SelectionResult(viewer_id=viewer_id, errors=errors)

        try:
            snapshot = self.store.load_snapshot()
        except Exception as e:
            error_msg = f"Failed to load snapshot: {e}"
            logger.error(error_msg)
            return SelectionResult(viewer_id=viewer_id, errors=[error_msg])

        catalog_size = len(snapshot.events)
        limit = self.config.catalog_size_warning
        if limit and catalog_size > limit:
            logger.warning(
                "Catalog has %d events (warning threshold %d)",
                catalog_size,
                limit,
            )

        # Pure core functions
        selected = select_from_snapshot(
            snapshot,
            viewer_id,
            resolved,
            ignore_unknown=self.config.ignore_unknown_criteria,
        )
        selected = search_events(selected, search)

        result = SelectionResult(
            viewer_id=viewer_id,
            events=selected,
            catalog_size=catalog_size,
        )
        logger.info(result.summary)
        return result
