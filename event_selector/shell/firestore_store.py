"""Firestore record store - Imperative Shell.

This module reads and writes events, follow edges and attendance records
in Google Cloud Firestore. It exposes the same surface as MemoryStore.

All I/O is contained here; selection logic is in the core module.
"""

import logging
from typing import Any

from google.cloud import firestore
from google.cloud.firestore_v1.base_query import FieldFilter

from event_selector.core.config import FirestoreSettings
from event_selector.core.event import (
    Event,
    event_to_row,
    parse_attendance,
    parse_events,
    parse_follow_edges,
)
from event_selector.core.snapshot import Snapshot


logger = logging.getLogger(__name__)


# Firestore rejects more writes than this in one batch
MAX_BATCH_WRITES = 500


def _escape_id_part(part: str) -> str:
    """Escape "%", "_" and "/" so joined pair IDs stay unambiguous."""
    return part.replace("%", "%25").replace("_", "%5F").replace("/", "%2F")


def _pair_document_id(first: str, second: str) -> str:
    return f"{_escape_id_part(first)}_{_escape_id_part(second)}"


def follow_document_id(follower_id: str, followee_id: str) -> str:
    """Deterministic document ID for a follow edge.

    Distinct pairs always map to distinct IDs, e.g. ("a_b", "c") and
    ("a", "b_c") do not collide.
    """
    return _pair_document_id(follower_id, followee_id)


def attendance_document_id(event_id: str, user_id: str) -> str:
    """Deterministic document ID for an attendance record."""
    return _pair_document_id(event_id, user_id)


class FirestoreStore:
    """Record store persisted in Firestore.

    This is part of the imperative shell - it handles database I/O.

    Documents use the same column names as the parsers in core.event:
    - events: {"eid", "host_id", "latitude", ..., "type"}
    - follows: {"followerid", "followeeid"}
    - attendance: {"eid", "uid"}

    Follow and attendance documents have deterministic IDs, so writing the
    same pair twice leaves a single document.
    """

    def __init__(self, settings: FirestoreSettings | None = None) -> None:
        """Initialize Firestore store.

        Args:
            settings: Firestore settings
        """
        self.settings = settings or FirestoreSettings()
        self._client: firestore.Client | None = None

    @property
    def client(self) -> firestore.Client:
        """Lazy initialization of Firestore client."""
        if self._client is None:
            kwargs = {}
            if self.settings.project_id:
                kwargs['project'] = self.settings.project_id
            if self.settings.database:
                kwargs['database'] = self.settings.database
            self._client = firestore.Client(**kwargs)
        return self._client

    def _collection(self, name: str) -> Any:
        return self.client.collection(name)

    def _read_rows(self, collection: str, transaction: Any = None) -> list[dict[str, Any]]:
        """Stream every document of a collection as dicts."""
        stream = self._collection(collection).stream(transaction=transaction)
        return [doc.to_dict() for doc in stream]

    def load_snapshot(self) -> Snapshot:
        """Read all three collections into a Snapshot.

        This method performs database I/O. The reads share one read-only
        transaction, so they observe the database at a single point in time.

        Returns:
            Snapshot of events, follow edges and attendance

        Raises:
            google.api_core.exceptions.GoogleAPICallError: If a read fails
        """
        logger.info("Loading snapshot from Firestore")

        @firestore.transactional
        def read_all(transaction):
            return (
                self._read_rows(self.settings.events_collection, transaction),
                self._read_rows(self.settings.follows_collection, transaction),
                self._read_rows(self.settings.attendance_collection, transaction),
            )

        event_rows, edge_rows, attendance_rows = read_all(
            self.client.transaction(read_only=True)
        )

        events = parse_events(event_rows)
        if len(events) < len(event_rows):
            logger.warning(
                "Skipped %d invalid event documents",
                len(event_rows) - len(events),
            )

        snapshot = Snapshot.build(
            events=events,
            edges=parse_follow_edges(edge_rows),
            records=parse_attendance(attendance_rows),
        )

        logger.info(
            "Loaded %d events, %d follows, %d attendance records",
            len(snapshot.events),
            len(snapshot.graph),
            len(snapshot.attendance),
        )
        return snapshot

    def upsert_event(self, event: Event) -> bool:
        """Write an event, replacing any document with the same ID.

        Returns:
            True if the write succeeded
        """
        try:
            (
                self._collection(self.settings.events_collection)
                .document(event.id)
                .set(event_to_row(event))
            )
            logger.info("Saved event %s", event.id)
            return True

        except Exception as e:
            logger.error("Failed to save event %s: %s", event.id, str(e))
            return False

    def delete_event(self, event_id: str) -> bool:
        """Delete an event and its attendance records.

        Deletes are committed in batches of at most MAX_BATCH_WRITES. The
        event document goes in the last batch, so a failed call leaves the
        event in place and can be retried.

        Returns:
            True if every batch committed
        """
        try:
            attendance = (
                self._collection(self.settings.attendance_collection)
                .where(filter=FieldFilter("eid", "==", event_id))
                .stream()
            )
            refs = [doc.reference for doc in attendance]
            removed = len(refs)
            refs.append(
                self._collection(self.settings.events_collection).document(event_id)
            )

            for start in range(0, len(refs), MAX_BATCH_WRITES):
                batch = self.client.batch()
                for ref in refs[start:start + MAX_BATCH_WRITES]:
                    batch.delete(ref)
                batch.commit()

            logger.info(
                "Deleted event %s and %d attendance records", event_id, removed
            )
            return True

        except Exception as e:
            logger.error("Failed to delete event %s: %s", event_id, str(e))
            return False

    def _set_pair(self, collection: str, doc_id: str, row: dict[str, str]) -> bool:
        try:
            self._collection(collection).document(doc_id).set(row)
            return True
        except Exception as e:
            logger.error("Failed to write %s/%s: %s", collection, doc_id, str(e))
            return False

    def _delete_pair(self, collection: str, doc_id: str) -> bool:
        try:
            self._collection(collection).document(doc_id).delete()
            return True
        except Exception as e:
            logger.error("Failed to delete %s/%s: %s", collection, doc_id, str(e))
            return False

    def follow(self, follower_id: str, followee_id: str) -> bool:
        """Add a follow edge. Idempotent."""
        return self._set_pair(
            self.settings.follows_collection,
            follow_document_id(follower_id, followee_id),
            {"followerid": follower_id, "followeeid": followee_id},
        )

    def unfollow(self, follower_id: str, followee_id: str) -> bool:
        """Remove a follow edge. Missing edges are ignored."""
        return self._delete_pair(
            self.settings.follows_collection,
            follow_document_id(follower_id, followee_id),
        )

    def attend(self, user_id: str, event_id: str) -> bool:
        """Record attendance. Idempotent; capacity is not checked."""
        return self._set_pair(
            self.settings.attendance_collection,
            attendance_document_id(event_id, user_id),
            {"eid": event_id, "uid": user_id},
        )

    def leave(self, user_id: str, event_id: str) -> bool:
        """Remove attendance. Missing records are ignored."""
        return self._delete_pair(
            self.settings.attendance_collection,
            attendance_document_id(event_id, user_id),
        )
