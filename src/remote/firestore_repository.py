"""Implementation of (Game)Repository on a Cloud Firestore collection"""

import logging
from typing import Optional

from google.api_core.exceptions import GoogleAPIError
from google.auth.exceptions import GoogleAuthError
from google.cloud.firestore import Client
from google.cloud.firestore_v1.base_query import FieldFilter
from google.cloud.firestore_v1.field_path import FieldPath

from src.core.concurrency import chunked, join_all
from src.core.config import Settings, get_settings
from src.core.dto import GameDTO
from src.core.exceptions import EncodingError
from src.core.models import Game
from src.core.results import Result
from src.core.shared_types import ErrorKind
from src.remote.firebase import get_firestore_client

logger = logging.getLogger(__name__)

# Transport and auth faults, plus ValueError for ids that are not a valid document path (e.g. containing "/")
STORE_ERRORS = (GoogleAPIError, GoogleAuthError, ValueError)


class FirestoreGameRepository:
    """
    Games stored as documents in a Firestore collection, document id == game id.

    Reads hand back GameDTO, the transport projection. Callers convert with Game.from_dto() when they need the domain model.
    Every fault is logged and reported through the returned Result, nothing is retried.
    """

    def __init__(self, client: Optional[Client] = None, settings: Optional[Settings] = None) -> None:
        self.settings = settings or get_settings()
        self.db = client or get_firestore_client(self.settings)
        self.collection = self.db.collection(self.settings.games_collection)

    def save(self, game: Game) -> Result[None]:
        """Upsert with merge semantics: fields in the DTO overwrite, other fields of the document are left alone."""
        try:
            document = game.to_dto().to_document()
        except (EncodingError, ValueError, TypeError, AttributeError) as exc:
            logger.error("Firestore encoding error for %s: %s", game.id, exc)
            return Result.failure(ErrorKind.ENCODING, str(exc))

        try:
            self.collection.document(game.id).set(document, merge=True)
        except STORE_ERRORS as exc:
            logger.error("Firestore save error for %s: %s", game.id, exc)
            return Result.failure(ErrorKind.PERSISTENCE, str(exc))
        return Result.success()

    def save_all(self, games: list[Game]) -> Result[None]:
        """One upsert per game, in parallel. Every upsert runs to completion; a single failure fails the batch."""
        outcomes = join_all(self.save, games, max_workers=self.settings.max_workers)
        did_fail = any(not outcome.ok for outcome in outcomes)
        if did_fail:
            return Result.failure(ErrorKind.PERSISTENCE, "Not every game could be saved.")
        return Result.success()

    def fetch(self, game_id: str) -> Result[GameDTO]:
        try:
            snapshot = self.collection.document(game_id).get()
        except STORE_ERRORS as exc:
            logger.error("Firestore fetch error for %s: %s", game_id, exc)
            return Result.failure(ErrorKind.PERSISTENCE, str(exc))

        if not snapshot.exists:
            return Result.failure(ErrorKind.NOT_FOUND, f"Game with {game_id=} not found.")

        try:
            return Result.success(self._decode(snapshot))
        except EncodingError as exc:
            logger.error("Firestore decoding error for %s: %s", game_id, exc)
            return Result.failure(ErrorKind.ENCODING, str(exc))

    def fetch_all(self, ids: list[str]) -> Result[list[GameDTO]]:
        """
        Fetch many games with document-id "in" queries, at most `in_query_limit` ids per query.

        Chunks are queried in parallel. Results are collected on this thread only, then returned in the order of ids.
        Ids without a document (or whose chunk failed) are left out.
        """
        if not ids:
            return Result.success([])

        chunks = chunked(ids, self.settings.in_query_limit)
        outcomes = join_all(self._fetch_chunk, chunks, max_workers=self.settings.max_workers)

        all_games: dict[str, GameDTO] = {}
        for outcome in outcomes:
            for dto in outcome.value or []:
                all_games[dto.id] = dto

        return Result.success([all_games[game_id] for game_id in ids if game_id in all_games])

    def delete(self, game_id: str) -> Result[None]:
        try:
            self.collection.document(game_id).delete()
        except STORE_ERRORS as exc:
            logger.error("Firestore delete error for %s: %s", game_id, exc)
            return Result.failure(ErrorKind.PERSISTENCE, str(exc))
        return Result.success()

    def delete_all(self, ids: list[str]) -> Result[None]:
        """
        Delete with atomic write batches.

        Firestore refuses batches over 500 writes, so larger inputs are split into several batches,
        each committed on its own. All batches are attempted; the result is the AND of their commits.
        """
        outcomes = [self._commit_delete_batch(batch_ids) for batch_ids in chunked(ids, self.settings.batch_limit)]
        return Result.all_ok(outcomes)

    # -- Internal helpers --
    def _fetch_chunk(self, chunk: list[str]) -> Result[list[GameDTO]]:
        try:
            refs = [self.collection.document(game_id) for game_id in chunk]
            query = self.collection.where(filter=FieldFilter(FieldPath.document_id(), "in", refs))
            snapshots = list(query.stream())
        except STORE_ERRORS as exc:
            logger.error("Firestore fetch_all chunk error: %s", exc)
            return Result.failure(ErrorKind.PERSISTENCE, str(exc))

        games: list[GameDTO] = []
        for snapshot in snapshots:
            try:
                games.append(self._decode(snapshot))
            except EncodingError as exc:
                logger.error("Firestore decoding error for id %s: %s", snapshot.id, exc)
        return Result.success(games)

    def _commit_delete_batch(self, batch_ids: list[str]) -> Result[None]:
        try:
            batch = self.db.batch()
            for game_id in batch_ids:
                batch.delete(self.collection.document(game_id))
            batch.commit()
        except STORE_ERRORS as exc:
            logger.error("Firestore batch delete error (%d ids): %s", len(batch_ids), exc)
            return Result.failure(ErrorKind.PERSISTENCE, str(exc))
        return Result.success()

    def _decode(self, snapshot) -> GameDTO:
        data = snapshot.to_dict()
        if data is None:
            raise EncodingError(f"Document {snapshot.id} has no data")
        # documents written by older clients may lack the id field
        return GameDTO.from_document({"id": snapshot.id, **data})
