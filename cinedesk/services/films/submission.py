"""Add-film submission pipeline.

Stages run strictly in order and any hard error aborts the rest:

1. cast photos are uploaded (concurrently, all settle before moving on)
2. poster, backdrop and video binaries are uploaded, or their URLs kept
3. (title, year) duplicate pre-check
4. row insert; a unique violation counts as a duplicate too
5. audit log entry (best effort)

Objects uploaded before a later failure are left in storage.
"""

import asyncio
import logging
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import PurePath

from sqlalchemy.ext.asyncio import AsyncSession

from cinedesk.constants import (
    ADMIN_ACTION_ADD_FILM,
    ADMIN_FILMS_PATH,
    BUCKET_ACTOR_PHOTOS,
    BUCKET_FILM_BACKDROPS,
    BUCKET_FILM_POSTERS,
    BUCKET_FILM_VIDEOS,
)
from cinedesk.db.crud import admins as admins_crud
from cinedesk.db.crud import films as films_crud
from cinedesk.db.crud.films import DuplicateFilmError
from cinedesk.models.schemas import (
    CastMemberDraft,
    CastMemberRead,
    FilmDraft,
    FilmRead,
    GenreRead,
    Notification,
    PendingUpload,
    SubmissionOutcome,
)
from cinedesk.services.storage import ObjectStorage, StorageError
from cinedesk.utils.logging import LogContext

logger = logging.getLogger(__name__)

MSG_TITLE_REQUIRED = "The film title is required."
MSG_GENRE_REQUIRED = "Please select at least one genre."
MSG_DUPLICATE = "A film with this title and year already exists."
MSG_GENERIC_FAILURE = "Could not add the film."


class DraftValidationError(Exception):
    """The draft is not submittable; nothing has been sent anywhere."""


class AssetUploadError(Exception):
    """An asset upload failed. `message` is the storage error, verbatim."""

    def __init__(self, label: str, message: str) -> None:
        super().__init__(f"{label}: {message}")
        self.label = label
        self.message = message


@dataclass
class SubmissionResult:
    """Outcome of one submission, with the toast to show."""

    outcome: SubmissionOutcome
    notification: Notification
    film: FilmRead | None = None
    redirect_to: str | None = None

    @property
    def ok(self) -> bool:
        return self.outcome == SubmissionOutcome.CREATED


def validate_draft(draft: FilmDraft) -> None:
    """Local preconditions, checked before any network effect."""
    if not draft.title.strip():
        raise DraftValidationError(MSG_TITLE_REQUIRED)
    if not draft.selected_genre_ids:
        raise DraftValidationError(MSG_GENRE_REQUIRED)


def build_genre_string(selected_ids: set[int], genres: Sequence[GenreRead]) -> str | None:
    """Comma-joined names of the selected genres, in reference-list order.

    Ids that do not match a known genre are skipped; no match at all -> None.
    """
    names = [genre.name for genre in genres if genre.id in selected_ids]
    return ",".join(names) or None


def _error(title: str, description: str) -> Notification:
    return Notification(title=title, description=description, variant="destructive")


def _basename(upload: PendingUpload) -> str:
    """Last component of the client-supplied filename."""
    return PurePath(upload.filename.replace("\\", "/")).name or "upload"


class FilmSubmissionPipeline:
    """Turns a validated draft into a stored film row."""

    def __init__(
        self,
        db: AsyncSession,
        storage: ObjectStorage,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.db = db
        self.storage = storage
        self._clock = clock

    async def submit(
        self,
        draft: FilmDraft,
        genres: Sequence[GenreRead],
        admin_id: int | None = None,
    ) -> SubmissionResult:
        """Run the pipeline. Never raises; every failure becomes a result."""
        log = LogContext(logger, film=draft.title.strip() or "<untitled>", year=draft.year)

        try:
            validate_draft(draft)
        except DraftValidationError as e:
            log.info(f"Rejected draft: {e}")
            return SubmissionResult(SubmissionOutcome.INVALID, _error("Error", str(e)))

        try:
            return await self._run(draft, genres, admin_id, log)
        except AssetUploadError as e:
            log.error(f"Upload failed, aborting: {e}")
            return SubmissionResult(
                SubmissionOutcome.UPLOAD_FAILED, _error(f"{e.label} upload failed", e.message)
            )
        except DuplicateFilmError:
            log.info("Duplicate film, nothing inserted")
            return SubmissionResult(
                SubmissionOutcome.DUPLICATE, _error("Duplicate detected", MSG_DUPLICATE)
            )
        except Exception as e:
            log.exception(f"Unexpected error while adding film: {e}")
            return SubmissionResult(SubmissionOutcome.FAILED, _error("Error", MSG_GENERIC_FAILURE))

    async def _run(
        self,
        draft: FilmDraft,
        genres: Sequence[GenreRead],
        admin_id: int | None,
        log: LogContext,
    ) -> SubmissionResult:
        title = draft.title.strip()

        cast = await self._upload_cast(draft.cast, log)

        poster = await self._resolve_media(
            draft.poster_file, draft.poster_url, BUCKET_FILM_POSTERS, "posters", "Poster", log
        )
        backdrop = await self._resolve_media(
            draft.backdrop_file, draft.backdrop_url, BUCKET_FILM_BACKDROPS, "backdrops", "Backdrop", log
        )
        video = await self._resolve_media(
            draft.video_file, draft.video_url, BUCKET_FILM_VIDEOS, "videos", "Video", log
        )

        if await films_crud.find_duplicate_film(self.db, title, draft.year) is not None:
            raise DuplicateFilmError(title, draft.year)

        log.info("Inserting film row")
        film = await films_crud.create_film(
            self.db,
            {
                "title": title,
                "original_title": draft.original_title or None,
                "description": draft.description or None,
                "year": draft.year,
                "duration": draft.duration,
                "director": draft.director or None,
                "genre": build_genre_string(draft.selected_genre_ids, genres),
                "trailer_url": draft.trailer_url or None,
                "video_url": video,
                "isvip": draft.is_vip,
                "published": draft.is_published,
                "poster": poster,
                "backdrop": backdrop,
                "cast": [member.model_dump() for member in cast],
                "homepage_categories": sorted(c.value for c in draft.homepage_categories),
                "tmdb_id": draft.tmdb_id,
            },
        )
        # Snapshot before the audit step: a failed audit commit rolls back and expires ORM state
        created = FilmRead.model_validate(film)
        log = log.bind(film_id=created.id)
        log.info("Film inserted")

        await self._record_audit(admin_id, created, log)

        return SubmissionResult(
            SubmissionOutcome.CREATED,
            Notification(
                title="Film added",
                description=f'The film "{created.title}" was added successfully.',
            ),
            film=created,
            redirect_to=ADMIN_FILMS_PATH,
        )

    def _timestamp(self) -> int:
        return int(self._clock() * 1000)

    async def _upload(
        self, bucket: str, key: str, upload: PendingUpload, label: str, log: LogContext
    ) -> str:
        log.debug(f"Uploading {label.lower()} to {bucket}/{key}")
        try:
            path = await self.storage.upload(bucket, key, upload.content, upload.content_type)
        except StorageError as e:
            raise AssetUploadError(label, str(e)) from e
        return self.storage.public_url(bucket, path)

    async def _upload_cast(
        self, members: Sequence[CastMemberDraft], log: LogContext
    ) -> list[CastMemberRead]:
        """Drop unnamed rows and upload attached photos concurrently."""
        named = [member for member in members if member.name.strip()]
        timestamp = self._timestamp()

        async def resolve(index: int, member: CastMemberDraft) -> CastMemberRead:
            photo = member.photo
            if member.file is not None:
                photo = await self._upload(
                    BUCKET_ACTOR_PHOTOS,
                    f"actors/{timestamp}_{index}_{_basename(member.file)}",
                    member.file,
                    "Actor photo",
                    log,
                )
            return CastMemberRead(name=member.name.strip(), role=member.role, photo=photo)

        settled = await asyncio.gather(
            *(resolve(index, member) for index, member in enumerate(named)),
            return_exceptions=True,
        )
        for outcome in settled:
            if isinstance(outcome, BaseException):
                raise outcome
        return list(settled)

    async def _resolve_media(
        self,
        upload: PendingUpload | None,
        current_url: str | None,
        bucket: str,
        folder: str,
        label: str,
        log: LogContext,
    ) -> str | None:
        """Attached binary wins; otherwise keep whatever URL is already set."""
        if upload is not None:
            key = f"{folder}/{self._timestamp()}-{_basename(upload)}"
            return await self._upload(bucket, key, upload, label, log)
        return current_url or None

    async def _record_audit(self, admin_id: int | None, film: FilmRead, log: LogContext) -> None:
        if admin_id is None:
            log.warning("No authenticated admin, skipping audit log")
            return
        try:
            await admins_crud.record_admin_action(
                self.db,
                admin_id,
                ADMIN_ACTION_ADD_FILM,
                {"film_id": film.id, "film_title": film.title},
            )
        except Exception as e:
            log.warning(f"Audit log write failed (ignored): {e}")
