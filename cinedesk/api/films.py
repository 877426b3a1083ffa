"""Film API endpoints: admin authoring and public watch data."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from cinedesk.auth import get_current_admin
from cinedesk.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from cinedesk.db import get_db
from cinedesk.db.crud import get_film, list_films, list_genres
from cinedesk.models.admin import Admin
from cinedesk.models.schemas import (
    CastMemberDraft,
    FilmDraft,
    FilmDraftPayload,
    FilmListRead,
    FilmRead,
    FilmWatchRead,
    GenreRead,
    PendingUpload,
    SubmissionOutcome,
    SubmissionResponse,
)
from cinedesk.services.films.submission import FilmSubmissionPipeline
from cinedesk.services.storage import ObjectStorage, get_storage
from cinedesk.utils.images import normalize_backdrop_url, normalize_poster_url

admin_router = APIRouter()
router = APIRouter()
logger = logging.getLogger(__name__)

OUTCOME_STATUS = {
    SubmissionOutcome.CREATED: status.HTTP_201_CREATED,
    SubmissionOutcome.INVALID: status.HTTP_422_UNPROCESSABLE_ENTITY,
    SubmissionOutcome.DUPLICATE: status.HTTP_409_CONFLICT,
    SubmissionOutcome.UPLOAD_FAILED: status.HTTP_502_BAD_GATEWAY,
    SubmissionOutcome.FAILED: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


async def _read_upload(upload: UploadFile | None) -> PendingUpload | None:
    """UploadFile -> PendingUpload; empty file inputs count as no file."""
    if upload is None or not upload.filename:
        return None
    return PendingUpload(
        filename=upload.filename,
        content=await upload.read(),
        content_type=upload.content_type or "application/octet-stream",
    )


async def build_draft(
    data: FilmDraftPayload,
    poster: UploadFile | None = None,
    backdrop: UploadFile | None = None,
    video: UploadFile | None = None,
    cast_photos: list[UploadFile] | None = None,
) -> FilmDraft:
    """Assemble the form draft from the JSON payload and the attached files."""
    photos = cast_photos or []
    cast = []
    for index, member in enumerate(data.cast):
        file = None
        if member.photo_upload is not None:
            if member.photo_upload >= len(photos):
                raise HTTPException(
                    status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                    detail=f"cast[{index}].photo_upload refers to a missing file",
                )
            file = await _read_upload(photos[member.photo_upload])
        cast.append(
            CastMemberDraft(
                name=member.name,
                role=member.role,
                photo=None if file else member.photo,
                file=file,
            )
        )

    return FilmDraft(
        title=data.title,
        original_title=data.original_title,
        description=data.description,
        year=data.year,
        duration=data.duration,
        director=data.director,
        selected_genre_ids=set(data.genre_ids),
        is_vip=data.is_vip,
        is_published=data.is_published,
        trailer_url=data.trailer_url,
        video_url=data.video_url,
        video_file=await _read_upload(video),
        poster_url=data.poster_url,
        poster_file=await _read_upload(poster),
        backdrop_url=data.backdrop_url,
        backdrop_file=await _read_upload(backdrop),
        cast=cast,
        homepage_categories=set(data.homepage_categories),
        tmdb_id=data.tmdb_id,
    )


@admin_router.post("", response_model=SubmissionResponse, status_code=201)
async def create_film_endpoint(
    payload: Annotated[str, Form(description="Film draft as JSON")],
    admin: Annotated[Admin, Depends(get_current_admin)],
    db: Annotated[AsyncSession, Depends(get_db)],
    storage: Annotated[ObjectStorage, Depends(get_storage)],
    poster: Annotated[UploadFile | None, File()] = None,
    backdrop: Annotated[UploadFile | None, File()] = None,
    video: Annotated[UploadFile | None, File()] = None,
    cast_photos: Annotated[list[UploadFile] | None, File()] = None,
) -> JSONResponse:
    """Add a film: uploads, duplicate check, insert and audit log."""
    try:
        data = FilmDraftPayload.model_validate_json(payload)
    except ValidationError as e:
        raise RequestValidationError(e.errors(include_url=False)) from e

    admin_id = admin.id
    genres = [GenreRead.model_validate(genre) for genre in await list_genres(db)]
    draft = await build_draft(data, poster, backdrop, video, cast_photos)

    result = await FilmSubmissionPipeline(db, storage).submit(draft, genres, admin_id)
    logger.info(f"Admin {admin_id} submitted {data.title!r}: {result.outcome.value}")

    body = SubmissionResponse(
        outcome=result.outcome,
        notification=result.notification,
        film=result.film,
        redirect_to=result.redirect_to,
    )
    return JSONResponse(
        status_code=OUTCOME_STATUS[result.outcome],
        content=body.model_dump(mode="json"),
    )


@admin_router.get("", response_model=FilmListRead)
async def list_films_endpoint(
    admin: Annotated[Admin, Depends(get_current_admin)],
    db: Annotated[AsyncSession, Depends(get_db)],
    published: Annotated[bool | None, Query()] = None,
    page: Annotated[int, Query(ge=1)] = 1,
    page_size: Annotated[int, Query(ge=1, le=MAX_PAGE_SIZE)] = DEFAULT_PAGE_SIZE,
) -> FilmListRead:
    """Admin film listing, newest first."""
    items, total = await list_films(db, published=published, page=page, page_size=page_size)
    pages = (total + page_size - 1) // page_size if total > 0 else 0

    return FilmListRead(
        items=[FilmRead.model_validate(item) for item in items],
        total=total,
        page=page,
        page_size=page_size,
        pages=pages,
    )


@router.get("/{film_id}", response_model=FilmRead)
async def get_film_endpoint(
    film_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> FilmRead:
    """Get one film."""
    film = await get_film(db, film_id)
    if not film:
        raise HTTPException(status_code=404, detail="Film not found.")
    return FilmRead.model_validate(film)


@router.get("/{film_id}/watch", response_model=FilmWatchRead)
async def watch_film_endpoint(
    film_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> FilmWatchRead:
    """Player page data with display-ready artwork URLs."""
    film = await get_film(db, film_id)
    if not film:
        raise HTTPException(status_code=404, detail="Film not found.")

    return FilmWatchRead(
        id=film.id,
        title=film.title,
        year=film.year,
        genre=film.genre,
        isvip=film.isvip,
        duration=film.duration,
        description=film.description,
        video_url=film.video_url,
        trailer_url=film.trailer_url,
        tmdb_id=film.tmdb_id,
        backdrop_url=normalize_backdrop_url(film.backdrop),
        poster_url=normalize_poster_url(film.poster),
    )
