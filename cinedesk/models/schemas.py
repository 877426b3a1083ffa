"""Pydantic schemas for API validation, serialization and form drafts."""

from datetime import datetime
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, computed_field

from cinedesk.constants import DEFAULT_FILM_DURATION
from cinedesk.models.film import HomepageCategory


def _current_year() -> int:
    return datetime.now().year


# Admin schemas
class AdminRead(BaseModel):
    """Admin read schema."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    display_name: str | None = None


class LoginRequest(BaseModel):
    """Credentials for POST /api/auth/login."""

    email: str = Field(min_length=3, max_length=255)
    token: str = Field(min_length=1, max_length=255)


# Genre schemas
class GenreRead(BaseModel):
    """Genre read schema."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


# Film schemas
class CastMemberRead(BaseModel):
    """Cast entry as stored on a film row."""

    name: str
    role: str = ""
    photo: str | None = None


class FilmRead(BaseModel):
    """Film read schema."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    original_title: str | None = None
    description: str | None = None
    year: int
    duration: int | None = None
    director: str | None = None
    genre: str | None = None
    trailer_url: str | None = None
    video_url: str | None = None
    isvip: bool = False
    published: bool = False
    poster: str | None = None
    backdrop: str | None = None
    cast: list[CastMemberRead] = Field(default_factory=list)
    homepage_categories: list[HomepageCategory] = Field(default_factory=list)
    tmdb_id: int | None = None
    created_at: datetime


class FilmListRead(BaseModel):
    """Paginated film list."""

    items: list[FilmRead]
    total: int
    page: int
    page_size: int
    pages: int


class FilmWatchRead(BaseModel):
    """What the watch page needs, with display-ready image URLs."""

    id: int
    title: str
    year: int | None = None
    genre: str | None = None
    isvip: bool = False
    duration: int | None = None
    description: str | None = None
    video_url: str | None = None
    trailer_url: str | None = None
    tmdb_id: int | None = None
    backdrop_url: str
    poster_url: str


# Series schemas
class SeriesRead(BaseModel):
    """Series read schema."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str | None = None
    genre: str | None = None
    isvip: bool = False
    poster: str | None = None
    backdrop: str | None = None
    start_year: int | None = None
    end_year: int | None = None

    @computed_field
    @property
    def years(self) -> str:
        """Card label: "2016", "2008 - 2013" or "" when unknown."""
        if self.start_year is None:
            return ""
        if self.end_year:
            return f"{self.start_year} - {self.end_year}"
        return str(self.start_year)


# Notifications (toasts shown by the admin UI)
class Notification(BaseModel):
    """A user-visible toast."""

    title: str
    description: str
    variant: Literal["default", "destructive"] = "default"


# Form drafts
class PendingUpload(BaseModel):
    """A local binary attached to the form, not yet in object storage."""

    filename: str
    content: bytes = Field(repr=False)
    content_type: str = "application/octet-stream"


class CastMemberDraft(BaseModel):
    """Editable cast row. `file` wins over `photo` at submit time."""

    name: str = ""
    role: str = ""
    photo: str | None = None
    file: PendingUpload | None = None

    @property
    def preview(self) -> str | None:
        if self.file is not None:
            return f"local:{self.file.filename}"
        return self.photo


class FilmDraft(BaseModel):
    """All editable fields of the add-film form.

    Each media field (poster, backdrop, video, cast photos) is resolved at
    submit time from exactly one source: the pending binary when attached,
    the URL otherwise.
    """

    title: str = ""
    original_title: str = ""
    description: str = ""
    year: int = Field(default_factory=_current_year)
    duration: int = DEFAULT_FILM_DURATION
    director: str = ""
    selected_genre_ids: set[int] = Field(default_factory=set)
    is_vip: bool = False
    is_published: bool = False
    trailer_url: str = ""
    video_url: str = ""
    video_file: PendingUpload | None = None
    poster_url: str | None = None
    poster_file: PendingUpload | None = None
    backdrop_url: str | None = None
    backdrop_file: PendingUpload | None = None
    cast: list[CastMemberDraft] = Field(default_factory=lambda: [CastMemberDraft()])
    homepage_categories: set[HomepageCategory] = Field(default_factory=set)
    tmdb_id: int | None = None


class FilmFieldUpdate(BaseModel):
    """Partial draft update produced by the metadata mapper.

    Only explicitly set fields are applied (`model_dump(exclude_unset=True)`).
    """

    title: str | None = None
    original_title: str | None = None
    description: str | None = None
    year: int | None = None
    duration: int | None = None
    director: str | None = None
    selected_genre_ids: set[int] | None = None
    trailer_url: str | None = None
    video_url: str | None = None
    poster_url: str | None = None
    backdrop_url: str | None = None
    cast: list[CastMemberDraft] | None = None
    tmdb_id: int | None = None


class CastMemberPayload(BaseModel):
    """Cast row in the JSON payload of POST /api/admin/films."""

    name: str = ""
    role: str = ""
    photo: str | None = None
    photo_upload: int | None = Field(
        default=None, ge=0, description="Index into the cast_photos files"
    )


class FilmDraftPayload(BaseModel):
    """JSON part of the multipart add-film request."""

    title: str = ""
    original_title: str = ""
    description: str = ""
    year: int = Field(default_factory=_current_year, ge=1870, le=2200)
    duration: int = Field(default=DEFAULT_FILM_DURATION, ge=0)
    director: str = ""
    genre_ids: list[int] = Field(default_factory=list)
    is_vip: bool = False
    is_published: bool = False
    trailer_url: str = ""
    video_url: str = ""
    poster_url: str | None = None
    backdrop_url: str | None = None
    cast: list[CastMemberPayload] = Field(default_factory=list)
    homepage_categories: list[HomepageCategory] = Field(default_factory=list)
    tmdb_id: int | None = None


class SubmissionOutcome(str, Enum):
    """How an add-film submission ended."""

    CREATED = "created"
    INVALID = "invalid"
    DUPLICATE = "duplicate"
    UPLOAD_FAILED = "upload_failed"
    FAILED = "failed"


class SubmissionResponse(BaseModel):
    """Response body of POST /api/admin/films."""

    outcome: SubmissionOutcome
    notification: Notification
    film: FilmRead | None = None
    redirect_to: str | None = None
