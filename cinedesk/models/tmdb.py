"""Parsed TMDB payloads.

Raw TMDB JSON is validated into these models at the client boundary; nothing
downstream of the field mapper sees untyped external data. Unknown keys are
ignored. Blocks that TMDB may omit (credits, videos, genres) stay `None` so
"absent" and "empty" can be told apart.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _TMDBModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class MovieSearchResult(_TMDBModel):
    """One hit from /search/movie."""

    id: int
    title: str = ""
    original_title: str = ""
    overview: str = ""
    release_date: str = ""
    poster_path: str | None = None
    backdrop_path: str | None = None
    vote_count: int = 0
    popularity: float = 0.0

    @field_validator("title", "original_title", "overview", "release_date", mode="before")
    @classmethod
    def _none_to_empty(cls, v: object) -> object:
        return "" if v is None else v

    @field_validator("vote_count", "popularity", mode="before")
    @classmethod
    def _none_to_zero(cls, v: object) -> object:
        return 0 if v is None else v

    @property
    def release_year(self) -> int | None:
        """Year part of release_date ("2021-09-15" -> 2021), None if unknown."""
        head = self.release_date[:4]
        return int(head) if head.isdigit() else None


class TMDBGenre(_TMDBModel):
    id: int
    name: str


class CrewCredit(_TMDBModel):
    id: int | None = None
    name: str = ""
    job: str = ""
    department: str | None = None

    @field_validator("name", "job", mode="before")
    @classmethod
    def _none_to_empty(cls, v: object) -> object:
        return "" if v is None else v


class CastCredit(_TMDBModel):
    id: int | None = None
    name: str = ""
    character: str | None = None
    profile_path: str | None = None
    order: int | None = None

    @field_validator("name", mode="before")
    @classmethod
    def _none_to_empty(cls, v: object) -> object:
        return "" if v is None else v


class Credits(_TMDBModel):
    cast: list[CastCredit] = Field(default_factory=list)
    crew: list[CrewCredit] = Field(default_factory=list)


class Video(_TMDBModel):
    key: str
    site: str = ""
    type: str = ""
    name: str | None = None

    @field_validator("site", "type", mode="before")
    @classmethod
    def _none_to_empty(cls, v: object) -> object:
        return "" if v is None else v


class Videos(_TMDBModel):
    results: list[Video] = Field(default_factory=list)

    @field_validator("results", mode="before")
    @classmethod
    def _drop_keyless(cls, v: object) -> object:
        # Entries without a key cannot be linked to; skip them, keep the rest
        if v is None:
            return []
        if isinstance(v, list):
            return [
                item
                for item in v
                if isinstance(item, dict) and isinstance(item.get("key"), str) and item["key"]
            ]
        return v


class MovieDetail(_TMDBModel):
    """/movie/{id} with append_to_response=credits,videos."""

    id: int
    title: str | None = None
    runtime: int | None = None
    adult: bool = False
    genres: list[TMDBGenre] | None = None
    credits: Credits | None = None
    videos: Videos | None = None

    @field_validator("adult", mode="before")
    @classmethod
    def _none_to_false(cls, v: object) -> object:
        return False if v is None else v

    @property
    def genre_names(self) -> list[str] | None:
        if self.genres is None:
            return None
        return [genre.name for genre in self.genres]


class SearchResponse(BaseModel):
    """Body of GET /api/tmdb/movie-search."""

    results: list[MovieSearchResult] = Field(default_factory=list)
