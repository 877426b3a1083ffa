"""Map TMDB records onto the add-film draft.

Everything here is pure: given a search summary, the detail record and the
locally loaded genres, it returns suggested field values and homepage
categories. The form applies them; the admin can override any of them.
"""

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from datetime import datetime

from cinedesk.config import get_settings
from cinedesk.constants import (
    CATEGORY_NEW_MAX_AGE_YEARS,
    CATEGORY_TOP_MIN_POPULARITY,
    CATEGORY_TOP_MIN_VOTES,
    IMAGE_SIZE_BACKDROP,
    IMAGE_SIZE_CAST,
    IMAGE_SIZE_POSTER,
    MAX_MAPPED_CAST,
    YOUTUBE_SITE,
    YOUTUBE_WATCH_URL,
)
from cinedesk.models.film import HomepageCategory
from cinedesk.models.schemas import CastMemberDraft, FilmFieldUpdate, GenreRead
from cinedesk.models.tmdb import MovieDetail, MovieSearchResult, Video
from cinedesk.utils.images import tmdb_image_url

TRAILER_TYPE = "Trailer"
DIRECTOR_JOB = "Director"


# =============================================================================
# Homepage category rules
# =============================================================================


@dataclass(frozen=True)
class CategoryContext:
    """Inputs every category rule may look at."""

    summary: MovieSearchResult
    detail: MovieDetail
    current_year: int


@dataclass(frozen=True)
class CategoryRule:
    """condition -> category. Rules are evaluated independently."""

    category: HomepageCategory
    description: str
    applies: Callable[[CategoryContext], bool]


def _is_recent(ctx: CategoryContext) -> bool:
    year = ctx.summary.release_year
    return year is not None and year >= ctx.current_year - CATEGORY_NEW_MAX_AGE_YEARS


def _is_popular(ctx: CategoryContext) -> bool:
    return (
        ctx.summary.vote_count > CATEGORY_TOP_MIN_VOTES
        or ctx.summary.popularity > CATEGORY_TOP_MIN_POPULARITY
    )


def _is_adult(ctx: CategoryContext) -> bool:
    return ctx.detail.adult


def _has_artwork(ctx: CategoryContext) -> bool:
    return bool(ctx.summary.poster_path) and bool(ctx.summary.backdrop_path)


NEW_RULE = CategoryRule(HomepageCategory.NEW, "released this year or last year", _is_recent)
TOP_RULE = CategoryRule(HomepageCategory.TOP, "more than 1000 votes or popularity above 100", _is_popular)
VIP_RULE = CategoryRule(HomepageCategory.VIP, "TMDB adult flag set", _is_adult)
FEATURED_RULE = CategoryRule(HomepageCategory.FEATURED, "has both poster and backdrop", _has_artwork)


def default_category_rules(vip_from_adult: bool | None = None) -> tuple[CategoryRule, ...]:
    """The rule table, with the provisional adult -> vip rule behind a setting."""
    if vip_from_adult is None:
        vip_from_adult = get_settings().category_vip_from_adult
    rules = [NEW_RULE, TOP_RULE]
    if vip_from_adult:
        rules.append(VIP_RULE)
    rules.append(FEATURED_RULE)
    return tuple(rules)


def assign_categories(
    summary: MovieSearchResult,
    detail: MovieDetail,
    rules: Iterable[CategoryRule],
    current_year: int | None = None,
) -> set[HomepageCategory]:
    """Union of the categories whose rule matches."""
    ctx = CategoryContext(
        summary=summary,
        detail=detail,
        current_year=current_year or datetime.now().year,
    )
    return {rule.category for rule in rules if rule.applies(ctx)}


# =============================================================================
# Field rules
# =============================================================================


def resolve_director(detail: MovieDetail) -> str:
    """Name of the first crew member credited as Director, else ""."""
    if detail.credits is None:
        return ""
    for member in detail.credits.crew:
        if member.job == DIRECTOR_JOB:
            return member.name
    return ""


def resolve_genre_ids(genre_names: Iterable[str], genres: Sequence[GenreRead]) -> set[int]:
    """Local genre ids whose name exactly matches one of the TMDB names.

    Matching is case-sensitive; TMDB genres with no local counterpart are
    dropped and never created.
    """
    wanted = set(genre_names)
    return {genre.id for genre in genres if genre.name in wanted}


def youtube_watch_url(video: Video | None) -> str:
    return f"{YOUTUBE_WATCH_URL}{video.key}" if video else ""


def find_trailer(videos: Iterable[Video]) -> Video | None:
    """First YouTube video typed Trailer."""
    return next(
        (v for v in videos if v.type == TRAILER_TYPE and v.site == YOUTUBE_SITE),
        None,
    )


def find_main_video(videos: Iterable[Video]) -> Video | None:
    """First YouTube video that is not a Trailer (clip, featurette, teaser...)."""
    return next(
        (v for v in videos if v.type != TRAILER_TYPE and v.site == YOUTUBE_SITE),
        None,
    )


def map_cast(detail: MovieDetail, limit: int = MAX_MAPPED_CAST) -> list[CastMemberDraft]:
    """Top-billed cast, in TMDB order, as editable rows."""
    if detail.credits is None:
        return []
    return [
        CastMemberDraft(
            name=actor.name,
            role=actor.character or "",
            photo=tmdb_image_url(actor.profile_path, IMAGE_SIZE_CAST),
        )
        for actor in detail.credits.cast[:limit]
    ]


def summary_fields(summary: MovieSearchResult, current_year: int | None = None) -> FilmFieldUpdate:
    """Fields available straight from a search hit, before any detail fetch."""
    return FilmFieldUpdate(
        title=summary.title,
        original_title=summary.original_title,
        description=summary.overview,
        year=summary.release_year or current_year or datetime.now().year,
        poster_url=tmdb_image_url(summary.poster_path, IMAGE_SIZE_POSTER),
        backdrop_url=tmdb_image_url(summary.backdrop_path, IMAGE_SIZE_BACKDROP),
        tmdb_id=summary.id,
    )


@dataclass
class MappedFields:
    """Mapper output: field suggestions plus homepage categories."""

    updates: FilmFieldUpdate
    categories: set[HomepageCategory] = field(default_factory=set)


def map_detail(
    summary: MovieSearchResult,
    detail: MovieDetail,
    genres: Sequence[GenreRead],
    rules: Iterable[CategoryRule] | None = None,
    current_year: int | None = None,
) -> MappedFields:
    """Turn a TMDB detail record into draft updates.

    A field is only suggested when the detail record carries the data it
    derives from; absent blocks leave the current draft value untouched.
    """
    values: dict = {}

    if detail.runtime:
        values["duration"] = detail.runtime

    if detail.credits is not None:
        values["director"] = resolve_director(detail)
        if detail.credits.cast:
            values["cast"] = map_cast(detail)

    genre_names = detail.genre_names
    if genre_names is not None:
        values["selected_genre_ids"] = resolve_genre_ids(genre_names, genres)

    if detail.videos is not None:
        values["trailer_url"] = youtube_watch_url(find_trailer(detail.videos.results))
        values["video_url"] = youtube_watch_url(find_main_video(detail.videos.results))

    if rules is None:
        rules = default_category_rules()

    return MappedFields(
        updates=FilmFieldUpdate(**values),
        categories=assign_categories(summary, detail, rules, current_year),
    )
