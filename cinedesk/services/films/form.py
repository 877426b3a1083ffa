"""Add-film form state.

`FilmForm` is the headless model behind the admin "add film" screen: it owns
the editable draft, the TMDB search box and the genre reference list, and it
applies TMDB auto-fill as suggestions the admin can still change.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Mapping, Sequence

from cinedesk.constants import SEARCH_REFOCUS_DELAY
from cinedesk.models.film import HomepageCategory
from cinedesk.models.schemas import (
    CastMemberDraft,
    FilmDraft,
    FilmFieldUpdate,
    GenreRead,
    Notification,
    PendingUpload,
)
from cinedesk.models.tmdb import MovieSearchResult
from cinedesk.services.films.mapper import CategoryRule, map_detail, summary_fields
from cinedesk.services.films.submission import FilmSubmissionPipeline, SubmissionResult
from cinedesk.services.metadata.search import MetadataSearch

logger = logging.getLogger(__name__)

GenreFetcher = Callable[[], Awaitable[Sequence[GenreRead]]]


class FilmForm:
    """One add-film form session."""

    def __init__(
        self,
        search: MetadataSearch | None = None,
        category_rules: Sequence[CategoryRule] | None = None,
        on_refocus: Callable[[], None] | None = None,
        cookies: Mapping[str, str] | None = None,
    ) -> None:
        self.draft = FilmDraft()
        self.search = search or MetadataSearch(cookies=cookies)
        self.genres: list[GenreRead] = []
        self.genres_error: str | None = None
        self.category_rules = category_rules
        self.notification: Notification | None = None
        self.is_submitting = False
        self.redirect_to: str | None = None
        self._on_refocus = on_refocus
        self._selection = 0

    # ------------------------------------------------------------------
    # Reference data
    # ------------------------------------------------------------------

    async def load_genres(self, fetch: GenreFetcher) -> None:
        """Load the genre list once; failure leaves it empty."""
        try:
            self.genres = list(await fetch())
            self.genres_error = None
        except Exception as e:
            logger.error(f"Could not load genres: {e}")
            self.genres = []
            self.genres_error = "Could not load genres."

    # ------------------------------------------------------------------
    # TMDB auto-fill
    # ------------------------------------------------------------------

    def apply(self, update: FilmFieldUpdate) -> None:
        """Copy the explicitly set fields of `update` onto the draft."""
        for name, value in update.model_dump(exclude_unset=True).items():
            if name == "cast":
                value = list(update.cast or [])
            setattr(self.draft, name, value)

    async def select_result(self, result: MovieSearchResult) -> bool:
        """Fill the form from a picked search hit.

        Returns False when a newer selection superseded this one before its
        detail record arrived (its late data is discarded).
        """
        self._selection += 1
        selection = self._selection

        self.apply(summary_fields(result))
        self.search.clear()
        self._schedule_refocus()

        detail = await self.search.fetch_detail(result)
        if selection != self._selection:
            logger.debug(f"Ignoring detail for TMDB {result.id}: selection changed")
            return False

        if detail is not None:
            mapped = map_detail(result, detail, self.genres, rules=self.category_rules)
            self.apply(mapped.updates)
            self.draft.homepage_categories = set(mapped.categories)

        self.notification = Notification(
            title="Fields filled automatically",
            description="Every field can still be edited before saving.",
        )
        return True

    def _schedule_refocus(self) -> None:
        if self._on_refocus is None:
            return
        asyncio.get_running_loop().call_later(SEARCH_REFOCUS_DELAY, self._on_refocus)

    # ------------------------------------------------------------------
    # Manual edits
    # ------------------------------------------------------------------

    def toggle_genre(self, genre_id: int, checked: bool) -> None:
        if checked:
            self.draft.selected_genre_ids.add(genre_id)
        else:
            self.draft.selected_genre_ids.discard(genre_id)

    def toggle_category(self, category: HomepageCategory | str, checked: bool) -> None:
        category = HomepageCategory(category)
        if checked:
            self.draft.homepage_categories.add(category)
        else:
            self.draft.homepage_categories.discard(category)

    def add_cast_member(self) -> None:
        self.draft.cast.append(CastMemberDraft())

    def remove_cast_member(self, index: int) -> None:
        del self.draft.cast[index]

    def update_cast_member(self, index: int, *, name: str | None = None, role: str | None = None) -> None:
        member = self.draft.cast[index]
        if name is not None:
            member.name = name
        if role is not None:
            member.role = role

    def attach_cast_photo(self, index: int, upload: PendingUpload) -> None:
        """A local photo replaces the TMDB one."""
        member = self.draft.cast[index]
        member.file = upload
        member.photo = None

    def remove_cast_photo(self, index: int) -> None:
        member = self.draft.cast[index]
        member.file = None
        member.photo = None

    def attach_poster(self, upload: PendingUpload | None) -> None:
        self.draft.poster_file = upload

    def attach_backdrop(self, upload: PendingUpload | None) -> None:
        self.draft.backdrop_file = upload

    def attach_video(self, upload: PendingUpload | None) -> None:
        self.draft.video_file = upload

    def clear_poster(self) -> None:
        self.draft.poster_file = None
        self.draft.poster_url = None

    def clear_backdrop(self) -> None:
        self.draft.backdrop_file = None
        self.draft.backdrop_url = None

    def clear_video(self) -> None:
        self.draft.video_file = None
        self.draft.video_url = ""

    # ------------------------------------------------------------------
    # Submit
    # ------------------------------------------------------------------

    async def submit(self, pipeline: FilmSubmissionPipeline, admin_id: int | None = None) -> SubmissionResult:
        """Run the submission pipeline; `is_submitting` is always reset."""
        self.is_submitting = True
        try:
            result = await pipeline.submit(self.draft, self.genres, admin_id)
        finally:
            self.is_submitting = False
        self.notification = result.notification
        self.redirect_to = result.redirect_to
        return result
