"""Tests for the add-film form state."""

import asyncio
from datetime import datetime

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from cinedesk.constants import DEFAULT_FILM_DURATION
from cinedesk.models.film import Film, HomepageCategory
from cinedesk.models.schemas import FilmFieldUpdate, GenreRead, PendingUpload, SubmissionOutcome
from cinedesk.models.tmdb import MovieDetail, MovieSearchResult
from cinedesk.services.films.form import FilmForm
from cinedesk.services.films.submission import FilmSubmissionPipeline
from cinedesk.services.metadata.search import MetadataSearch

GENRES = [
    GenreRead(id=1, name="Action"),
    GenreRead(id=2, name="Drame"),
    GenreRead(id=3, name="Science-Fiction"),
]

DUNE = MovieSearchResult(
    id=438631,
    title="Dune",
    original_title="Dune",
    overview="Paul Atreides...",
    release_date="2021-09-15",
    poster_path="/dune.jpg",
    backdrop_path="/dune-backdrop.jpg",
    vote_count=12000,
    popularity=80.5,
)

DUNE_DETAIL = MovieDetail.model_validate(
    {
        "id": 438631,
        "runtime": 155,
        "adult": False,
        "genres": [{"id": 878, "name": "Science-Fiction"}],
        "credits": {
            "cast": [{"name": "Timothée Chalamet", "character": "Paul Atreides"}],
            "crew": [{"name": "Denis Villeneuve", "job": "Director"}],
        },
        "videos": {"results": [{"key": "n9xhJrPXop4", "site": "YouTube", "type": "Trailer"}]},
    }
)


async def no_search(query: str) -> list[MovieSearchResult]:
    return []


def make_form(detail_fn=None, on_refocus=None) -> FilmForm:
    async def default_detail(tmdb_id: int) -> MovieDetail:
        return DUNE_DETAIL

    search = MetadataSearch(search_fn=no_search, detail_fn=detail_fn or default_detail)
    form = FilmForm(search=search, category_rules=[], on_refocus=on_refocus)
    form.genres = list(GENRES)
    return form


class TestInitialState:
    """Tests for a fresh form."""

    def test_defaults(self):
        """Test the draft defaults."""
        form = FilmForm(search=MetadataSearch(search_fn=no_search))

        assert form.draft.title == ""
        assert form.draft.year == datetime.now().year
        assert form.draft.duration == DEFAULT_FILM_DURATION
        assert len(form.draft.cast) == 1
        assert form.draft.cast[0].name == ""
        assert not form.is_submitting

    @pytest.mark.asyncio
    async def test_load_genres_failure(self):
        """Test a failed genre load leaves an empty list and an error."""

        async def failing():
            raise RuntimeError("db down")

        form = FilmForm(search=MetadataSearch(search_fn=no_search))
        await form.load_genres(failing)

        assert form.genres == []
        assert form.genres_error == "Could not load genres."

    @pytest.mark.asyncio
    async def test_load_genres(self):
        """Test genres are loaded from the fetcher."""

        async def fetch():
            return GENRES

        form = FilmForm(search=MetadataSearch(search_fn=no_search))
        await form.load_genres(fetch)

        assert [g.id for g in form.genres] == [1, 2, 3]
        assert form.genres_error is None


class TestSelectResult:
    """Tests for TMDB auto-fill."""

    @pytest.mark.asyncio
    async def test_select_fills_fields(self):
        """Test summary and detail fields land in the draft."""
        form = make_form()
        form.search.query = "dune"

        assert await form.select_result(DUNE)

        draft = form.draft
        assert draft.title == "Dune"
        assert draft.year == 2021
        assert draft.tmdb_id == 438631
        assert draft.duration == 155
        assert draft.director == "Denis Villeneuve"
        assert draft.selected_genre_ids == {3}
        assert draft.trailer_url == "https://www.youtube.com/watch?v=n9xhJrPXop4"
        assert draft.video_url == ""
        assert draft.poster_url == "https://image.tmdb.org/t/p/w500/dune.jpg"
        assert [m.name for m in draft.cast] == ["Timothée Chalamet"]
        assert form.notification.title == "Fields filled automatically"
        assert form.search.query == ""
        assert form.search.results == []

    @pytest.mark.asyncio
    async def test_select_applies_categories(self):
        """Test homepage categories are replaced by the rule output."""
        form = make_form()
        form.category_rules = None
        this_year = datetime.now().year
        recent = DUNE.model_copy(update={"release_date": f"{this_year}-01-01"})

        await form.select_result(recent)

        assert HomepageCategory.NEW in form.draft.homepage_categories
        assert HomepageCategory.TOP in form.draft.homepage_categories
        assert HomepageCategory.FEATURED in form.draft.homepage_categories

    @pytest.mark.asyncio
    async def test_detail_failure_keeps_summary(self):
        """Test a failed detail fetch keeps summary fields and manual edits."""

        async def failing(tmdb_id: int) -> MovieDetail:
            raise RuntimeError("timeout")

        form = make_form(detail_fn=failing)
        form.apply(FilmFieldUpdate(director="Manual Director"))

        assert await form.select_result(DUNE)

        assert form.draft.title == "Dune"
        assert form.draft.director == "Manual Director"
        assert form.draft.duration == DEFAULT_FILM_DURATION

    @pytest.mark.asyncio
    async def test_newer_selection_wins(self):
        """Test a late detail for an older selection is discarded."""
        gate = asyncio.Event()

        async def detail_fn(tmdb_id: int) -> MovieDetail:
            if tmdb_id == 1:
                await gate.wait()
                return MovieDetail(id=1, runtime=111)
            return MovieDetail(id=tmdb_id, runtime=222)

        form = make_form(detail_fn=detail_fn)
        first = asyncio.create_task(form.select_result(MovieSearchResult(id=1, title="First")))
        await asyncio.sleep(0)

        assert await form.select_result(MovieSearchResult(id=2, title="Second"))
        gate.set()

        assert await first is False
        assert form.draft.title == "Second"
        assert form.draft.duration == 222

    @pytest.mark.asyncio
    async def test_refocus_is_scheduled(self):
        """Test the search box gets focus back shortly after selection."""
        calls = []
        form = make_form(on_refocus=lambda: calls.append(True))

        await form.select_result(DUNE)
        await asyncio.sleep(0.15)

        assert calls == [True]


class TestManualEdits:
    """Tests for toggles, cast rows and media slots."""

    def test_toggle_genre(self):
        """Test checking and unchecking a genre."""
        form = make_form()
        form.toggle_genre(2, True)
        form.toggle_genre(3, True)
        form.toggle_genre(2, False)

        assert form.draft.selected_genre_ids == {3}

    def test_toggle_category(self):
        """Test toggling accepts enum values and strings."""
        form = make_form()
        form.toggle_category("vip", True)
        form.toggle_category(HomepageCategory.NEW, True)
        form.toggle_category(HomepageCategory.VIP, False)

        assert form.draft.homepage_categories == {HomepageCategory.NEW}

    def test_cast_rows(self):
        """Test adding, editing and removing cast rows."""
        form = make_form()
        form.add_cast_member()
        form.update_cast_member(0, name="Zendaya")
        form.update_cast_member(1, name="Oscar Isaac", role="Leto")
        form.remove_cast_member(0)

        assert [(m.name, m.role) for m in form.draft.cast] == [("Oscar Isaac", "Leto")]

    def test_local_cast_photo_replaces_url(self):
        """Test attaching a photo drops the TMDB photo URL."""
        form = make_form()
        form.draft.cast[0].photo = "https://image.tmdb.org/t/p/w185/paul.jpg"
        form.attach_cast_photo(0, PendingUpload(filename="paul.png", content=b"png"))

        member = form.draft.cast[0]
        assert member.photo is None
        assert member.preview == "local:paul.png"

        form.remove_cast_photo(0)
        assert member.file is None
        assert member.preview is None

    def test_clear_media(self):
        """Test clearing a media slot drops both the file and the URL."""
        form = make_form()
        form.draft.poster_url = "https://image.tmdb.org/t/p/w500/dune.jpg"
        form.attach_poster(PendingUpload(filename="poster.jpg", content=b"jpg"))
        form.clear_poster()
        form.draft.video_url = "https://www.youtube.com/watch?v=x"
        form.clear_video()

        assert form.draft.poster_file is None
        assert form.draft.poster_url is None
        assert form.draft.video_url == ""


class TestSubmit:
    """Tests for FilmForm.submit."""

    @pytest.mark.asyncio
    async def test_submit_creates_film(self, db_session: AsyncSession, genres, fake_storage):
        """Test a filled form submits and redirects."""
        form = make_form()
        form.genres = genres
        await form.select_result(DUNE)

        result = await form.submit(FilmSubmissionPipeline(db_session, fake_storage))

        assert result.outcome == SubmissionOutcome.CREATED
        assert form.redirect_to == "/admin/films"
        assert form.notification.title == "Film added"
        assert not form.is_submitting

    @pytest.mark.asyncio
    async def test_invalid_submit_resets_flag(self, db_session: AsyncSession, genres, fake_storage):
        """Test an invalid draft reports the error and writes nothing."""
        form = make_form()

        result = await form.submit(FilmSubmissionPipeline(db_session, fake_storage))

        assert result.outcome == SubmissionOutcome.INVALID
        assert form.notification.variant == "destructive"
        assert form.redirect_to is None
        assert not form.is_submitting
        count = (await db_session.execute(select(func.count(Film.id)))).scalar_one()
        assert count == 0
