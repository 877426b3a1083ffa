"""Film authoring: TMDB auto-fill, form state and submission."""

from cinedesk.services.films.form import FilmForm
from cinedesk.services.films.mapper import (
    CategoryRule,
    MappedFields,
    assign_categories,
    default_category_rules,
    map_detail,
    summary_fields,
)
from cinedesk.services.films.submission import (
    FilmSubmissionPipeline,
    SubmissionResult,
    build_genre_string,
    validate_draft,
)

__all__ = [
    "CategoryRule",
    "FilmForm",
    "FilmSubmissionPipeline",
    "MappedFields",
    "SubmissionResult",
    "assign_categories",
    "build_genre_string",
    "default_category_rules",
    "map_detail",
    "summary_fields",
    "validate_draft",
]
