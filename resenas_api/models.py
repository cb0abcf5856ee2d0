from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

from .errors import ValidationError

DEFAULT_SERIES = "N/A"
UNRATED = 0
MIN_RATING = 1
MAX_RATING = 5

MSG_BODY = "El cuerpo de la petición debe ser un objeto JSON"
MSG_AUTHORS_REQUIRED = "Autores es requerido y debe ser un array"
MSG_AUTHORS_NON_EMPTY = "Autores debe ser un array con al menos un elemento"
MSG_TITLE_REQUIRED = "Título es requerido"
MSG_TITLE_TYPE = "Título debe ser un texto"
MSG_SERIES_TYPE = "Serie debe ser un texto"
MSG_COMMENTS_TYPE = "Comentarios debe ser un texto"
MSG_RATING = "Valoración debe ser un número entre 1 y 5"

_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")


WIRE_FIELDS = ("id", "autores", "titulo", "serie", "valoracion", "comentarios")


def record_id(record: Any) -> int | None:
    """The integer id of a raw stored record, or None if it has none."""
    if not isinstance(record, dict):
        return None
    rid = record.get("id")
    if isinstance(rid, bool) or not isinstance(rid, int):
        return None
    return rid


@dataclass
class Review:
    """A stored review. Attribute names are English; the wire format is not.

    Keys the service does not know about are kept in ``extra`` and written
    back untouched.
    """

    id: int
    authors: list[str]
    title: str
    series: str = DEFAULT_SERIES
    rating: int = UNRATED
    comments: str = ""
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        data = {
            "id": self.id,
            "autores": list(self.authors),
            "titulo": self.title,
            "serie": self.series,
            "valoracion": self.rating,
            "comentarios": self.comments,
        }
        data.update(self.extra)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Review:
        """Build from a stored record. Raises TypeError on junk."""
        rid = record_id(data)
        if rid is None:
            raise TypeError("review record must be an object with an integer id")
        authors = data.get("autores") or []
        if not isinstance(authors, list):
            raise TypeError("autores must be a list")
        rating = data.get("valoracion", UNRATED)
        return cls(
            id=rid,
            authors=[str(a) for a in authors],
            title=str(data.get("titulo") or ""),
            series=str(data.get("serie", DEFAULT_SERIES) or ""),
            rating=rating if isinstance(rating, (int, float)) else UNRATED,
            comments=str(data.get("comentarios") or ""),
            extra={k: v for k, v in data.items() if k not in WIRE_FIELDS},
        )


def _require_object(payload: Any) -> dict[str, Any]:
    if not isinstance(payload, dict):
        raise ValidationError(MSG_BODY)
    return payload


def _is_author_list(value: Any) -> bool:
    return (
        isinstance(value, list)
        and len(value) > 0
        and all(isinstance(a, str) for a in value)
    )


def _check_rating(value: Any) -> int:
    # bool is an int subclass; JSON true/false is not a rating
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(MSG_RATING)
    if not MIN_RATING <= value <= MAX_RATING:
        raise ValidationError(MSG_RATING)
    return value


def _check_text(value: Any, message: str) -> str:
    if not isinstance(value, str):
        raise ValidationError(message)
    return value


@dataclass
class ReviewInput:
    """Fields accepted when creating a review."""

    authors: list[str]
    title: str
    series: str | None = None
    rating: int | None = None
    comments: str | None = None

    @classmethod
    def from_json(cls, payload: Any) -> ReviewInput:
        body = _require_object(payload)

        authors = body.get("autores")
        if not _is_author_list(authors):
            raise ValidationError(MSG_AUTHORS_REQUIRED)

        title = body.get("titulo")
        if not title or not isinstance(title, str):
            raise ValidationError(MSG_TITLE_REQUIRED)

        rating = body.get("valoracion")
        if rating is not None:
            rating = _check_rating(rating)

        series = body.get("serie")
        if series is not None:
            series = _check_text(series, MSG_SERIES_TYPE)

        comments = body.get("comentarios")
        if comments is not None:
            comments = _check_text(comments, MSG_COMMENTS_TYPE)

        return cls(authors=list(authors), title=title, series=series, rating=rating, comments=comments)

    def to_review(self, review_id: int) -> Review:
        return Review(
            id=review_id,
            authors=list(self.authors),
            title=self.title,
            series=self.series or DEFAULT_SERIES,
            rating=self.rating or UNRATED,
            comments=self.comments or "",
        )


@dataclass
class ReviewPatch:
    """Partial update. ``None`` means the field was not supplied."""

    authors: list[str] | None = None
    title: str | None = None
    series: str | None = None
    rating: int | None = None
    comments: str | None = None

    @classmethod
    def from_json(cls, payload: Any) -> ReviewPatch:
        body = _require_object(payload)
        patch = cls()

        authors = body.get("autores")
        if authors is not None:
            if not _is_author_list(authors):
                raise ValidationError(MSG_AUTHORS_NON_EMPTY)
            patch.authors = list(authors)

        title = body.get("titulo")
        if title is not None:
            patch.title = _check_text(title, MSG_TITLE_TYPE)

        rating = body.get("valoracion")
        if rating is not None:
            patch.rating = _check_rating(rating)

        series = body.get("serie")
        if series is not None:
            patch.series = _check_text(series, MSG_SERIES_TYPE)

        comments = body.get("comentarios")
        if comments is not None:
            patch.comments = _check_text(comments, MSG_COMMENTS_TYPE)

        return patch

    def apply(self, review: Review) -> Review:
        """Copy supplied fields onto ``review`` in place.

        Authors and title only replace the old value when non-empty; series,
        comments and rating win whenever they were supplied, even as "".
        """
        if self.authors:
            review.authors = list(self.authors)
        if self.title:
            review.title = self.title
        if self.series is not None:
            review.series = self.series
        if self.rating is not None:
            review.rating = self.rating
        if self.comments is not None:
            review.comments = self.comments
        return review


def parse_min_rating(value: str) -> int | None:
    """Read the leading integer of a query value ("4.7" -> 4); None if there is none."""
    m = _INT_PREFIX.match(value or "")
    return int(m.group(1)) if m else None


@dataclass
class SearchFilters:
    author: str | None = None
    title: str | None = None
    series: str | None = None
    min_rating: int | None = None
    # Set when a rating filter was given but could not be read as a number
    unmatchable: bool = field(default=False, repr=False)

    @classmethod
    def from_args(cls, args) -> SearchFilters:
        """Build from a query-string mapping (autor, titulo, serie, valoracion)."""
        filters = cls(
            author=args.get("autor") or None,
            title=args.get("titulo") or None,
            series=args.get("serie") or None,
        )
        raw_rating = args.get("valoracion")
        if raw_rating:
            filters.min_rating = parse_min_rating(raw_rating)
            filters.unmatchable = filters.min_rating is None
        return filters

    def matches(self, review: Review) -> bool:
        if self.unmatchable:
            return False
        if self.author:
            needle = self.author.lower()
            if not any(needle in a.lower() for a in review.authors):
                return False
        if self.title and self.title.lower() not in review.title.lower():
            return False
        if self.series and self.series.lower() not in review.series.lower():
            return False
        if self.min_rating is not None and review.rating < self.min_rating:
            return False
        return True
