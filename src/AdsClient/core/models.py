"""Search result models.

``Document`` is generated once from ``DOCUMENT_FIELDS``: every field is
optional and stays ``None`` unless it was requested through the field list
(``fl``) and returned by the server.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Mapping, Optional, Sequence, Union

from dateutil import parser as dt_parser

from AdsClient.core.errors import DecodeError


class Database(str, Enum):
    """Databases a document can belong to."""

    ASTRONOMY = "astronomy"
    PHYSICS = "physics"
    GENERAL = "general"


class DocType(str, Enum):
    """Document types reported by the search API."""

    ARTICLE = "article"
    EPRINT = "eprint"
    INPROCEEDINGS = "inproceedings"
    INBOOK = "inbook"
    ABSTRACT = "abstract"
    BOOK = "book"
    BOOKREVIEW = "bookreview"
    CATALOG = "catalog"
    CIRCULAR = "circular"
    ERRATUM = "erratum"
    MASTERSTHESIS = "mastersthesis"
    NEWSLETTER = "newsletter"
    OBITUARY = "obituary"
    PHDTHESIS = "phdthesis"
    PRESSRELEASE = "pressrelease"
    PROCEEDINGS = "proceedings"
    PROPOSAL = "proposal"
    SOFTWARE = "software"
    TALK = "talk"
    TECHREPORT = "techreport"
    MISC = "misc"


class FieldKind(Enum):
    """Value kinds used by document fields."""

    STR = "str"
    STR_LIST = "str_list"
    INT = "int"
    FLOAT = "float"
    DATETIME = "datetime"
    DATABASES = "databases"
    DOCTYPE = "doctype"


_KIND_TYPES: dict[FieldKind, Any] = {
    FieldKind.STR: str,
    FieldKind.STR_LIST: tuple[str, ...],
    FieldKind.INT: int,
    FieldKind.FLOAT: float,
    FieldKind.DATETIME: datetime,
    FieldKind.DATABASES: tuple[Union[Database, str], ...],
    FieldKind.DOCTYPE: Union[DocType, str],
}


@dataclass(frozen=True, slots=True)
class FieldSpec:
    """One document field.

    Attributes:
        name: Attribute name on ``Document``.
        key: Key used by the API (also the name to pass to ``fl``).
        kind: Value kind used for decoding.
    """

    name: str
    key: str
    kind: FieldKind


def _spec(key: str, kind: FieldKind, name: str | None = None) -> FieldSpec:
    return FieldSpec(name=name or key, key=key, kind=kind)


S, L, I = FieldKind.STR, FieldKind.STR_LIST, FieldKind.INT

DOCUMENT_FIELDS: tuple[FieldSpec, ...] = (
    _spec("abstract", S, name="abs"),
    _spec("ack", S),
    _spec("aff", L),
    _spec("aff_id", L),
    _spec("alternate_bibcode", L),
    _spec("alternate_title", L),
    _spec("arxiv_class", L),
    _spec("author", L),
    _spec("author_count", I),
    _spec("author_norm", L),
    _spec("bibcode", S),
    _spec("bibgroup", L),
    _spec("bibstem", L),
    _spec("citation", L),
    _spec("citation_count", I),
    _spec("cite_read_boost", FieldKind.FLOAT),
    _spec("classic_factor", I),
    _spec("comment", S),
    _spec("copyright", S),
    _spec("data", L),
    _spec("database", FieldKind.DATABASES),
    _spec("date", FieldKind.DATETIME),
    _spec("doctype", FieldKind.DOCTYPE),
    _spec("doi", L),
    _spec("eid", S),
    _spec("entdate", S),
    _spec("entry_date", FieldKind.DATETIME),
    _spec("esources", L),
    _spec("facility", L),
    _spec("first_author", S),
    _spec("first_author_norm", S),
    _spec("grant", L),
    _spec("grant_agencies", L),
    _spec("grant_id", L),
    _spec("id", S),
    _spec("identifier", L),
    _spec("indexstamp", FieldKind.DATETIME),
    _spec("inst", L),
    _spec("isbn", L),
    _spec("issn", L),
    _spec("issue", S),
    _spec("keyword", L),
    _spec("keyword_norm", L),
    _spec("keyword_schema", L),
    _spec("lang", S),
    _spec("links_data", L),
    _spec("nedid", L),
    _spec("nedtype", L),
    _spec("orcid_pub", L),
    _spec("orcid_other", L),
    _spec("orcid_user", L),
    _spec("page", L),
    _spec("page_count", S),
    _spec("page_range", S),
    _spec("property", L),
    _spec("pub", S, name="publication"),
    _spec("pub_raw", S),
    _spec("pubdate", S),
    _spec("pubnote", L),
    _spec("read_count", I),
    _spec("reference", L),
    _spec("simbid", L),
    _spec("title", L),
    _spec("vizier", L),
    _spec("volume", S),
    _spec("year", S),
)

del S, L, I

_FIELDS_BY_KEY: dict[str, FieldSpec] = {spec.key: spec for spec in DOCUMENT_FIELDS}


def _document_from_dict(cls: type, raw: Mapping[str, Any]) -> Any:
    """Decode one document mapping; unknown keys are ignored."""
    if not isinstance(raw, Mapping):
        raise DecodeError(f"Document must be an object, got {type(raw).__name__}")
    values: dict[str, Any] = {}
    for key, value in raw.items():
        spec = _FIELDS_BY_KEY.get(key)
        if spec is None or value is None:
            continue
        values[spec.name] = _decode_value(spec, value)
    return cls(**values)


def _document_to_dict(self: Any) -> dict[str, Any]:
    """Return present fields keyed by their API names, JSON-serializable."""
    out: dict[str, Any] = {}
    for spec in DOCUMENT_FIELDS:
        value = getattr(self, spec.name)
        if value is None:
            continue
        out[spec.key] = _encode_value(spec, value)
    return out


def _document_present_fields(self: Any) -> tuple[str, ...]:
    """Return the API names of all fields that carry a value."""
    return tuple(spec.key for spec in DOCUMENT_FIELDS if getattr(self, spec.name) is not None)


Document = dataclasses.make_dataclass(
    "Document",
    [(spec.name, Optional[_KIND_TYPES[spec.kind]], dataclasses.field(default=None)) for spec in DOCUMENT_FIELDS],
    namespace={
        "__doc__": (
            "A document returned from a search query.\n\n"
            "All fields are optional and only carry a value when requested via the\n"
            "field list. Attribute names follow the API keys except ``abs``\n"
            "(``abstract``) and ``publication`` (``pub``)."
        ),
        "from_dict": classmethod(_document_from_dict),
        "to_dict": _document_to_dict,
        "present_fields": _document_present_fields,
        "__module__": __name__,
    },
    frozen=True,
    slots=True,
)


@dataclass(frozen=True, slots=True)
class SearchPage:
    """A single page of search results.

    Attributes:
        num_found: Total number of matches as reported by this response.
        start: Absolute offset of the first document in ``docs``.
        docs: Documents in this page, in server order.
    """

    num_found: int
    start: int
    docs: Sequence[Any] = ()


def _decode_value(spec: FieldSpec, value: Any) -> Any:
    """Decode one raw JSON value according to its field kind."""
    kind = spec.kind
    if kind is FieldKind.STR:
        if not isinstance(value, str):
            raise _type_error(spec, "a string", value)
        return value
    if kind is FieldKind.STR_LIST:
        return tuple(_expect_str_items(spec, value))
    if kind is FieldKind.INT:
        if isinstance(value, bool) or not isinstance(value, int):
            raise _type_error(spec, "an integer", value)
        return value
    if kind is FieldKind.FLOAT:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise _type_error(spec, "a number", value)
        return float(value)
    if kind is FieldKind.DATETIME:
        if not isinstance(value, str):
            raise _type_error(spec, "a datetime string", value)
        return _parse_iso_datetime(spec, value)
    if kind is FieldKind.DATABASES:
        return tuple(_enum_or_raw(Database, item) for item in _expect_str_items(spec, value))
    if kind is FieldKind.DOCTYPE:
        if not isinstance(value, str):
            raise _type_error(spec, "a string", value)
        return _enum_or_raw(DocType, value)
    raise AssertionError(f"unhandled field kind: {kind}")


def _encode_value(spec: FieldSpec, value: Any) -> Any:
    if spec.kind is FieldKind.DATETIME:
        return value.isoformat().replace("+00:00", "Z")
    if spec.kind is FieldKind.DATABASES:
        return [item.value if isinstance(item, Enum) else item for item in value]
    if spec.kind is FieldKind.DOCTYPE:
        return value.value if isinstance(value, Enum) else value
    if spec.kind is FieldKind.STR_LIST:
        return list(value)
    return value


def _expect_str_items(spec: FieldSpec, value: Any) -> list[str]:
    if not isinstance(value, list):
        raise _type_error(spec, "a list of strings", value)
    for item in value:
        if not isinstance(item, str):
            raise _type_error(spec, "a list of strings", value)
    return value


def _parse_iso_datetime(spec: FieldSpec, raw_value: str) -> datetime:
    """Parse ISO datetime text into a timezone-aware datetime."""
    try:
        parsed = dt_parser.isoparse(raw_value)
    except (TypeError, ValueError) as error:
        raise DecodeError(f"Field '{spec.key}' is not an ISO datetime: {raw_value!r}") from error
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed


def _enum_or_raw(enum_cls: type[Enum], value: str) -> Any:
    # The server adds new values over time; keep unknown ones as plain strings.
    try:
        return enum_cls(value)
    except ValueError:
        return value


def _type_error(spec: FieldSpec, expected: str, value: Any) -> DecodeError:
    return DecodeError(f"Field '{spec.key}' must be {expected}, got {type(value).__name__}")
