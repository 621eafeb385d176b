"""Knowledge records decoded from Notion pages.

Every Notion property variant the knowledge database uses is modelled
explicitly. Decoding is defensive: a property that is missing, null or
shaped unexpectedly decodes to its empty value rather than raising, so one
odd page never breaks a whole listing.

Fallbacks:
    - title: None (rendered as "Untitled")
    - select: None (rendered as "unset")
    - multi_select: []
    - rich_text: None
"""

import logging
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..config import PropertyNames

logger = logging.getLogger(__name__)


class _Lenient(BaseModel):
    model_config = ConfigDict(extra="ignore")


class TextContent(_Lenient):
    content: str = ""


class RichTextItem(_Lenient):
    """One rich-text segment. ``plain_text`` is set on reads, ``text`` on writes."""

    plain_text: str | None = None
    text: TextContent | None = None

    @property
    def value(self) -> str:
        if self.plain_text is not None:
            return self.plain_text
        return self.text.content if self.text else ""


class SelectOption(_Lenient):
    name: str = ""


class TitleProperty(_Lenient):
    title: list[RichTextItem] = Field(default_factory=list)

    @property
    def value(self) -> str | None:
        return "".join(item.value for item in self.title) or None


class SelectProperty(_Lenient):
    select: SelectOption | None = None

    @property
    def value(self) -> str | None:
        return self.select.name if self.select and self.select.name else None


class MultiSelectProperty(_Lenient):
    multi_select: list[SelectOption] = Field(default_factory=list)

    @property
    def value(self) -> list[str]:
        return [option.name for option in self.multi_select if option.name]


class RichTextProperty(_Lenient):
    rich_text: list[RichTextItem] = Field(default_factory=list)

    @property
    def value(self) -> str | None:
        return "".join(item.value for item in self.rich_text) or None


class NotionPage(_Lenient):
    """The parts of a Notion page object the server reads."""

    id: str | None = None
    url: str | None = None
    last_edited_time: str | None = None
    properties: dict[str, Any] = Field(default_factory=dict)


class QueryResponse(_Lenient):
    """Body of a database query response."""

    results: list[Any] = Field(default_factory=list)
    has_more: bool = False


_M = TypeVar("_M", bound=BaseModel)


def _decode(model: type[_M], raw: Any) -> _M:
    """Validate ``raw`` as ``model``, falling back to the model's empty value."""
    if not isinstance(raw, dict):
        return model()
    try:
        return model.model_validate(raw)
    except ValidationError as e:
        logger.debug(f"Unexpected {model.__name__} shape, using fallback: {e}")
        return model()


class KnowledgeRecord(BaseModel):
    """A knowledge entry as stored in the Notion database."""

    title: str | None = None
    project: str | None = None
    knowledge_type: str | None = None
    importance: str | None = None
    keywords: list[str] = Field(default_factory=list)
    language: str | None = None
    file_path: str | None = None
    last_edited_time: str | None = None
    url: str = ""

    @classmethod
    def from_page(cls, page: Any, names: PropertyNames) -> "KnowledgeRecord":
        page = _decode(NotionPage, page)
        props = page.properties

        def select(name: str) -> str | None:
            return _decode(SelectProperty, props.get(name)).value

        return cls(
            title=_decode(TitleProperty, props.get(names.title)).value,
            project=select(names.project),
            knowledge_type=select(names.knowledge_type),
            importance=select(names.importance),
            keywords=_decode(MultiSelectProperty, props.get(names.keywords)).value,
            language=select(names.language),
            file_path=_decode(RichTextProperty, props.get(names.file_path)).value,
            last_edited_time=page.last_edited_time,
            url=page.url or "",
        )


class QueryResult(BaseModel):
    """Decoded records of one query page, plus whether Notion holds more."""

    records: list[KnowledgeRecord] = Field(default_factory=list)
    has_more: bool = False


def parse_query_response(data: Any, names: PropertyNames) -> QueryResult:
    response = _decode(QueryResponse, data)
    return QueryResult(
        records=[KnowledgeRecord.from_page(page, names) for page in response.results],
        has_more=response.has_more,
    )


def parse_query_results(data: Any, names: PropertyNames) -> list[KnowledgeRecord]:
    """Decode a database query response body into records, keeping order."""
    return parse_query_response(data, names).records
