"""Storybook index documents (schema versions 3 and 5).

A fetched ``index.json`` (v5) or ``stories.json`` (v3) is parsed once into a
tagged variant. The version discriminator ``v`` is read exactly once in
``parse_index``; everything after that works on the concrete class.

Both variants expose the same query surface:

- ``list_components()`` returns the de-duplicated component names
- ``resolve_doc_url(component_name, index_url)`` returns the docs iframe URL
  or raises ``ComponentNotFoundError``

Ordering differs on purpose: v3 keeps first-seen order, v5 sorts names.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union
from urllib.parse import urlencode, urlsplit, urlunsplit

from ..errors import ComponentNotFoundError, IndexSchemaError, SchemaMismatchError

# Documents without a "v" field are treated as v5 ("entries")
LEGACY_DEFAULT_VERSION = 5

SUPPORTED_VERSIONS = (3, 5)


def docs_base_url(index_url: str) -> str:
    """Strip the trailing path segment (e.g. ``index.json``) from an index URL."""
    parts = urlsplit(index_url)
    path = parts.path.rsplit("/", 1)[0] if "/" in parts.path else ""
    return urlunsplit((parts.scheme, parts.netloc, path, "", ""))


def build_docs_url(index_url: str, view_mode: str, entry_id: str) -> str:
    """Build ``{base}/iframe.html?viewMode=<mode>&id=<id>``."""
    query = urlencode({"viewMode": view_mode, "id": entry_id})
    return f"{docs_base_url(index_url)}/iframe.html?{query}"


@dataclass(frozen=True)
class StoryV3:
    """One entry of a v3 ``stories`` mapping."""

    key: str
    id: str
    kind: str
    title: str = ""
    name: str = ""
    import_path: str = ""
    story: str = ""
    docs_only: bool = False
    file_name: str = ""
    has_parameters: bool = False

    @classmethod
    def from_dict(cls, key: str, data: Mapping[str, Any]) -> "StoryV3":
        parameters = data.get("parameters")
        has_parameters = isinstance(parameters, Mapping)
        parameters = parameters if has_parameters else {}
        return cls(
            key=key,
            id=str(data.get("id") or ""),
            kind=str(data.get("kind") or ""),
            title=str(data.get("title") or ""),
            name=str(data.get("name") or ""),
            import_path=str(data.get("importPath") or ""),
            story=str(data.get("story") or ""),
            docs_only=bool(parameters.get("docsOnly", False)),
            file_name=str(parameters.get("fileName") or ""),
            has_parameters=has_parameters,
        )

    @property
    def component_name(self) -> str:
        """Last ``/``-separated segment of ``kind``."""
        return self.kind.split("/")[-1].strip()


@dataclass(frozen=True)
class EntryV5:
    """One entry of a v5 ``entries`` mapping."""

    key: str
    type: str
    id: str
    title: str = ""
    name: str = ""
    import_path: str = ""
    tags: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, key: str, data: Mapping[str, Any]) -> "EntryV5":
        tags = data.get("tags")
        return cls(
            key=key,
            type=str(data.get("type") or ""),
            id=str(data.get("id") or ""),
            title=str(data.get("title") or ""),
            name=str(data.get("name") or ""),
            import_path=str(data.get("importPath") or ""),
            tags=[str(tag) for tag in tags] if isinstance(tags, list) else [],
        )

    @property
    def is_docs(self) -> bool:
        return self.type == "docs"


@dataclass(frozen=True)
class StorybookV3Index:
    """Index document with ``v == 3``.

    ``stories`` is None when the document has no usable ``stories`` mapping.
    """

    stories: Optional[List[StoryV3]]
    version: int = 3
    collection = "stories"

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> "StorybookV3Index":
        raw = document.get(cls.collection)
        if not isinstance(raw, Mapping):
            return cls(stories=None)
        return cls(
            stories=[
                StoryV3.from_dict(str(key), value)
                for key, value in raw.items()
                if isinstance(value, Mapping)
            ]
        )

    def list_components(self) -> List[str]:
        """Component names of non docs-only stories, in first-seen order."""
        if self.stories is None:
            return []

        # dict preserves insertion order
        components: Dict[str, None] = {}
        for story in self.stories:
            if not story.has_parameters or story.docs_only or not story.kind:
                continue
            name = story.component_name
            if name:
                components.setdefault(name, None)
        return list(components)

    def resolve_doc_url(self, component_name: str, index_url: str) -> str:
        if self.stories is None:
            raise SchemaMismatchError(component_name, self.collection)

        suffix = f"/{component_name}"
        for story in self.stories:
            if story.kind.endswith(suffix):
                # v3 docs pages always use the "docs" view mode
                return build_docs_url(index_url, "docs", story.id)
        raise ComponentNotFoundError(component_name)


@dataclass(frozen=True)
class StorybookV5Index:
    """Index document with ``v == 5`` (or no ``v`` at all).

    ``entries`` is None when the document has no usable ``entries`` mapping.
    """

    entries: Optional[List[EntryV5]]
    version: int = 5
    collection = "entries"

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> "StorybookV5Index":
        raw = document.get(cls.collection)
        if not isinstance(raw, Mapping):
            return cls(entries=None)
        return cls(
            entries=[
                EntryV5.from_dict(str(key), value)
                for key, value in raw.items()
                if isinstance(value, Mapping)
            ]
        )

    def list_components(self) -> List[str]:
        """Sorted, unique titles of docs entries."""
        if self.entries is None:
            return []
        return sorted({entry.title for entry in self.entries if entry.is_docs and entry.title})

    def resolve_doc_url(self, component_name: str, index_url: str) -> str:
        if self.entries is None:
            raise SchemaMismatchError(component_name, self.collection)

        for entry in self.entries:
            if entry.is_docs and entry.title == component_name:
                return build_docs_url(index_url, entry.type, entry.id)
        raise ComponentNotFoundError(component_name)


StorybookIndex = Union[StorybookV3Index, StorybookV5Index]


def parse_index(document: Any) -> StorybookIndex:
    """Select the index variant from the document's ``v`` discriminator.

    Args:
        document: Decoded JSON body of the index endpoint

    Returns:
        StorybookV3Index or StorybookV5Index

    Raises:
        IndexSchemaError: If the document is not an object or declares an
            unsupported version
    """
    if not isinstance(document, Mapping):
        raise IndexSchemaError(
            f"Storybook index must be a JSON object, got {type(document).__name__}"
        )

    version = document.get("v", LEGACY_DEFAULT_VERSION)
    if version == 3:
        return StorybookV3Index.from_document(document)
    if version == 5:
        return StorybookV5Index.from_document(document)

    supported = ", ".join(str(v) for v in SUPPORTED_VERSIONS)
    raise IndexSchemaError(
        f"Unsupported Storybook index version: {version!r} (supported: {supported})"
    )
