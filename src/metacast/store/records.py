"""YAML-backed record store for talks, speakers and scope overrides.

Layout under the store root::

    episodes/{collection}/_artist.yml            collection-level overrides
    episodes/{collection}/_album.yml
    episodes/{collection}/{period}/_season.yml   period-level overrides
    episodes/{collection}/{period}/{talkId}.yml  one talk
    people/{speakerId}.yml                       one speaker

Keys are slash-separated paths relative to a namespace root without the
``.yml`` suffix. File names starting with ``_`` are reserved for scope
overrides and never enumerated as talks.
"""

import logging
import os
import tempfile
from collections.abc import Iterator
from pathlib import Path, PurePosixPath
from typing import Any, Literal

import yaml

from metacast.store.metadata import MetadataResolver
from metacast.store.models import Speaker, Talk
from metacast.utils.errors import StoreError

logger = logging.getLogger(__name__)

Namespace = Literal["episodes", "people"]
ScopeKind = Literal["artist", "album", "season"]

RECORD_SUFFIX = ".yml"
RESERVED_PREFIX = "_"


def _is_populated(value: Any) -> bool:
    return value is not None and value != "" and value != [] and value != {}


def talk_key(collection: str, period: str, talk_id: str) -> str:
    """Store key of a talk document."""
    return f"{collection}/{period}/{talk_id}"


class RecordStore:
    """Durable mapping of record keys to YAML documents.

    Obtain one with :meth:`open`; pass it explicitly to every component
    that reads or writes records.

    Example:
        >>> store = RecordStore.open(Path("data"))
        >>> store.put_speaker(Speaker(id="jane-doe", name="Jane Doe"))
        >>> store.get_speaker("jane-doe").name
        'Jane Doe'
    """

    def __init__(self, root: Path):
        """Initialize store.

        Args:
            root: Store root directory (must exist; see :meth:`open`)
        """
        self.root = root
        self.episodes_dir = root / "episodes"
        self.people_dir = root / "people"
        self.resolver = MetadataResolver(self)

    @classmethod
    def open(cls, root: Path) -> "RecordStore":
        """Open (and create if needed) a store rooted at ``root``."""
        store = cls(root)
        store.episodes_dir.mkdir(parents=True, exist_ok=True)
        store.people_dir.mkdir(parents=True, exist_ok=True)
        return store

    # Generic key/value access

    def path_for(self, key: str, namespace: Namespace = "episodes") -> Path:
        """Resolve a key to its file path.

        Raises:
            StoreError: If the key is empty or escapes the namespace root
        """
        parts = PurePosixPath(key).parts
        if not parts or key.startswith("/") or any(p in ("..", ".") for p in parts):
            raise StoreError(f"Invalid record key: {key!r}")

        base = self.episodes_dir if namespace == "episodes" else self.people_dir
        return base.joinpath(*parts).with_name(parts[-1] + RECORD_SUFFIX)

    def exists(self, key: str, namespace: Namespace = "episodes") -> bool:
        """Check whether a record exists."""
        return self.path_for(key, namespace).exists()

    def get(self, key: str, namespace: Namespace = "episodes") -> dict[str, Any] | None:
        """Load a document.

        Returns:
            Document dict, or None if no record exists under ``key``

        Raises:
            StoreError: If the file exists but is not a YAML mapping
        """
        return self._read(self.path_for(key, namespace))

    def put(self, key: str, document: dict[str, Any], namespace: Namespace = "episodes") -> Path:
        """Write a document atomically, replacing any previous version.

        Returns:
            Path of the written file
        """
        path = self.path_for(key, namespace)
        path.parent.mkdir(parents=True, exist_ok=True)
        content = yaml.safe_dump(
            document, default_flow_style=False, sort_keys=False, allow_unicode=True
        )
        self._write_file_atomic(path, content)
        return path

    # Talks

    def get_talk(self, key: str) -> Talk | None:
        """Load a talk by key without resolving its metadata."""
        data = self.get(key)
        if data is None:
            return None
        return Talk.model_validate(data)

    def put_talk(self, collection: str, period: str, talk: Talk) -> Path:
        """Write a talk, replacing any previous version."""
        return self.put(talk_key(collection, period, talk.id), talk.to_document())

    def upsert_talk(self, collection: str, period: str, talk: Talk) -> bool:
        """Write a talk without clobbering fields a previous run populated.

        Fields already populated on disk (e.g. a probed ``duration``) are
        kept; fields missing on disk are filled from ``talk``.

        Returns:
            True if anything was written
        """
        key = talk_key(collection, period, talk.id)
        existing = self.get(key)
        new_doc = talk.to_document()

        if existing is None:
            self.put(key, new_doc)
            return True

        merged = dict(new_doc)
        for name, value in existing.items():
            if _is_populated(value) or name not in merged:
                merged[name] = value

        if merged == existing:
            logger.debug(f"Talk unchanged: {key}")
            return False

        self.put(key, merged)
        return True

    def period_folders(self, collection: str) -> list[str]:
        """Names of period folders in a collection, sorted."""
        collection_dir = self.episodes_dir / collection
        if not collection_dir.is_dir():
            return []
        return sorted(
            p.name
            for p in collection_dir.iterdir()
            if p.is_dir() and not p.name.startswith((RESERVED_PREFIX, "."))
        )

    def talk_keys(self, collection: str | None = None) -> list[str]:
        """All talk keys, optionally limited to one collection, sorted by path."""
        base = self.episodes_dir / collection if collection else self.episodes_dir
        if not base.is_dir():
            return []

        keys = []
        for path in base.rglob(f"*{RECORD_SUFFIX}"):
            if path.name.startswith((RESERVED_PREFIX, ".")):
                continue
            rel = path.relative_to(self.episodes_dir).with_suffix("")
            keys.append(rel.as_posix())
        return sorted(keys)

    def iter_talks(self, collection: str | None = None) -> Iterator[Talk]:
        """Yield talks with ``source``, ``period`` and ``metadata`` attached.

        Order is folder order then filename order. Unreadable talk files
        are logged and skipped.
        """
        for key in self.talk_keys(collection):
            try:
                talk = self.get_talk(key)
            except (StoreError, ValueError) as e:
                logger.warning(f"Skipping unreadable talk {key}: {e}")
                continue
            if talk is None:
                continue

            parts = key.split("/")
            talk.source = parts[0]
            talk.period = parts[-2] if len(parts) > 2 else None
            talk.metadata = self.resolver.resolve(key)
            yield talk

    # Speakers

    def get_speaker(self, speaker_id: str) -> Speaker | None:
        """Load a speaker by id."""
        data = self.get(speaker_id, namespace="people")
        if data is None:
            return None
        return Speaker.model_validate(data)

    def put_speaker(self, speaker: Speaker | dict[str, Any]) -> Path:
        """Write a speaker document keyed by its id."""
        document = speaker.to_document() if isinstance(speaker, Speaker) else dict(speaker)
        if not document.get("id"):
            raise StoreError("Speaker document has no id")
        return self.put(document["id"], document, namespace="people")

    def iter_speakers(self) -> Iterator[Speaker]:
        """Yield every speaker, sorted by id."""
        for path in sorted(self.people_dir.glob(f"*{RECORD_SUFFIX}")):
            data = self._read(path)
            if data is None:
                continue
            data.setdefault("id", path.stem)
            yield Speaker.model_validate(data)

    # Scope overrides

    def load_scope(self, folder: str, kind: ScopeKind) -> dict[str, Any]:
        """Load the ``_artist``/``_album``/``_season`` override of a folder.

        Args:
            folder: Folder relative to the episodes root ("" for the root)
            kind: Scope kind

        Returns:
            Override document, or an empty dict when none is declared
        """
        key = f"{folder}/{RESERVED_PREFIX}{kind}" if folder else f"{RESERVED_PREFIX}{kind}"
        return self.get(key) or {}

    def put_scope(self, folder: str, kind: ScopeKind, document: dict[str, Any]) -> Path:
        """Write a scope override for a folder."""
        key = f"{folder}/{RESERVED_PREFIX}{kind}" if folder else f"{RESERVED_PREFIX}{kind}"
        return self.put(key, document)

    # File helpers

    def _read(self, path: Path) -> dict[str, Any] | None:
        if not path.exists():
            return None

        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise StoreError(f"Invalid YAML in {path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise StoreError(f"Expected a mapping in {path}, got {type(data).__name__}")
        return data

    def _write_file_atomic(self, file_path: Path, content: str) -> None:
        """Write file atomically (temp file in the same directory, then rename).

        Raises:
            OSError: If write or rename fails
        """
        temp_fd, temp_path = tempfile.mkstemp(
            dir=file_path.parent, prefix=".tmp_", suffix=RECORD_SUFFIX
        )

        try:
            with open(temp_fd, "w", encoding="utf-8") as f:
                f.write(content)
                f.flush()
                os.fsync(f.fileno())

            Path(temp_path).replace(file_path)
        except Exception:
            Path(temp_path).unlink(missing_ok=True)
            raise
