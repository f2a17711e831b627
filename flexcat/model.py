"""Core data model: catalog strings, chunks, run options and catalog state."""

from __future__ import annotations

from dataclasses import dataclass, field

MAX_NEW_STR_LEN = 25
BUFSIZE = 4096
FLEXCAT_SDDIR = "FLEXCAT_SDDIR"
DEFAULT_FLEXCAT_SDDIR = "/usr/lib/flexcat"
DEFAULT_BUFFER_SIZE = 2048


def make_id(tag: str | bytes) -> int:
    """Pack a four-character IFF tag into a big-endian 32-bit identifier."""
    raw = tag.encode("latin-1") if isinstance(tag, str) else bytes(tag)
    if len(raw) != 4:
        raise ValueError(f"IFF tag must be exactly 4 characters, got {tag!r}")
    return int.from_bytes(raw, "big")


@dataclass
class CatString:
    """One string of a catalog description, with its translation if any."""

    id_str: str
    cd_str: str
    ct_str: str | None = None
    id: int = 0
    nr: int = 0
    min_len: int = 0
    max_len: int = 0
    len_bytes: int = 0
    not_in_ct: bool = False
    po_format: bool = False


@dataclass
class CatalogChunk:
    """An extra IFF chunk to be written into the catalog file."""

    id: int
    text: str


def _bounded(text: str) -> str:
    return text[: MAX_NEW_STR_LEN - 1]


@dataclass
class Options:
    """Settings that control how catalogs and translation files are produced."""

    warn_ct_gaps: bool = False
    no_optim: bool = False
    fill: bool = False
    do_expunge: bool = False
    no_beep: bool = False
    quiet: bool = False
    lang_to_lower: bool = True
    no_buffered_io: bool = False
    modified: bool = False
    msg_new: str = "***NEW***"
    copy_news: bool = False
    old_msg_new: str = "; ***NEW***"
    dest_codeset: str = ""
    sddir: str = ""
    buffer_size: int = DEFAULT_BUFFER_SIZE

    def set_old_msg_new(self, text: str) -> None:
        """Set the marker looked for in old translations, prefixed with '; '."""
        self.old_msg_new = _bounded(f"; {text}")


@dataclass
class Catalog:
    """Everything known about one catalog: description, translation and chunks."""

    base_name: str | None = None
    language: str = "english"
    cat_version: int = -1
    cat_revision: int = -1
    cat_version_string: str | None = None
    cat_rcs_id: str | None = None
    cat_name: str | None = None
    cat_language: str | None = None
    code_set: int = 0
    ct_scanned: bool = False
    cd_lines: list[str] = field(default_factory=list)
    strings: list[CatString] = field(default_factory=list)
    chunks: list[CatalogChunk] = field(default_factory=list)

    def add_string(self, cat_string: CatString) -> CatString:
        """Append a string to the catalog and return it."""
        self.strings.append(cat_string)
        return cat_string

    def add_chunk(self, chunk: CatalogChunk) -> CatalogChunk:
        """Append an extra chunk to the catalog and return it."""
        self.chunks.append(chunk)
        return chunk

    def num_strings(self) -> int:
        """Number of strings in the catalog."""
        return len(self.strings)