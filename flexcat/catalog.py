"""Binary IFF catalog creation."""

from __future__ import annotations

import re
from datetime import date
from pathlib import Path

from .messages import CatalogError, Message
from .model import Catalog, CatString, Options, make_id

_LONG_SIZE = 4
_CSET_LENGTH = 32
_UTF8_MIBENUM = 106
_SPACES = " \t"

_DATE_RE = re.compile(r"\s*([+-]?\d+)/\s*([+-]?\d+)/\s*([+-]?\d+)")
_REVISION_RE = re.compile(r"\s*([+-]?\d+)\.\s*([+-]?\d+)")
_NAME_RE = re.compile(r"[^$ \t]*")


def _be32(value: int) -> bytes:
    return (value & 0xFFFFFFFF).to_bytes(4, "big")


def _encode(text: str, code_set: int) -> bytes:
    encoding = "utf-8" if code_set == _UTF8_MIBENUM else "latin-1"
    return text.encode(encoding, errors="replace")


def cat_puts(data: bytes, padbytes: int, countnul: bool, lenbytes: int) -> bytes:
    """Encode a length-prefixed, NUL-padded catalog string.

    The result starts with a 32-bit length, then ``lenbytes`` bytes of the
    string's real length, the string itself, and at least one NUL up to a
    multiple of ``padbytes``.
    """
    if lenbytes > _LONG_SIZE:
        raise CatalogError(Message.ERR_NOLENGTHBYTES, _LONG_SIZE)
    if isinstance(data, str):
        data = data.encode("latin-1", errors="replace")
    reallen = len(data)
    chunklen = reallen + lenbytes
    virtuallen = chunklen
    if countnul or chunklen % padbytes == 0:
        virtuallen += 1

    out = bytearray(_be32(virtuallen))
    if lenbytes > 0:
        out += _be32(reallen)[-lenbytes:]
    out += data
    padding = padbytes - chunklen % padbytes
    out += b"\0" * padding
    return bytes(out)


def _put_chunk(chunk_id: int, data: bytes) -> bytes:
    return _be32(chunk_id) + cat_puts(data, 2, True, 0)


def _scan_after(text: str, marker: str, pattern: re.Pattern[str]) -> re.Match[str] | None:
    pos = text.find(marker)
    if pos < 0:
        return None
    return pattern.match(text, pos + len(marker))


def version_chunk_text(catalog: Catalog, today: date | None = None) -> str:
    """Return the text of the FVER chunk for a catalog."""
    today = today or date.today()
    if catalog.cat_version_string is not None:
        text = catalog.cat_version_string.replace(
            "$TODAY", today.strftime("%d.%m.%Y"), 1
        )
        return text.replace(".ct ", ".catalog ", 1)

    rcs = catalog.cat_rcs_id
    if rcs is None:
        raise CatalogError(Message.ERR_NOCTVERSION)

    date_match = _scan_after(rcs, "$Date:", _DATE_RE)
    revision_match = _scan_after(rcs, "$Revision:", _REVISION_RE)
    if date_match is None or revision_match is None:
        raise CatalogError(Message.ERR_WRONGRCSID)
    year, month, day = (int(part) for part in date_match.groups())
    version, revision = (int(part) for part in revision_match.groups())

    name: str | None = None
    id_pos = rcs.find("$Id:")
    if id_pos >= 0:
        rest = rcs[id_pos + 4 :].lstrip(_SPACES)
        name = _NAME_RE.match(rest).group(0)

    if catalog.cat_name is not None:
        name = catalog.cat_name
    elif name is None:
        raise CatalogError(Message.ERR_NOCTVERSION)

    return f"$VER: {name} {version}.{revision} ({day}.{month}.{year})"


def _string_entries(catalog: Catalog, options: Options):
    for cs in catalog.strings:
        text = _select_text(cs, options)
        if text is not None:
            yield cs, text


def _select_text(cs: CatString, options: Options) -> str | None:
    translated = cs.ct_str is not None and not cs.not_in_ct
    if options.fill and (not translated or cs.ct_str == ""):
        return cs.cd_str
    if translated and (options.no_optim or cs.ct_str != cs.cd_str):
        return cs.ct_str
    return None


def build_catalog(catalog: Catalog, options: Options, today: date | None = None) -> bytes:
    """Build the complete binary catalog as bytes."""
    if catalog.cat_version_string is None and catalog.cat_rcs_id is None:
        raise CatalogError(Message.ERR_NOCTVERSION)
    if not catalog.cat_language:
        raise CatalogError(Message.ERR_NOCTLANGUAGE)

    code_set = catalog.code_set
    head = bytearray(b"CTLG")
    version = version_chunk_text(catalog, today)
    head += _put_chunk(make_id("FVER"), _encode(version, code_set))
    for chunk in catalog.chunks:
        head += _put_chunk(chunk.id, _encode(chunk.text, code_set))

    head += b"CSET" + _be32(_CSET_LENGTH) + _be32(code_set)
    head += b"\0" * (_CSET_LENGTH - _LONG_SIZE)

    strings = bytearray()
    for cs, text in _string_entries(catalog, options):
        strings += _be32(cs.id)
        strings += cat_puts(_encode(text, code_set), 4, False, cs.len_bytes)

    body = bytes(head) + b"STRS" + _be32(len(strings)) + bytes(strings)
    return b"FORM" + _be32(len(body)) + body


def create_catalog(
    catalog: Catalog,
    options: Options,
    path: str | Path | None = None,
    today: date | None = None,
) -> Path:
    """Write the binary catalog to ``path`` (default ``<basename>.catalog``)."""
    data = build_catalog(catalog, options, today)
    if path is None:
        if catalog.base_name is None:
            raise CatalogError(Message.ERR_NOCATFILENAME)
        path = f"{catalog.base_name}.catalog"
    target = Path(path)
    try:
        target.write_bytes(data)
    except OSError as exc:
        raise CatalogError(Message.ERR_NOCATALOG, str(target)) from exc
    return target