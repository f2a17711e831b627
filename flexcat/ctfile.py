"""Creation of catalog translation (CT) files."""

from __future__ import annotations

import os
from datetime import date
from pathlib import Path
from typing import Mapping

from .messages import CatalogError, Message
from .model import Catalog, CatalogChunk, Options

_UTF8_MIBENUM = 106
_NO_LANGUAGE = "nolanguage"


def ct_language(catalog: Catalog, environ: Mapping[str, str] | None = None) -> str:
    """Language to write into a new translation file.

    The catalog's own language wins; otherwise the ``language`` environment
    variable (up to its first newline) is used, and ``nolanguage`` last.
    """
    if catalog.cat_language is not None:
        return catalog.cat_language
    environ = os.environ if environ is None else environ
    lang = environ.get("language")
    if lang is None:
        return _NO_LANGUAGE
    return lang.split("\n", 1)[0]


def _version_line(catalog: Catalog, today: date) -> str:
    date_str = today.strftime("%d.%m.%Y")
    name = catalog.base_name if catalog.base_name is not None else "<name>"
    version = str(catalog.cat_version) if catalog.cat_version != -1 else "<ver>"
    revision = str(catalog.cat_revision) if catalog.cat_revision != -1 else "<rev>"
    return f"## version $VER: {name}.catalog {version}.{revision} ({date_str})\n"


def _header(catalog: Catalog, today: date) -> list[str]:
    if catalog.cat_rcs_id is not None:
        lines = [f"## rcsid {catalog.cat_rcs_id}\n"]
        if catalog.cat_name is not None:
            lines.append(f"## name {catalog.cat_name}\n")
        return lines
    if catalog.cat_version_string is not None:
        return [f"## version {catalog.cat_version_string}\n"]
    return [_version_line(catalog, today)]


def _chunk_tag(chunk: CatalogChunk) -> str:
    return (chunk.id & 0xFFFFFFFF).to_bytes(4, "big").decode("latin-1")


def render_ct(
    catalog: Catalog,
    options: Options | None = None,
    today: date | None = None,
    environ: Mapping[str, str] | None = None,
) -> str:
    """Return the text of a new catalog translation file for ``catalog``."""
    options = options or Options()
    today = today or date.today()
    language = ct_language(catalog, environ)

    out = _header(catalog, today)
    out.append(f"## language {language}\n## codeset {catalog.code_set}\n;\n")
    for chunk in catalog.chunks:
        if chunk.text != catalog.cat_language:
            out.append(f"## chunk {_chunk_tag(chunk)} {chunk.text}\n")

    strings = iter(catalog.strings)
    for line in catalog.cd_lines:
        if line.startswith("#"):
            out.append(f";{line}\n")
        elif line.startswith(";"):
            out.append(f"{line}\n")
        else:
            cs = next(strings, None)
            if cs is None:
                continue
            translation = cs.ct_str if cs.ct_str is not None else ""
            original = cs.cd_str.replace("\n", "\n; ")
            out.append(f"{cs.id_str}\n{translation}\n; {original}\n")
            if cs.not_in_ct and catalog.ct_scanned:
                out.append(f";\n; {options.msg_new}\n")
    return "".join(out)


def create_ct_file(
    catalog: Catalog,
    options: Options | None = None,
    path: str | Path | None = None,
    today: date | None = None,
    environ: Mapping[str, str] | None = None,
) -> Path:
    """Write a new translation file, by default ``<basename>_<language>.catalog``."""
    text = render_ct(catalog, options, today, environ)
    if path is None:
        if catalog.base_name is None:
            raise CatalogError(Message.ERR_NOCTFILENAME)
        path = f"{catalog.base_name}_{ct_language(catalog, environ)}.catalog"
    target = Path(path)
    encoding = "utf-8" if catalog.code_set == _UTF8_MIBENUM else "latin-1"
    try:
        with open(target, "w", encoding=encoding, errors="replace", newline="") as handle:
            handle.write(text)
    except OSError as exc:
        raise CatalogError(Message.ERR_NONEWCTFILE, str(target)) from exc
    return target