"""Source file generation from source description templates."""

from __future__ import annotations

import os
import re
import warnings
from enum import Enum
from pathlib import Path
from typing import Iterable, Mapping, Sequence, Union

from .messages import CatalogError, Message, format_message
from .model import DEFAULT_FLEXCAT_SDDIR, FLEXCAT_SDDIR, Catalog, CatString

VERS = "FlexCat 2.18"

_SPACES = " \t"
_UTF8_MIBENUM = 106
_ESCAPES = {
    0x08: "\\b",
    0x0A: "\\n",
    0x0D: "\\r",
    0x09: "\\t",
    0x0C: "\\f",
    0x00: "\\000",
}
_HEX_PAIR = re.compile("..")

Part = Union[str, bytes]


class StringType(Enum):
    """The language whose string literal syntax is produced."""

    C = "c"
    ASSEMBLER = "assembler"
    OBERON = "oberon"
    E = "e"
    NONE = "none"


_TYPE_PREFIXES = (
    ("c", StringType.C),
    ("assembler", StringType.ASSEMBLER),
    ("oberon", StringType.OBERON),
    ("e", StringType.E),
    ("none", StringType.NONE),
)


class _Mode(Enum):
    NONE = 0
    BIN = 1
    ASCII = 2


def real_length(data: str | bytes) -> int:
    """Return the binary length of a catalog string."""
    if isinstance(data, str):
        data = data.encode("latin-1", errors="replace")
    return len(data)


def _is_ascii(c: int) -> bool:
    return 0x20 <= c < 0x7F or c >= 0xA0


class StringWriter:
    """Writes one catalog string as a literal of the chosen string type."""

    def __init__(
        self,
        string_type: StringType = StringType.C,
        long_strings: bool = True,
        encoding: str = "latin-1",
    ) -> None:
        self.string_type = string_type
        self.long_strings = long_strings
        self.encoding = encoding
        self.length = 0
        self._mode = _Mode.NONE
        self._out: list[str] = []

    def _put(self, text: str) -> None:
        self._out.append(text)

    def begin(self) -> None:
        """Open a string literal."""
        self.length = 0
        self._mode = _Mode.NONE
        if self.string_type in (StringType.C, StringType.OBERON):
            self._put('"')
            self._mode = _Mode.ASCII
        elif self.string_type is StringType.E:
            self._put("'")

    def separate(self) -> None:
        """Split the literal onto a new line when short strings are wanted."""
        if self.long_strings:
            return
        kind = self.string_type
        if kind is StringType.C:
            self._put('"\\\n\t"')
        elif kind is StringType.E:
            self._put("' +\n\t'")
        elif kind is StringType.OBERON:
            self._put('"\n\t"')
        elif kind is StringType.ASSEMBLER:
            if self._mode is _Mode.ASCII:
                self._put("'")
            self._put("\n")
            self._mode = _Mode.NONE

    def write_bin(self, c: int) -> None:
        """Write one binary (non-printable) byte."""
        c &= 0xFF
        kind = self.string_type
        if kind in (StringType.C, StringType.E, StringType.OBERON):
            escape = _ESCAPES.get(c)
            if escape is None:
                if kind is StringType.E and c == 0x1B:
                    escape = "\\e"
                else:
                    escape = f"\\{c:03o}"
            self._put(escape)
        elif kind is StringType.ASSEMBLER:
            if self._mode is _Mode.NONE:
                self._put(f"\tdc.b\t${c:02x}")
            else:
                if self._mode is _Mode.ASCII:
                    self._put("'")
                self._put(f",${c:02x}")
        else:
            raise CatalogError(Message.ERR_NOBINCHARS)
        self.length += 1
        self._mode = _Mode.BIN

    def write_ascii(self, c: int) -> None:
        """Write one printable byte."""
        c &= 0xFF
        ch = chr(c)
        kind = self.string_type
        if kind in (StringType.C, StringType.OBERON):
            self._put('\\"' if ch == '"' else ch)
        elif kind is StringType.E:
            self._put("''" if ch == "'" else ch)
        elif kind is StringType.ASSEMBLER:
            if ch == "'":
                self.write_bin(c)
                return
            if self._mode is _Mode.NONE:
                self._put(f"\tdc.b\t'{ch}")
            elif self._mode is _Mode.ASCII:
                self._put(ch)
            else:
                self._put(f",'{ch}")
        else:
            self._put(ch)
            return
        self.length += 1
        self._mode = _Mode.ASCII

    def finish(self) -> None:
        """Close the string literal."""
        kind = self.string_type
        if kind in (StringType.C, StringType.OBERON):
            self._put('"')
        elif kind is StringType.E:
            self._put("'")
        elif kind is StringType.ASSEMBLER and self._mode is _Mode.ASCII:
            self._put("'")

    def _units(self, part: Part) -> Iterable[bytes]:
        if isinstance(part, (bytes, bytearray)):
            return (bytes([b]) for b in part)
        return (ch.encode(self.encoding, errors="replace") for ch in part)

    def write_string(
        self,
        data: Part | Sequence[Part],
        length: int | None = None,
        lenbytes: int = 0,
        allbytes: bool = False,
    ) -> None:
        """Write a whole literal.

        ``data`` is a string, bytes, or a sequence of parts that are split
        from each other with :meth:`separate`. When ``length`` is given and
        not negative, its low ``lenbytes`` bytes are written first.
        """
        parts: Sequence[Part]
        if isinstance(data, (str, bytes, bytearray)):
            parts = [data]
        else:
            parts = list(data)

        self.begin()
        if length is not None and length >= 0 and lenbytes > 0:
            size = max(4, lenbytes)
            prefix = (length & 0xFFFFFFFF).to_bytes(size, "big")[-lenbytes:]
            for byte in prefix:
                self.write_bin(byte)

        need_separate = False
        for number, part in enumerate(parts):
            if number:
                need_separate = True
            for unit in self._units(part):
                if need_separate:
                    self.separate()
                    need_separate = False
                chosen = unit if allbytes else unit[-1:]
                for byte in chosen:
                    if _is_ascii(byte):
                        self.write_ascii(byte)
                    else:
                        self.write_bin(byte)
        self.finish()

    def getvalue(self) -> str:
        """Everything written so far."""
        return "".join(self._out)


def _encoding_for(catalog: Catalog) -> str:
    return "utf-8" if catalog.code_set == _UTF8_MIBENUM else "latin-1"


def _file_name(name: str | None, mode: int) -> str:
    result = name or ""
    if mode & 1:
        result = os.path.basename(result)
    if mode & 2:
        result = os.path.splitext(result)[0]
    return result


def _mode_digit(c: str) -> int:
    return max(0, ord(c) - ord("0")) if c else 0


def _hex_bytes(value: int, count: int) -> str:
    width = max(20, count * 2)
    digits = format(value & 0xFFFFFFFF, f"0{width}x")[-count * 2 :]
    return "".join(f"\\x{pair}" for pair in _HEX_PAIR.findall(digits))


class _Renderer:
    def __init__(self, catalog: Catalog, source_name: str, cd_name: str | None) -> None:
        self.catalog = catalog
        self.source_name = source_name
        self.cd_name = cd_name
        self.string_type = StringType.C
        self.long_strings = True
        self.encoding = _encoding_for(catalog)

    def directive(self, line: str) -> bool:
        if not line.startswith("##"):
            return False
        rest = line[2:].lstrip(_SPACES)
        lower = rest.lower()
        if lower.startswith("rem"):
            return True
        if lower.startswith("stringtype"):
            rest = rest[10:].lstrip(_SPACES)
            lower = rest.lower()
            for prefix, kind in _TYPE_PREFIXES:
                if lower.startswith(prefix):
                    self.string_type = kind
                    rest = rest[len(prefix) :]
                    break
            else:
                warnings.warn(format_message(Message.ERR_UNKNOWNSTRINGTYPE), stacklevel=4)
                rest = ""
            if rest.lstrip(_SPACES):
                raise CatalogError(Message.ERR_EXTRA_CHARACTERS)
            return True
        if lower.startswith("shortstrings"):
            self.long_strings = False
            if rest[12:].lstrip(_SPACES):
                raise CatalogError(Message.ERR_EXTRA_CHARACTERS)
            return True
        return False

    def literal(self, data: str, length: int | None, lenbytes: int, allbytes: bool) -> str:
        writer = StringWriter(self.string_type, self.long_strings, self.encoding)
        writer.write_string(data, length, lenbytes, allbytes)
        return writer.getvalue()

    def _binary(self, cs: CatString) -> bytes:
        return cs.cd_str.encode(self.encoding, errors="replace")

    def expand(self, line: str) -> list[str]:
        strings = self.catalog.strings
        index = 0
        lines = []
        while True:
            cs = strings[index] if index < len(strings) else None
            has_next = index + 1 < len(strings)
            text, repeat = self._expand_once(line, cs, has_next)
            lines.append(text + "\n")
            if not (repeat and cs is not None and has_next):
                return lines
            index += 1

    def _expand_once(
        self, line: str, cs: CatString | None, has_next: bool
    ) -> tuple[str, bool]:
        out: list[str] = []
        repeat = False
        pos = 0
        size = len(line)

        def take() -> str:
            nonlocal pos
            ch = line[pos] if pos < size else ""
            pos += 1
            return ch

        while pos < size:
            ch = take()
            if ch != "%":
                out.append(ch)
                continue
            c = take()
            if c == "b":
                out.append(self.catalog.base_name or "")
            elif c == "n":
                out.append(str(self.catalog.num_strings()))
            elif c == "v":
                out.append(str(self.catalog.cat_version))
            elif c == "l":
                lenbytes = cs.len_bytes if cs else 0
                allbytes = cs.po_format if cs else False
                out.append(self.literal(self.catalog.language, None, lenbytes, allbytes))
            elif c == "f":
                c = take()
                if c == "v":
                    out.append(VERS)
                else:
                    out.append(_file_name(self.cd_name, _mode_digit(c)))
            elif c == "o":
                out.append(_file_name(self.source_name, _mode_digit(take())))
            elif c == "i":
                repeat = True
                if cs is not None:
                    out.append(cs.id_str)
            elif c and c in "atdxc0123456789":
                width = 0
                while c and "0" <= c <= "9":
                    width = width * 10 + int(c)
                    c = take()
                if cs is not None:
                    out.append(self._numeric(c, width, cs))
                repeat = True
            elif c == "e":
                repeat = True
                if cs is not None:
                    out.append(str(cs.nr))
            elif c == "s":
                repeat = True
                if cs is not None:
                    length = len(cs.cd_str) if cs.len_bytes else None
                    out.append(self.literal(cs.cd_str, length, cs.len_bytes, cs.po_format))
            elif c == "(":
                repeat = True
                end = line.find(")", pos)
                if end < 0:
                    raise CatalogError(Message.ERR_NOTERMINATEBRACKET)
                if cs is not None and has_next:
                    out.append(line[pos:end])
                pos = end + 1
            elif c == "z":
                repeat = True
                if cs is not None:
                    real = real_length(self._binary(cs))
                    out.append("\\x00" * (((real + 1) & 0xFFFFFE) - real))
            else:
                out.append(take())
        return "".join(out), repeat

    def _numeric(self, c: str, width: int, cs: CatString) -> str:
        if c == "a":
            return _hex_bytes(cs.id, width or 4)
        if c == "t":
            padded = (real_length(self._binary(cs)) + 1) & 0xFFFFFE
            return _hex_bytes(padded, width or 4)
        if c in ("c", "d", "x"):
            spec = "o" if c == "c" else c
            value = cs.id if spec == "d" else cs.id & 0xFFFFFFFF
            return format(value, f"0{width}{spec}" if width else spec)
        return ""


def render_source(
    catalog: Catalog,
    template_lines: Iterable[str],
    source_name: str,
    cd_name: str | None = None,
) -> str:
    """Expand a source description template for the catalog's strings."""
    renderer = _Renderer(catalog, source_name, cd_name)
    out: list[str] = []
    for raw in template_lines:
        line = raw[:-1] if raw.endswith("\n") else raw
        if renderer.directive(line):
            continue
        out.extend(renderer.expand(line))
    return "".join(out)


def find_template(
    name: str | Path,
    environ: Mapping[str, str] | None = None,
    default_dir: str | Path = DEFAULT_FLEXCAT_SDDIR,
) -> Path:
    """Locate a source description: as given, in $FLEXCAT_SDDIR, then the default dir."""
    environ = os.environ if environ is None else environ
    candidates = [Path(name)]
    sddir = environ.get(FLEXCAT_SDDIR)
    if sddir is not None:
        candidates.append(Path(sddir) / name)
    candidates.append(Path(default_dir) / name)
    for candidate in candidates:
        if candidate.is_file():
            return candidate
    raise CatalogError(Message.ERR_NOSOURCEDESCRIPTION, str(name))


def _read_lines(path: Path) -> list[str]:
    lines = path.read_text(encoding="latin-1").split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def create_source_file(
    catalog: Catalog,
    source_path: str | Path,
    template_path: str | Path,
    cd_path: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Path:
    """Render a template and write the generated source to ``source_path``."""
    template = find_template(template_path, environ)
    try:
        lines = _read_lines(template)
    except OSError as exc:
        raise CatalogError(Message.ERR_NOSOURCEDESCRIPTION, str(template_path)) from exc
    text = render_source(
        catalog, lines, str(source_path), None if cd_path is None else str(cd_path)
    )
    target = Path(source_path)
    try:
        with open(target, "w", encoding="latin-1", newline="") as handle:
            handle.write(text)
    except OSError as exc:
        raise CatalogError(Message.ERR_NOSOURCE, str(target)) from exc
    return target