"""Command line argument handling."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Sequence

from .messages import CatalogError, Message
from .model import Options

_EXACT_PARAMS = frozenset(
    {
        "catalog", "pofile", "codeset", "version", "revision", "nooptim", "fill",
        "quiet", "flush", "nobeep", "nobufferedio", "newctfile", "nolangtolower",
        "modified", "warnctgaps", "copymsgnew", "oldmsgnew", "?", "-h", "help",
        "--help",
    }
)
# "revision=" is compared on its first eight characters only.
_PREFIX_PARAMS = ("catalog=", "pofile=", "codeset=", "version=", "revision", "newctfile=")
_HELP = frozenset({"?", "-h", "help", "--help"})
_FLAGS = {
    "nooptim": ("no_optim", True),
    "fill": ("fill", True),
    "quiet": ("quiet", True),
    "flush": ("do_expunge", True),
    "nobeep": ("no_beep", True),
    "nobufferedio": ("no_buffered_io", True),
    "nolangtolower": ("lang_to_lower", False),
    "modified": ("modified", True),
    "warnctgaps": ("warn_ct_gaps", True),
    "copymsgnew": ("copy_news", True),
}
_IGNORED = frozenset({"noautodate", "nospaces"})
_INT_RE = re.compile(r"\s*([+-]?\d+)")


def is_param(arg: str) -> bool:
    """Whether ``arg`` is one of the recognised keywords."""
    lower = arg.lower()
    return lower in _EXACT_PARAMS or lower.startswith(_PREFIX_PARAMS)


def _to_int(text: str) -> int:
    match = _INT_RE.match(text)
    return int(match.group(1)) if match else 0


def base_name_from(cd_file: str) -> str | None:
    """Base name of a description file: the part between the last '/' and last '.'."""
    start = cd_file.rfind("/") + 1
    end = cd_file.rfind(".")
    if end < 0:
        end = len(cd_file)
    return cd_file[start:end] if end - start > 0 else None


@dataclass
class Arguments:
    """Everything the command line asks for."""

    cd_file: str | None = None
    ct_file: str | None = None
    po_file: str | None = None
    catalog: str | None = None
    make_catalog: bool = False
    new_ct_file: str | None = None
    make_new_ct: bool = False
    cat_version: int = -1
    cat_revision: int = -1
    base_name: str | None = None
    sources: list[tuple[str, str]] = field(default_factory=list)
    options: Options = field(default_factory=Options)
    show_usage: bool = False


class _Cursor:
    def __init__(self, argv: Sequence[str]) -> None:
        self.argv = list(argv)
        self.pos = 0

    def __iter__(self):
        while self.pos < len(self.argv):
            arg = self.argv[self.pos]
            self.pos += 1
            yield arg

    def value(self) -> str | None:
        """The next argument if it is not a keyword, consuming it."""
        if self.pos < len(self.argv) and not is_param(self.argv[self.pos]):
            self.pos += 1
            return self.argv[self.pos - 1]
        return None

    def any_value(self) -> str | None:
        if self.pos < len(self.argv):
            self.pos += 1
            return self.argv[self.pos - 1]
        return None


def parse_args(argv: Sequence[str]) -> Arguments:
    """Interpret the command line arguments (without the program name).

    Parsing stops with ``show_usage`` set where usage should be printed.
    Raises :class:`CatalogError` when a catalog is wanted without a translation.
    """
    args = Arguments()
    opts = args.options
    if not argv:
        args.show_usage = True
        return args

    cursor = _Cursor(argv)
    for arg in cursor:
        lower = arg.lower()
        if lower.startswith("catalog="):
            args.catalog = arg[8:]
            args.make_catalog = True
        elif lower == "catalog":
            args.catalog = cursor.value()
            args.make_catalog = True
        elif lower.startswith("pofile="):
            args.po_file = arg[7:]
        elif lower == "pofile":
            args.po_file = cursor.value()
        elif lower.startswith("codeset="):
            opts.dest_codeset = arg[8:]
        elif lower == "codeset":
            opts.dest_codeset = cursor.value() or ""
        elif lower.startswith("version="):
            args.cat_version = _to_int(arg[8:])
        elif lower == "version":
            value = cursor.value()
            args.cat_version = -1 if value is None else _to_int(value)
        elif lower.startswith("revision="):
            args.cat_revision = _to_int(arg[9:])
        elif lower == "revision":
            value = cursor.value()
            args.cat_revision = -1 if value is None else _to_int(value)
        elif lower in _FLAGS:
            name, value = _FLAGS[lower]
            setattr(opts, name, value)
        elif lower.startswith("newctfile="):
            args.new_ct_file = arg[10:]
            args.make_new_ct = True
        elif lower == "newctfile":
            args.new_ct_file = cursor.value()
            args.make_new_ct = True
        elif lower == "oldmsgnew":
            marker = cursor.any_value()
            if marker is not None:
                opts.set_old_msg_new(marker)
        elif lower in _IGNORED:
            continue
        elif args.cd_file is None:
            if lower in _HELP:
                args.show_usage = True
                return args
            args.cd_file = arg
        elif "=" in arg:
            if args.base_name is None:
                args.base_name = base_name_from(args.cd_file)
            source, template = arg.split("=", 1)
            args.sources.append((source, template))
        else:
            if args.ct_file is not None:
                args.show_usage = True
                return args
            args.ct_file = arg

    if args.make_catalog and args.ct_file is None and args.po_file is None:
        raise CatalogError(Message.ERR_NOCTARGUMENT)
    return args