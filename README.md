# flexcat

A library for producing locale catalog output from catalog data held in
memory. From a `Catalog` of strings and their translations it can:

- build a binary IFF catalog (`FORM ... CTLG`) holding the translated strings;
- write a fresh catalog translation file, ready for a translator to fill in;
- expand a source-description template into program source, repeating a
  template line once for every catalog string.

## Installation

```
pip install .
```

## Data model (`flexcat.model`)

- `Catalog` holds the catalog state: `base_name`, `language`, `cat_version`,
  `cat_revision`, `cat_version_string`, `cat_rcs_id`, `cat_name`,
  `cat_language`, `code_set`, `ct_scanned`, the description lines
  `cd_lines`, the `strings` and extra `chunks`. `add_string`, `add_chunk`
  and `num_strings` work on it.
- `CatString` is one string: `id_str`, `cd_str` (original), `ct_str`
  (translation or `None`), `id`, `nr`, `len_bytes`, `not_in_ct`,
  `po_format` and more.
- `CatalogChunk` is an extra chunk with a 32-bit `id` and a `text`;
  `make_id("FVER")` packs a four-character tag into such an id.
- `Options` carries settings such as `fill`, `no_optim`, `msg_new`,
  `old_msg_new` (set with `set_old_msg_new`) and `dest_codeset`.

## Binary catalogs (`flexcat.catalog`)

```python
from datetime import date

from flexcat.model import Catalog, CatString, Options
from flexcat.catalog import build_catalog, create_catalog

catalog = Catalog(
    cat_version_string="$VER: app.catalog 1.0 ($TODAY)",
    cat_language="deutsch",
    base_name="app",
)
catalog.add_string(CatString(id_str="MSG_HELLO", cd_str="Hello", ct_str="Hallo", id=0))

data = build_catalog(catalog, Options(), today=date(2024, 1, 1))
path = create_catalog(catalog, Options())   # writes app.catalog
```

The FVER chunk comes from `cat_version_string` (with `$TODAY` replaced by
the date and `.ct ` by `.catalog `), or else is built from the `$Date:`,
`$Revision:` and `$Id:` fields of `cat_rcs_id` (`cat_name` overrides the
name); `version_chunk_text` returns that text. A string is written when its
translation differs from the original, always with `no_optim`, and with
`fill` the original stands in for missing or empty translations.
`cat_puts` encodes one length-prefixed, padded string.

## Translation files (`flexcat.ctfile`)

`render_ct(catalog, options, today, environ)` returns the text of a new
translation file: the version, language and codeset header, the extra
chunks, then for each string its identifier, its current translation and
the original as a comment, with the `msg_new` marker after strings not
found in a scanned translation. `create_ct_file` writes it, by default to
`<base_name>_<language>.catalog`. `ct_language` picks the language from the
catalog, then the `language` environment variable, then `nolanguage`.

## Source generation (`flexcat.source`)

`render_source(catalog, template_lines, source_name, cd_name)` expands a
template. Lines starting with `##` may be `## rem`, `## stringtype
C|Assembler|Oberon|E|None` or `## shortstrings`. In other lines `%b` is the
base name, `%n` the number of strings, `%v` the version, `%l` the language
as a string literal, `%fv` the tool version, `%fN`/`%oN` the description and
source file names, and `%i`, `%e`, `%s`, `%d`, `%x`, `%c`, `%a`, `%t`, `%z`
and `%(...)` insert per-string values; a line using them is repeated for
each string. `StringWriter` produces the literals on its own.

`create_source_file` finds the template with `find_template` (as given,
then in `$FLEXCAT_SDDIR`, then in `/usr/lib/flexcat`) and writes the result.

## Arguments (`flexcat.cli`)

`parse_args(argv)` reads keyword-style arguments (`catalog=`, `newctfile=`,
`pofile=`, `codeset=`, `version=`, `revision=`, the flags `fill`, `nooptim`,
`quiet` and so on, `SFILE=SDFILE` source requests, the description and
translation file names) into an `Arguments` record. `is_param` tells a
keyword from a value and `base_name_from` derives the base name from a
description file name.

## Errors

Failures raise `flexcat.messages.CatalogError`, whose `message` is a
`Message` member; `format_message` fills a message template.

## What this package does not do

It does not read catalog description, translation or PO files: the
`Catalog` must be filled in by the caller. There is no installed command;
`parse_args` only interprets arguments and does not run any of the steps.