import codecs

import pytest

from flexcat.messages import CatalogError, Message
from flexcat.model import Catalog, CatString
from flexcat.source import (
    StringType,
    StringWriter,
    create_source_file,
    find_template,
    real_length,
    render_source,
)


def _c_decode(literal: str) -> str:
    assert literal[0] == '"' and literal[-1] == '"'
    return codecs.decode(literal[1:-1].encode("latin-1"), "unicode_escape")


def _write(data, string_type=StringType.C, **kwargs):
    writer = StringWriter(string_type, **kwargs.pop("ctor", {}))
    writer.write_string(data, **kwargs)
    return writer.getvalue()


@pytest.fixture
def catalog():
    cat = Catalog(base_name="demo", cat_version=3)
    cat.add_string(CatString(id_str="MSG_ONE", cd_str="abc", id=0x01020304, nr=0))
    cat.add_string(CatString(id_str="MSG_TWO", cd_str="abcd", id=255, nr=1))
    return cat


def test_real_length_counts_bytes():
    assert real_length(b"hello") == len(b"hello")
    assert real_length("xyz") == 3
    assert real_length(b"") == 0


def test_c_literal_round_trips_all_bytes():
    data = bytes(b for b in range(256) if b != 0x5C)
    literal = _write(data)
    assert _c_decode(literal) == data.decode("latin-1")


def test_c_literal_escapes_quote():
    literal = _write('say "hi"')
    assert '\\"' in literal
    assert _c_decode(literal) == 'say "hi"'


def test_length_prefix_is_written_big_endian():
    literal = _write("abc", length=3, lenbytes=2)
    assert _c_decode(literal) == "\x00\x03abc"


def test_negative_length_writes_no_prefix():
    assert _write("abc", length=-1, lenbytes=2) == _write("abc")


def test_e_literal_doubles_quotes():
    assert _write("it's", StringType.E) == "'it''s'"


def test_e_literal_escape_character():
    assert "\\e" in _write(b"\x1b", StringType.E)
    assert "\\e" not in _write(b"\x1b", StringType.C)


def test_assembler_mixes_ascii_and_binary():
    assert _write(b"A\n", StringType.ASSEMBLER) == "\tdc.b\t'A',$0a"


def test_assembler_quote_is_binary():
    literal = _write(b"'", StringType.ASSEMBLER)
    assert literal.startswith("\tdc.b\t$")
    assert int(literal.rsplit("$", 1)[1], 16) == ord("'")


def test_none_type_rejects_binary():
    with pytest.raises(CatalogError) as info:
        _write(b"\x01", StringType.NONE)
    assert info.value.message is Message.ERR_NOBINCHARS


def test_none_type_writes_plain_text():
    assert _write("plain", StringType.NONE) == "plain"


def test_short_strings_separate_parts():
    literal = _write(["ab", "cd"], ctor={"long_strings": False})
    assert literal.count('"\\\n\t"') == 1
    assert literal.replace('"\\\n\t"', "") == _write("abcd")


def test_long_strings_do_not_separate():
    assert _write(["ab", "cd"]) == _write("abcd")


def test_oberon_uses_double_quotes():
    literal = _write("x", StringType.OBERON)
    assert literal[0] == '"' and literal[-1] == '"'


def test_render_repeats_line_per_string(catalog):
    out = render_source(catalog, ["%i = %d;"], "out.h")
    expected = [f"{cs.id_str} = {cs.id};" for cs in catalog.strings]
    assert out.splitlines() == expected


def test_render_plain_line_once(catalog):
    assert render_source(catalog, ["/* header */"], "out.h") == "/* header */\n"


def test_render_globals(catalog):
    out = render_source(catalog, ["%b %n %v"], "out.h")
    assert out == f"demo {catalog.num_strings()} {catalog.cat_version}\n"


def test_render_bracket_between_entries(catalog):
    lines = render_source(catalog, ["%i%(,)"], "out.h").splitlines()
    assert all(line.endswith(",") for line in lines[:-1])
    assert not lines[-1].endswith(",")


def test_render_missing_bracket_raises(catalog):
    with pytest.raises(CatalogError) as info:
        render_source(catalog, ["%(,"], "out.h")
    assert info.value.message is Message.ERR_NOTERMINATEBRACKET


def test_render_hex_bytes_of_id(catalog):
    lines = render_source(catalog, ["%a", "%2a"], "out.h").splitlines()
    assert lines[0] == "\\x01\\x02\\x03\\x04"
    assert lines[2] == "\\x03\\x04"


def test_render_padding_to_even_length(catalog):
    lines = render_source(catalog, ["%s%z"], "out.h").splitlines()
    for line, cs in zip(lines, catalog.strings):
        pads = line.count("\\x00")
        assert (len(cs.cd_str) + pads) % 2 == 0
        assert pads <= 1


def test_render_string_literal(catalog):
    lines = render_source(catalog, ["%s"], "out.h").splitlines()
    assert [_c_decode(line) for line in lines] == [cs.cd_str for cs in catalog.strings]


def test_render_string_with_length_bytes():
    cat = Catalog()
    cat.add_string(CatString(id_str="A", cd_str="hey", len_bytes=1))
    line = render_source(cat, ["%s"], "out.h").rstrip("\n")
    assert _c_decode(line) == "\x03hey"


def test_render_rem_skipped(catalog):
    assert render_source(catalog, ["## rem nothing", "x"], "out.h") == "x\n"


def test_render_stringtype_switch(catalog):
    out = render_source(catalog, ["##stringtype E", "%s"], "out.h").splitlines()
    assert out[0] == "'abc'"


def test_render_stringtype_extra_characters(catalog):
    with pytest.raises(CatalogError) as info:
        render_source(catalog, ["## stringtype none junk"], "out.h")
    assert info.value.message is Message.ERR_EXTRA_CHARACTERS


def test_render_unknown_stringtype_warns(catalog):
    with pytest.warns(UserWarning, match="unknown string type"):
        out = render_source(catalog, ["## stringtype pascal", "x"], "out.h")
    assert out == "x\n"


def test_render_shortstrings(catalog):
    out = render_source(catalog, ["## shortstrings", "ok"], "out.h")
    assert out == "ok\n"


def test_render_file_names(catalog):
    out = render_source(catalog, ["%f0|%o0|%fv"], "out.h", "demo.cd")
    assert out.startswith("demo.cd|out.h|FlexCat")


def test_render_without_strings():
    out = render_source(Catalog(), ["id:%i"], "out.h")
    assert out == "id:\n"


def test_find_template_prefers_given_path(tmp_path):
    tpl = tmp_path / "C_h.sd"
    tpl.write_text("x\n")
    assert find_template(tpl, environ={}, default_dir=tmp_path / "none") == tpl


def test_find_template_uses_environment(tmp_path):
    (tmp_path / "Env.sd").write_text("x\n")
    found = find_template("Env.sd", environ={"FLEXCAT_SDDIR": str(tmp_path)},
                          default_dir=tmp_path / "none")
    assert found == tmp_path / "Env.sd"


def test_find_template_uses_default_dir(tmp_path):
    (tmp_path / "Def.sd").write_text("x\n")
    assert find_template("Def.sd", environ={}, default_dir=tmp_path) == tmp_path / "Def.sd"


def test_find_template_missing(tmp_path):
    with pytest.raises(CatalogError) as info:
        find_template("missing.sd", environ={}, default_dir=tmp_path)
    assert info.value.message is Message.ERR_NOSOURCEDESCRIPTION


def test_create_source_file(tmp_path, catalog):
    tpl = tmp_path / "T.sd"
    tpl.write_text("## rem generated\n#define %i %d\n", encoding="latin-1")
    target = tmp_path / "out.h"
    result = create_source_file(catalog, target, tpl, "demo.cd", environ={})
    assert result == target
    lines = target.read_text(encoding="latin-1").splitlines()
    assert lines == [f"#define {cs.id_str} {cs.id}" for cs in catalog.strings]


def test_create_source_file_bad_output(tmp_path, catalog):
    tpl = tmp_path / "T.sd"
    tpl.write_text("x\n")
    with pytest.raises(CatalogError) as info:
        create_source_file(catalog, tmp_path / "nodir" / "out.h", tpl, environ={})
    assert info.value.message is Message.ERR_NOSOURCE