import pytest

from flexcat.model import (
    MAX_NEW_STR_LEN,
    Catalog,
    CatalogChunk,
    CatString,
    Options,
    make_id,
)


@pytest.mark.parametrize("tag", ["FVER", "CTLG", "CSET", "STRS"])
def test_make_id_round_trips_to_tag_bytes(tag):
    assert make_id(tag).to_bytes(4, "big") == tag.encode("ascii")


def test_make_id_accepts_bytes_like_str():
    assert make_id(b"FORM") == make_id("FORM")


def test_make_id_orders_first_character_highest():
    assert make_id("B\0\0\0") > make_id("A\xff\xff\xff")


@pytest.mark.parametrize("tag", ["", "ABC", "ABCDE"])
def test_make_id_rejects_wrong_length(tag):
    with pytest.raises(ValueError):
        make_id(tag)


def test_options_defaults_follow_preferences():
    opts = Options()
    assert opts.msg_new == "***NEW***"
    assert opts.old_msg_new == "; ***NEW***"
    assert opts.lang_to_lower is True
    assert opts.fill is False
    assert opts.dest_codeset == ""
    assert opts.buffer_size == 2048


def test_set_old_msg_new_prefixes_marker():
    opts = Options()
    opts.set_old_msg_new("OLD")
    assert opts.old_msg_new == "; OLD"


def test_set_old_msg_new_truncates_to_buffer():
    opts = Options()
    opts.set_old_msg_new("x" * 100)
    assert len(opts.old_msg_new) == MAX_NEW_STR_LEN - 1
    assert opts.old_msg_new.startswith("; x")


def test_catalog_defaults():
    cat = Catalog()
    assert cat.language == "english"
    assert cat.cat_version == -1
    assert cat.cat_revision == -1
    assert cat.base_name is None
    assert cat.num_strings() == 0


def test_add_string_keeps_order_and_counts():
    cat = Catalog()
    first = CatString(id_str="MSG_A", cd_str="alpha", id=0)
    second = CatString(id_str="MSG_B", cd_str="beta", id=1)
    assert cat.add_string(first) is first
    cat.add_string(second)
    assert cat.num_strings() == 2
    assert [s.id_str for s in cat.strings] == ["MSG_A", "MSG_B"]


def test_add_chunk_appends():
    cat = Catalog()
    chunk = CatalogChunk(id=make_id("AUTH"), text="someone")
    assert cat.add_chunk(chunk) is chunk
    assert cat.chunks == [chunk]


def test_catalogs_do_not_share_lists():
    a = Catalog()
    b = Catalog()
    a.add_string(CatString(id_str="X", cd_str="x"))
    assert b.num_strings() == 0


def test_cat_string_defaults():
    s = CatString(id_str="MSG", cd_str="text")
    assert s.ct_str is None
    assert s.not_in_ct is False
    assert s.len_bytes == 0
    assert s.po_format is False