import pytest

from flexcat.cli import Arguments, base_name_from, is_param, parse_args
from flexcat.messages import CatalogError, Message


@pytest.mark.parametrize(
    "arg",
    ["catalog", "CATALOG=x", "pofile", "pofile=a.po", "codeset=UTF-8", "version",
     "revision=3", "nooptim", "Fill", "newctfile", "newctfile=x.ct", "oldmsgnew",
     "?", "-h", "--help", "help"],
)
def test_is_param_true(arg):
    assert is_param(arg) is True


@pytest.mark.parametrize("arg", ["app.cd", "app_de.ct", "out.c=C_c.sd", "noautodate"])
def test_is_param_false(arg):
    assert is_param(arg) is False


def test_base_name_from():
    assert base_name_from("dir/sub/app.cd") == "app"
    assert base_name_from("app") == "app"
    assert base_name_from(".cd") is None
    assert base_name_from("./dir/app") is None


def test_empty_shows_usage():
    assert parse_args([]).show_usage is True


def test_help_shows_usage():
    assert parse_args(["help"]).show_usage is True


def test_files_and_catalog():
    args = parse_args(["app.cd", "app_de.ct", "catalog", "out.catalog"])
    assert args.cd_file == "app.cd"
    assert args.ct_file == "app_de.ct"
    assert args.catalog == "out.catalog"
    assert args.make_catalog is True


def test_catalog_without_value_before_keyword():
    args = parse_args(["app.cd", "app_de.ct", "catalog", "fill"])
    assert args.make_catalog is True
    assert args.catalog is None
    assert args.options.fill is True


def test_catalog_needs_translation():
    with pytest.raises(CatalogError) as info:
        parse_args(["app.cd", "catalog=x.catalog"])
    assert info.value.message is Message.ERR_NOCTARGUMENT


def test_catalog_with_pofile():
    args = parse_args(["app.cd", "pofile=app.po", "catalog"])
    assert args.po_file == "app.po"
    assert args.make_catalog is True


def test_version_and_revision():
    args = parse_args(["app.cd", "version=12", "revision", "7"])
    assert (args.cat_version, args.cat_revision) == (12, 7)


def test_version_keyword_alone_resets():
    args = parse_args(["app.cd", "version=4", "version"])
    assert args.cat_version == -1


def test_codeset_and_flags():
    args = parse_args(
        ["app.cd", "codeset", "UTF-8", "quiet", "nolangtolower", "flush", "nospaces"]
    )
    assert args.options.dest_codeset == "UTF-8"
    assert args.options.quiet is True
    assert args.options.lang_to_lower is False
    assert args.options.do_expunge is True


def test_oldmsgnew_takes_next():
    args = parse_args(["app.cd", "oldmsgnew", "*NEU*"])
    assert args.options.old_msg_new == "; *NEU*"


def test_newctfile():
    args = parse_args(["app.cd", "newctfile=app_de.ct"])
    assert args.make_new_ct is True
    assert args.new_ct_file == "app_de.ct"


def test_sources_set_base_name():
    args = parse_args(["dir/app.cd", "app_cat.c=C_c.sd", "app_cat.h=C_h.sd"])
    assert args.base_name == "app"
    assert args.sources == [("app_cat.c", "C_c.sd"), ("app_cat.h", "C_h.sd")]


def test_second_ct_file_shows_usage():
    args = parse_args(["app.cd", "a.ct", "b.ct"])
    assert args.show_usage is True
    assert args.ct_file == "a.ct"


def test_defaults():
    args = Arguments()
    assert (args.cat_version, args.cat_revision, args.make_catalog) == (-1, -1, False)