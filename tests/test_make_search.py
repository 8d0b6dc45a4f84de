import pytest

from adapters.make_search import PortSearch

FOO_PARAGRAPHS = (
    "Port:\tfoo-1.2.3\n"
    "Path:\t/usr/ports/lang/foo\n"
    "\n"
    "Port:\tfoo-2.0\n"
    "Path:\t/usr/ports/devel/foo\n"
)


def test_search_by_portname(settings, make_runner):
    runner = make_runner(FOO_PARAGRAPHS)
    search = PortSearch(settings, runner)

    results = list(search.search_ports_by("portname", ["foo"], ["portname", "portversion", "portorigin"]))

    assert runner.argvs == [
        ["make", "-C", "/usr/ports", "search", "name=^foo-[^-]+$", "display=name,path"],
    ]
    assert [name for name, _ in results] == ["foo", "foo"]
    assert [dict(record) for _, record in results] == [
        {"portname": "foo", "portversion": "1.2.3", "portorigin": "lang/foo"},
        {"portname": "foo", "portversion": "2.0", "portorigin": "devel/foo"},
    ]


def test_search_by_portorigin_uses_path_key(settings, make_runner, port_dbdir):
    runner = make_runner("Port:\tfoo-1.2.3\nPath:\t/usr/ports/lang/foo\n")
    search = PortSearch(settings, runner)

    results = list(search.search_ports_by("portorigin", ["lang/foo"]))

    argv = runner.argvs[0]
    assert argv[4] == "path=^/usr/ports/lang/foo$"
    assert argv[5] == "display=path,name"
    name, record = results[0]
    assert name == "lang/foo"
    assert dict(record) == {
        "pkgname": "foo-1.2.3",
        "portname": "foo",
        "portorigin": "lang/foo",
        "path": "/usr/ports/lang/foo",
        "options_file": port_dbdir / "lang_foo" / "options.local",
    }


def test_records_not_matching_requested_names_are_skipped(settings, make_runner):
    runner = make_runner("Port:\tfoobar-1.0\nPath:\t/usr/ports/lang/foobar\n")
    search = PortSearch(settings, runner)

    assert list(search.search_ports_by("portname", ["foo"], ["portname"])) == []


def test_moved_ports_are_skipped_by_default(settings, make_runner):
    output = "Port:\tfoo-1.0\nMoved:\tlang/foo2\n\nPort:\tfoo-2.0\nPath:\t/usr/ports/lang/foo\n"
    search = PortSearch(settings, make_runner(output))

    results = list(search.search_ports_by("portname", ["foo"], ["pkgname"]))

    assert [dict(r) for _, r in results] == [{"pkgname": "foo-2.0"}]


def test_moved_ports_can_be_included(settings, make_runner):
    output = "Port:\tfoo-1.0\nMoved:\tlang/foo2\n"
    search = PortSearch(settings, make_runner(output))

    results = list(search.search_ports_by("portname", ["foo"], ["pkgname"], include_moved=True))

    assert [dict(r) for _, r in results] == [{"pkgname": "foo-1.0"}]


def test_search_ports_groups_names_by_kind(settings, make_runner):
    runner = make_runner(
        "Port:\tfoo-1.0\nPath:\t/usr/ports/lang/foo\n",
        "Port:\tbar-1.0\nPath:\t/usr/ports/www/bar\n",
        "",
    )
    search = PortSearch(settings, runner)

    results = list(search.search_ports(["lang/foo", "bar-1.0", "baz", "baz"], ["pkgname"]))

    patterns = [argv[4] for argv in runner.argvs]
    assert patterns == [
        "path=^/usr/ports/lang/foo$",
        r"name=^bar-1\.0$",
        r"name=^baz-[^-]+$",
    ]
    assert [(name, dict(r)) for name, r in results] == [
        ("lang/foo", {"pkgname": "foo-1.0"}),
        ("bar-1.0", {"pkgname": "bar-1.0"}),
    ]


def test_raw_search_key_passes_patterns_through(settings, make_runner):
    runner = make_runner("Port:\tfoo-1.0\nPath:\t/usr/ports/lang/foo\n")
    search = PortSearch(settings, runner)

    results = list(search.search_ports_by("xname", ["^bar", "^baz"], ["name"]))

    assert runner.argvs[0][4] == "xname=^bar|^baz"
    assert runner.argvs[0][5] == "display=name"
    assert [dict(r) for _, r in results] == [{"name": "foo-1.0"}]


def test_empty_values_do_not_run_make(settings, make_runner):
    runner = make_runner()

    assert list(PortSearch(settings, runner).search_ports_by("portname", [])) == []
    assert runner.calls == []


def test_invalid_key(settings, make_runner):
    search = PortSearch(settings, make_runner())

    with pytest.raises(ValueError):
        list(search.search_ports_by("bogus", ["foo"]))
    with pytest.raises(ValueError):
        list(search.execute_make_search("bogus", "foo", ["name"]))


def test_search_all(settings, make_runner):
    runner = make_runner(FOO_PARAGRAPHS)

    records = list(PortSearch(settings, runner).search_all(["portorigin"]))

    assert runner.argvs[0][4] == "path=."
    assert [r["portorigin"] for r in records] == ["lang/foo", "devel/foo"]


def test_pkgname_is_not_searched_again_as_portname(settings, make_runner):
    runner = make_runner("Port:\ta-1\nPath:\t/usr/ports/misc/a\n", "Port:\ta-1-2\nPath:\t/usr/ports/misc/a-1\n")
    search = PortSearch(settings, runner)

    results = list(search.search_ports(["a-1"], ["pkgname"]))

    assert [argv[4] for argv in runner.argvs] == [r"name=^a-1$"]
    assert [(name, dict(r)) for name, r in results] == [("a-1", {"pkgname": "a-1"})]


def test_fields_from_a_generator(settings, make_runner):
    runner = make_runner("Port:\tfoo-1.2.3\nPath:\t/usr/ports/lang/foo\n")
    search = PortSearch(settings, runner)

    results = list(search.search_ports_by("portname", ["foo"], (f for f in ["portname", "portorigin"])))

    assert runner.argvs[0][5] == "display=name,path"
    assert [dict(r) for _, r in results] == [{"portname": "foo", "portorigin": "lang/foo"}]


def test_search_ports_reuses_generator_fields_for_every_group(settings, make_runner):
    runner = make_runner(
        "Port:\tfoo-1.0\nPath:\t/usr/ports/lang/foo\n",
        "Port:\tbar-2.0\nPath:\t/usr/ports/www/bar\n",
    )
    search = PortSearch(settings, runner)

    results = list(search.search_ports(["lang/foo", "bar"], (f for f in ["portname"])))

    assert [dict(r) for _, r in results] == [{"portname": "foo"}, {"portname": "bar"}]


def test_search_all_can_include_moved_ports(settings, make_runner):
    runner = make_runner("Port:\tfoo-1.0\nMoved:\tlang/foo2\n")

    records = list(PortSearch(settings, runner).search_all(["pkgname"], include_moved=True))

    assert [dict(r) for r in records] == [{"pkgname": "foo-1.0"}]
