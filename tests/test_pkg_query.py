from adapters.pkg_query import PkgSearch


def test_query_all_installed_packages(settings, make_runner):
    runner = make_runner("foo-1.2.3\tlang/foo\nbar-0.1_1\twww/bar\n")

    records = list(PkgSearch(settings, runner).search_packages())

    assert runner.calls == [(["pkg", "query", "-a", "%n-%v\t%o"], (0, 1))]
    assert [(r["portname"], r["portversion"], r["portorigin"]) for r in records] == [
        ("foo", "1.2.3", "lang/foo"),
        ("bar", "0.1_1", "www/bar"),
    ]
    assert set(records[0]) == {"pkgname", "portname", "portorigin", "portversion", "options_file"}


def test_query_by_names(settings, make_runner):
    runner = make_runner("foo-1.2.3\n")

    records = list(PkgSearch(settings, runner).search_packages(["foo", "lang/foo"], ["pkgname"]))

    assert runner.argvs == [["pkg", "query", "%n-%v", "foo", "lang/foo"]]
    assert [dict(r) for r in records] == [{"pkgname": "foo-1.2.3"}]


def test_nothing_installed(settings, make_runner):
    runner = make_runner("")

    assert list(PkgSearch(settings, runner).search_packages(["missing"])) == []


def test_empty_name_list_runs_nothing(settings, make_runner):
    runner = make_runner()

    assert list(PkgSearch(settings, runner).search_packages([])) == []
    assert runner.calls == []


def test_fields_without_backend_source_run_nothing(settings, make_runner):
    runner = make_runner()

    assert list(PkgSearch(settings, runner).search_packages(None, ["bogus"])) == []
    assert runner.calls == []


def test_malformed_lines_are_dropped(settings, make_runner):
    runner = make_runner("foo-1.0\tlang/foo\ngarbage\n")

    records = list(PkgSearch(settings, runner).search_packages(None, ["pkgname", "portorigin"]))

    assert [dict(r) for r in records] == [{"pkgname": "foo-1.0", "portorigin": "lang/foo"}]


def test_fields_from_a_generator(settings, make_runner):
    runner = make_runner("lang/foo\tfoo-1.2.3\n")

    records = list(PkgSearch(settings, runner).search_packages(None, (f for f in ["portname", "portorigin"])))

    assert runner.argvs == [["pkg", "query", "-a", "%o\t%n-%v"]]
    assert [dict(r) for r in records] == [{"portname": "foo", "portorigin": "lang/foo"}]
