"""Tests for the resolution strategy chain."""

import pytest

from commonjs_require.cache import ModuleCache
from commonjs_require.errors import NavigationError
from commonjs_require.handlers import HandlerRegistry
from commonjs_require.resolvers import DEFAULT_STRATEGIES
from commonjs_require.resolvers import DirectFile
from commonjs_require.resolvers import IndexJs
from commonjs_require.resolvers import IndexJson
from commonjs_require.resolvers import PackageMain
from commonjs_require.resolvers import Resolver


class FakeModule:
    def __init__(self, filename):
        self.filename = filename


@pytest.fixture
def resolver() -> Resolver:
    return Resolver(ModuleCache(), HandlerRegistry())


def test_default_strategy_order():
    assert [type(s) for s in DEFAULT_STRATEGIES] == [DirectFile, PackageMain, IndexJs, IndexJson]


def test_direct_file_reports_strategy(resolver, make_folder):
    root = make_folder({"x.js": "exports.x = 1"})
    unit = resolver.resolve_segments(root, [".", "x"])

    assert unit.path == "/x.js"
    assert unit.source == "exports.x = 1"
    assert unit.requested == "/x"
    assert unit.strategy == "file"


def test_package_main_reports_outer_strategy(resolver, make_folder):
    root = make_folder({"dir": {"package.json": '{"main": "lib/a.js"}', "lib": {"a.js": ""}}})
    unit = resolver.resolve_segments(root, ["dir"])

    assert unit.path == "/dir/lib/a.js"
    assert unit.folder.path == "/dir/lib/"
    assert unit.requested == "/dir"
    assert unit.strategy == "package-main"


def test_index_json(resolver, make_folder):
    root = make_folder({"dir": {"index.json": "{}"}})
    unit = resolver.resolve_segments(root, ["dir"])
    assert unit.path == "/dir/index.json"
    assert unit.strategy == "index-json"


def test_files_win_over_directories(resolver, make_folder):
    root = make_folder({"dir.js": "", "dir": {"index.js": ""}})
    assert resolver.resolve_segments(root, ["dir"]).path == "/dir.js"


def test_probe_uses_cache_before_storage(resolver, make_folder):
    root = make_folder({"x.js": "exports.x = 1"})
    cached = FakeModule("/x.js")
    resolver.cache.add("/x.js", cached)

    unit = resolver.probe(root, "x.js")

    assert unit.module is cached
    assert root.reads == []


def test_probe_skips_unsupported_suffix_without_reading(resolver, make_folder):
    root = make_folder({"x.txt": "text"})
    assert resolver.probe(root, "x.txt") is None
    assert root.reads == []


def test_probe_accepts_registered_suffix(resolver, make_folder):
    root = make_folder({"x.txt": "text"})
    resolver.handlers.register(".txt", lambda *args: None)
    assert resolver.probe(root, "x.txt").source == "text"


def test_missing_folder_is_no_candidate(resolver, make_folder):
    root = make_folder({})
    assert resolver.resolve_segments(root, ["missing", "x.js"]) is None


def test_empty_segment_is_a_navigation_fault(resolver, make_folder):
    root = make_folder({})
    with pytest.raises(NavigationError):
        resolver.resolve_segments(root, ["", "x.js"])
