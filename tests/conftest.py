"""Pytest configuration for commonjs_require tests."""

from __future__ import annotations

import pytest

from commonjs_require import install
from commonjs_require.folders import Folder


class MemoryFolder(Folder):
    """Folder over a nested dict; str values are files, dict values folders.

    Every successful file read is recorded in ``reads`` (shared by the whole tree).
    """

    def __init__(self, tree: dict, path: str = "/", parent: Folder | None = None, reads: list | None = None):
        super().__init__(path, parent)
        self.tree = tree
        self.reads = reads if reads is not None else []

    def get_file(self, name: str) -> str | None:
        value = self.tree.get(name)
        if not isinstance(value, str):
            return None
        self.reads.append(self.path + name)
        return value

    def get_folder(self, name: str) -> MemoryFolder | None:
        value = self.tree.get(name)
        if not isinstance(value, dict):
            return None
        return MemoryFolder(value, self.path + name + "/", self, self.reads)


@pytest.fixture
def storage() -> dict:
    """Module tree shared by most tests; tests may edit it before requiring."""
    return {
        "file1.js": "exports.file1 = 'file1'",
        "file2.json": '{ "file2": "file2" }',
        "node_modules": {
            "nmfile1.js": "exports.nmfile1 = 'nmfile1'",
            "nmsub1": {
                "nmsub1file1.js": "exports.nmsub1file1 = 'nmsub1file1'",
            },
        },
        "sub1": {
            "sub1file1.js": "exports.sub1file1 = 'sub1file1'",
            "node_modules": {
                "sub1nmfile1.js": "exports.sub1nmfile1 = 'sub1nmfile1'",
            },
            "sub1": {
                "sub1sub1file1.js": "exports.sub1sub1file1 = 'sub1sub1file1'",
            },
        },
    }


@pytest.fixture
def root(storage) -> MemoryFolder:
    return MemoryFolder(storage)


@pytest.fixture
def installation(root):
    return install(root)


@pytest.fixture
def require(installation):
    return installation.require


@pytest.fixture
def make_folder():
    """Factory building a MemoryFolder tree from a nested dict."""
    return MemoryFolder
