"""Shared fixtures: throwaway project roots with a descriptor and a version record."""

from pathlib import Path

import pytest

from verkeep.record import dump_record
from verkeep.semver import SemVer

PROJECT_CLJ = '''(defproject com.example/widget "{version}"
  :description "A widget"
  :url "https://example.com/widget"
  :dependencies [[org.clojure/clojure "1.11.1"]])
'''


def write_project(root: Path, version: str) -> Path:
    path = root / 'project.clj'
    path.write_text(PROJECT_CLJ.format(version=version), encoding='utf-8')
    return path


def write_store(root: Path, version: SemVer) -> Path:
    path = root / 'resources' / 'VERSION'
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dump_record(version), encoding='utf-8')
    return path


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """A project whose descriptor and record both hold 1.3.2-rc.2+build.13."""
    write_project(tmp_path, '1.3.2-rc.2+build.13')
    write_store(tmp_path, SemVer(1, 3, 2, 'rc.2', 'build.13'))
    return tmp_path


@pytest.fixture
def make_project():
    """Returns a helper that writes project.clj declaring the given version."""
    return write_project


@pytest.fixture
def make_store():
    """Returns a helper that writes resources/VERSION holding the given SemVer."""
    return write_store
