from __future__ import annotations

import os
from pathlib import Path

import pytest
from conftest import make_artifact

from r2skim.adapters.pdb_locator import candidate_pdb_paths, locate_pdb


def test_candidates_order(tmp_path):
    symbols = tmp_path / "symbols"
    recorded = tmp_path / "build" / "out" / "app_x64.pdb"
    artifact = make_artifact(str(tmp_path / "app.exe"), pdb_path=str(recorded))

    candidates = list(candidate_pdb_paths(artifact, [symbols]))

    assert candidates[0] == recorded
    assert candidates[1:] == [
        tmp_path / "app_x64.pdb",
        tmp_path / "app.pdb",
        symbols / "app_x64.pdb",
        symbols / "app.pdb",
    ]


def test_candidates_without_codeview(tmp_path):
    artifact = make_artifact(str(tmp_path / "app.exe"), pdb_path="app.pdb")
    assert list(candidate_pdb_paths(artifact, use_codeview_path=False)) == [tmp_path / "app.pdb"]


def test_codeview_name_matching_stem_is_not_repeated(tmp_path):
    artifact = make_artifact(str(tmp_path / "app.exe"), pdb_path=str(tmp_path / "out" / "app.pdb"))
    candidates = list(candidate_pdb_paths(artifact))
    assert candidates[1:] == [tmp_path / "app.pdb"]


def test_locate_beside_image(tmp_path):
    (tmp_path / "app.pdb").write_bytes(b"")
    artifact = make_artifact(str(tmp_path / "app.exe"))
    assert locate_pdb(artifact) == tmp_path / "app.pdb"


def test_locate_in_search_path(tmp_path):
    symbols = tmp_path / "symbols"
    symbols.mkdir()
    (symbols / "app.pdb").write_bytes(b"")
    artifact = make_artifact(str(tmp_path / "bin" / "app.exe"))
    assert locate_pdb(artifact, search_paths=[str(symbols)]) == symbols / "app.pdb"


def test_locate_recorded_codeview_path(tmp_path):
    recorded = tmp_path / "elsewhere" / "renamed.pdb"
    recorded.parent.mkdir()
    recorded.write_bytes(b"")
    artifact = make_artifact(str(tmp_path / "app.exe"), pdb_path=str(recorded))
    assert locate_pdb(artifact) == recorded
    assert locate_pdb(artifact, use_codeview_path=False) is None


def test_explicit_pdb_skips_search(tmp_path):
    (tmp_path / "app.pdb").write_bytes(b"")
    explicit = tmp_path / "other.pdb"
    explicit.write_bytes(b"")
    artifact = make_artifact(str(tmp_path / "app.exe"))

    assert locate_pdb(artifact, explicit=explicit) == explicit
    assert locate_pdb(artifact, explicit=tmp_path / "missing.pdb") is None


def test_nothing_found(tmp_path):
    assert locate_pdb(make_artifact(str(tmp_path / "app.exe")), search_paths=[tmp_path]) is None


def test_relative_codeview_path_is_resolved_beside_image(tmp_path, monkeypatch):
    workdir = tmp_path / "cwd"
    workdir.mkdir()
    (workdir / "app.pdb").write_bytes(b"wrong")
    bindir = tmp_path / "bin"
    bindir.mkdir()
    (bindir / "app.pdb").write_bytes(b"right")
    monkeypatch.chdir(workdir)

    artifact = make_artifact(str(bindir / "app.exe"), pdb_path="app.pdb")

    found = locate_pdb(artifact)
    assert found == bindir / "app.pdb"
    assert found.read_bytes() == b"right"
    assert Path("app.pdb") not in list(candidate_pdb_paths(artifact))


@pytest.mark.skipif(os.name == "nt", reason="drive-letter paths are absolute on Windows")
def test_foreign_windows_path_only_contributes_its_name(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    recorded = "D:\\build\\out\\app_x64.pdb"
    (tmp_path / recorded).write_bytes(b"wrong")
    artifact = make_artifact(str(tmp_path / "bin" / "app.exe"), pdb_path=recorded)

    assert list(candidate_pdb_paths(artifact)) == [
        tmp_path / "bin" / "app_x64.pdb",
        tmp_path / "bin" / "app.pdb",
    ]
    assert locate_pdb(artifact) is None
