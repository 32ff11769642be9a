# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2026 Chukwuemeka Obi

import sys

from pytest import raises

if sys.version_info < (3, 11):
    import tomli as tomllib
else:
    import tomllib

from docxreview.common import Default_Timeouts
from docxreview.config import (
    read_config,
    timeouts_from_config,
    write_default_config,
)


def test_defaults_without_file(tmp_path, monkeypatch) -> None:
    monkeypatch.delenv("DOCXREVIEW_SERVER", raising=False)
    cfg = read_config(tmp_path / "none.toml")
    assert cfg["server"] == ""
    assert cfg["role"] == "admin"
    assert timeouts_from_config(cfg) == Default_Timeouts


def test_write_then_read(tmp_path, monkeypatch) -> None:
    monkeypatch.delenv("DOCXREVIEW_SERVER", raising=False)
    p = write_default_config(tmp_path / "sub" / "docxreview.toml")
    assert p.exists()
    with open(p, "rb") as f:
        raw = tomllib.load(f)
    assert raw["timeouts"]["upload"] == [15, 60]
    cfg = read_config(p)
    assert cfg["verify_ssl"] is True
    assert timeouts_from_config(cfg)["fetch"] == (5, 15)


def test_no_overwrite(tmp_path) -> None:
    p = write_default_config(tmp_path / "c.toml")
    with raises(FileExistsError):
        write_default_config(p)


def test_file_overrides_and_env(tmp_path, monkeypatch) -> None:
    p = tmp_path / "c.toml"
    p.write_text(
        'server = "https://portal.example.edu.ng"\n'
        'role = "super_admin"\n'
        "[timeouts]\n"
        "submit = [10, 120]\n"
    )
    monkeypatch.delenv("DOCXREVIEW_SERVER", raising=False)
    cfg = read_config(p)
    assert cfg["server"] == "https://portal.example.edu.ng"
    assert cfg["role"] == "super_admin"
    t = timeouts_from_config(cfg)
    assert t["submit"] == (10, 120)
    assert t["fetch"] == Default_Timeouts["fetch"]
    monkeypatch.setenv("DOCXREVIEW_SERVER", "http://localhost:8000")
    assert read_config(p)["server"] == "http://localhost:8000"


def test_bad_config(tmp_path) -> None:
    p = tmp_path / "c.toml"
    p.write_text("server = \n")
    with raises(ValueError):
        read_config(p)
    p.write_text("[timeouts]\nforever = [1, 2]\n")
    with raises(ValueError, match="forever"):
        read_config(p)
