# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2026 Chukwuemeka Obi

"""Read and write the docxreview config file."""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Any

import platformdirs

if sys.version_info < (3, 11):
    import tomli as tomllib
else:
    import tomllib
import tomlkit

from .common import Default_Timeouts


log = logging.getLogger("config")

cfgdir = platformdirs.user_config_path("docxreview", "Docxreview")
cfgfile = cfgdir / "docxreview.toml"
logdir = platformdirs.user_log_path("docxreview", "Docxreview")

Server_Env_Var = "DOCXREVIEW_SERVER"


def default_config() -> dict[str, Any]:
    return {
        "server": "",
        "verify_ssl": True,
        "role": "admin",
        "log_level": "info",
        "log_to_file": False,
        "timeouts": {k: list(v) for k, v in Default_Timeouts.items()},
    }


def read_config(path: Path | None = None) -> dict[str, Any]:
    """Defaults, updated from the config file if there is one, then the environment.

    Args:
        path: config file to read; defaults to the per-user one.

    Raises:
        ValueError: the file is not valid TOML or has unknown timeouts.
    """
    if path is None:
        path = cfgfile
    cfg = default_config()
    if path.exists():
        with open(path, "rb") as f:
            try:
                loaded = tomllib.load(f)
            except tomllib.TOMLDecodeError as e:
                raise ValueError(f"Cannot parse config file {path}: {e}") from None
        timeouts = loaded.pop("timeouts", {})
        unknown = set(timeouts) - set(Default_Timeouts)
        if unknown:
            raise ValueError(f"Unknown timeouts in {path}: {sorted(unknown)}")
        cfg["timeouts"].update(timeouts)
        cfg.update(loaded)
    server = os.environ.get(Server_Env_Var)
    if server:
        cfg["server"] = server
    return cfg


def timeouts_from_config(cfg: dict[str, Any]) -> dict[str, tuple[float, float]]:
    return {k: (v[0], v[1]) for k, v in cfg["timeouts"].items()}


def write_default_config(path: Path | None = None) -> Path:
    """Write a commented config file with the defaults.

    Raises:
        FileExistsError: never overwrites an existing file.
    """
    if path is None:
        path = cfgfile
    if path.exists():
        raise FileExistsError(f"Config file {path} already exists")
    path.parent.mkdir(parents=True, exist_ok=True)

    doc = tomlkit.document()
    doc.add(tomlkit.comment("docxreview configuration"))
    cfg = default_config()
    doc.add(
        "server",
        tomlkit.item(cfg["server"]).comment("e.g., https://portal.example.edu.ng"),
    )
    doc.add("verify_ssl", cfg["verify_ssl"])
    doc.add(
        "role",
        tomlkit.item(cfg["role"]).comment("super_admin, admin, sub_admin or manager"),
    )
    doc.add("log_level", cfg["log_level"])
    doc.add("log_to_file", cfg["log_to_file"])
    t = tomlkit.table()
    t.add(tomlkit.comment("[connect, read] seconds"))
    for k, v in cfg["timeouts"].items():
        t.add(k, v)
    doc.add("timeouts", t)

    with open(path, "w") as f:
        f.write(tomlkit.dumps(doc))
    log.info("wrote config file %s", path)
    return path
