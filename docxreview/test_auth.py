# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2026 Adaeze Nwankwo

from pytest import raises

from docxreview.auth import (
    ROLE_PERMISSIONS,
    Authorizer,
    EnvToken,
    StaticToken,
    bearer_header,
    has_permission,
)
from docxreview.exceptions import AuthenticationError, NotAuthorized


def test_static_token() -> None:
    assert bearer_header(StaticToken("abc")) == {"Authorization": "Bearer abc"}
    with raises(AuthenticationError):
        bearer_header(StaticToken(""))


def test_env_token(monkeypatch) -> None:
    monkeypatch.setenv("DOCXREVIEW_TOKEN", " tok ")
    assert EnvToken()() == "tok"
    monkeypatch.delenv("DOCXREVIEW_TOKEN")
    with raises(AuthenticationError, match="DOCXREVIEW_TOKEN"):
        EnvToken()()


def test_any_callable_provides_credentials() -> None:
    calls = []

    def provider():
        calls.append(1)
        return f"token{len(calls)}"

    assert bearer_header(provider)["Authorization"] == "Bearer token1"
    assert bearer_header(provider)["Authorization"] == "Bearer token2"


def test_all_roles_have_same_permissions_listed() -> None:
    perms = {frozenset(p) for p in ROLE_PERMISSIONS.values()}
    assert len(perms) == 1


def test_has_permission() -> None:
    assert has_permission("super_admin", "can_assign_roles")
    assert not has_permission("admin", "can_assign_roles")
    assert has_permission("admin", "can_manage_system")
    assert not has_permission("sub_admin", "can_manage_system")
    with raises(ValueError):
        has_permission("janitor", "can_manage_system")
    with raises(ValueError):
        has_permission("admin", "can_fly")


def test_authorizer() -> None:
    Authorizer("admin").check("commit")
    Authorizer("manager").check("export")
    Authorizer("manager").check("stats")
    for op in ("upload", "review", "decide", "commit"):
        with raises(NotAuthorized, match="manager"):
            Authorizer("manager").check(op)
    with raises(ValueError):
        Authorizer("janitor")
