# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2025-2026 Adaeze Nwankwo

"""Credentials for talking to the server, and who may do what."""

from __future__ import annotations

import logging
import os
from typing import Callable, Union

from .exceptions import AuthenticationError, NotAuthorized


log = logging.getLogger("auth")

Token_Env_Var = "DOCXREVIEW_TOKEN"


class StaticToken:
    """A bearer token known up front, e.g., pasted by the user."""

    def __init__(self, token: str) -> None:
        self._token = token

    def __call__(self) -> str:
        if not self._token:
            raise AuthenticationError()
        return self._token


class EnvToken:
    """Read the bearer token from an environment variable on each request."""

    def __init__(self, var: str = Token_Env_Var) -> None:
        self.var = var

    def __call__(self) -> str:
        token = os.environ.get(self.var, "").strip()
        if not token:
            raise AuthenticationError(
                f"You are not authenticated: set {self.var} to your access token."
            )
        return token


CredentialProvider = Union[StaticToken, EnvToken, Callable[[], str]]


def bearer_header(credentials: CredentialProvider) -> dict[str, str]:
    """Build the Authorization header, asking the provider for a fresh token."""
    token = credentials()
    if not token:
        raise AuthenticationError()
    return {"Authorization": f"Bearer {token}"}


# Permissions held by each admin role
ROLE_PERMISSIONS: dict[str, dict[str, bool]] = {
    "super_admin": {
        "can_view_student_nysc": True,
        "can_edit_student_nysc": True,
        "can_add_student_nysc": True,
        "can_delete_student_nysc": True,
        "can_view_payments": True,
        "can_edit_payments": True,
        "can_view_temp_submissions": True,
        "can_edit_temp_submissions": True,
        "can_download_data": True,
        "can_assign_roles": True,
        "can_view_analytics": True,
        "can_manage_system": True,
    },
    "admin": {
        "can_view_student_nysc": True,
        "can_edit_student_nysc": True,
        "can_add_student_nysc": True,
        "can_delete_student_nysc": True,
        "can_view_payments": True,
        "can_edit_payments": True,
        "can_view_temp_submissions": True,
        "can_edit_temp_submissions": True,
        "can_download_data": True,
        "can_assign_roles": False,
        "can_view_analytics": True,
        "can_manage_system": True,
    },
    "sub_admin": {
        "can_view_student_nysc": True,
        "can_edit_student_nysc": True,
        "can_add_student_nysc": True,
        "can_delete_student_nysc": False,
        "can_view_payments": True,
        "can_edit_payments": False,
        "can_view_temp_submissions": True,
        "can_edit_temp_submissions": True,
        "can_download_data": True,
        "can_assign_roles": False,
        "can_view_analytics": True,
        "can_manage_system": False,
    },
    "manager": {
        "can_view_student_nysc": True,
        "can_edit_student_nysc": False,
        "can_add_student_nysc": False,
        "can_delete_student_nysc": False,
        "can_view_payments": True,
        "can_edit_payments": False,
        "can_view_temp_submissions": True,
        "can_edit_temp_submissions": False,
        "can_download_data": True,
        "can_assign_roles": False,
        "can_view_analytics": True,
        "can_manage_system": False,
    },
}

# What each operation of the import workflow needs
OPERATION_PERMISSIONS = {
    "upload": "can_manage_system",
    "review": "can_manage_system",
    "decide": "can_manage_system",
    "commit": "can_manage_system",
    "stats": "can_view_analytics",
    "export": "can_download_data",
}


def has_permission(role: str, permission: str) -> bool:
    """Does this role hold the permission.

    Raises:
        ValueError: unknown role or permission.
    """
    try:
        perms = ROLE_PERMISSIONS[role]
    except KeyError:
        raise ValueError(f'Unknown role "{role}"') from None
    try:
        return perms[permission]
    except KeyError:
        raise ValueError(f'Unknown permission "{permission}"') from None


class Authorizer:
    """The single place where the workflow asks whether an operation is allowed."""

    def __init__(self, role: str) -> None:
        if role not in ROLE_PERMISSIONS:
            raise ValueError(
                f'Unknown role "{role}": expected one of {sorted(ROLE_PERMISSIONS)}'
            )
        self.role = role

    def allows(self, operation: str) -> bool:
        return has_permission(self.role, OPERATION_PERMISSIONS[operation])

    def check(self, operation: str) -> None:
        """Raise NotAuthorized unless the role may perform the operation."""
        if not self.allows(operation):
            log.info("role %s refused operation %s", self.role, operation)
            raise NotAuthorized(
                f'Your role "{self.role}" does not have permission to {operation}'
            )
