# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2026 Chukwuemeka Obi

"""Backend bits 'n bobs to talk to the import server."""

from .import_messenger import ImportMessenger

# No one should be calling BaseMessenger directly but maybe
# its useful for typing hints.
from .base_messenger import BaseMessenger

__all__ = [
    "ImportMessenger",
]
