# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets
import string
from datetime import UTC, datetime

_ALPHABET = string.ascii_lowercase + string.digits


def generate_id(prefix: str, now: float) -> str:
    """Return <prefix>_<epoch-ms>_<9 random base36 chars>."""

    suffix = "".join(secrets.choice(_ALPHABET) for _ in range(9))
    return f"{prefix}_{int(now * 1000)}_{suffix}"


def iso_timestamp(now: float) -> str:
    stamp = datetime.fromtimestamp(now, UTC).isoformat(timespec="milliseconds")
    return stamp.replace("+00:00", "Z")


__all__ = ["generate_id", "iso_timestamp"]
