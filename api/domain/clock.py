# SPDX-License-Identifier: Apache-2.0

"""Wall clock shared by the services; tests inject their own."""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)
