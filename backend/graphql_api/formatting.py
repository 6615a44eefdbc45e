"""Display values computed at the GraphQL boundary."""

from __future__ import annotations

from typing import Optional


def format_member_count(member_count: Optional[int], short: bool = True) -> Optional[str]:
    """Human-readable member count.

    short: ``295k``, ``1.2M``, ``850``; long: ``295,000 members``.
    """
    if member_count is None:
        return None
    if not short:
        unit = "member" if member_count == 1 else "members"
        return f"{member_count:,} {unit}"
    if member_count >= 1_000_000:
        value = f"{member_count / 1_000_000:.1f}".rstrip("0").rstrip(".")
        return f"{value}M"
    if member_count >= 1_000:
        value = f"{member_count / 1_000:.1f}".rstrip("0").rstrip(".")
        return f"{value}k"
    return str(member_count)
