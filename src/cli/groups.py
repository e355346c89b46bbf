"""Shared help-panel groups for the comfortable CLI."""

from __future__ import annotations

from cyclopts import Group

session_group = Group(
    "Session",
    help="Configuration file and logging options.",
    sort_key=0,
)

content_group = Group(
    "Content",
    help="Format selection for conversions.",
    sort_key=1,
)

admin_group = Group(
    "Admin",
    help="Administrative commands and help.",
    sort_key=99,
)

__all__ = ["admin_group", "content_group", "session_group"]
