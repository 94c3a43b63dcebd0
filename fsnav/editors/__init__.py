"""Metadata editors: permission bits and ownership, with per-target results."""

from __future__ import annotations

from .batch import BatchResult, TargetOutcome, run_batch
from .ownership import (
    Focus,
    GroupInfo,
    OwnershipChange,
    OwnershipSession,
    UserInfo,
    critical_path_warnings,
    load_groups,
    load_users,
)
from .permissions import (
    DEFAULT_DIGITS,
    PERMISSION_TEMPLATES,
    Digit,
    PermissionSession,
    PermissionTemplate,
    initial_digits,
    template_by_label,
)

__all__ = [
    "BatchResult",
    "DEFAULT_DIGITS",
    "Digit",
    "Focus",
    "GroupInfo",
    "OwnershipChange",
    "OwnershipSession",
    "PERMISSION_TEMPLATES",
    "PermissionSession",
    "PermissionTemplate",
    "TargetOutcome",
    "UserInfo",
    "critical_path_warnings",
    "initial_digits",
    "load_groups",
    "load_users",
    "run_batch",
    "template_by_label",
]
