"""Permission edit session: an octal-triple editor with a template catalog.

The session starts from the targets' current bits, lets the operator move a
digit cursor across owner/group/other and adjust values (clamped to 0..7), or
replace all three digits from a template. Nothing touches the filesystem until
``apply`` runs, which records one outcome per target.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import IntEnum

from ..entry_model import Entry, FilesystemOps, format_permissions
from ..errors import InvalidInputError
from .batch import BatchResult, run_batch

DEFAULT_DIGITS = (6, 4, 4)
RISKY_MODES = {"777": "VERY INSECURE - anyone can do anything", "666": "Risky - anyone can modify these files"}


class Digit(IntEnum):
    OWNER = 0
    GROUP = 1
    OTHER = 2


Triple = tuple[int, int, int]


def _make_executable(digits: Triple) -> Triple:
    owner, group, other = digits
    return (
        owner | 1 if owner & 4 else owner,
        group | 1 if group & 4 else group,
        other | 1 if other & 4 else other,
    )


@dataclass(frozen=True)
class PermissionTemplate:
    """Named preset; ``transform`` maps the current digits to new digits."""

    label: str
    name: str
    description: str
    transform: Callable[[Triple], Triple]

    def apply(self, digits: Triple) -> Triple:
        return self.transform(digits)


def _fixed(value: Triple) -> Callable[[Triple], Triple]:
    return lambda _current: value


PERMISSION_TEMPLATES: tuple[PermissionTemplate, ...] = (
    PermissionTemplate("755", "Standard (rwxr-xr-x)", "Executables and directories", _fixed((7, 5, 5))),
    PermissionTemplate("644", "Read Only (rw-r--r--)", "Regular files", _fixed((6, 4, 4))),
    PermissionTemplate("600", "Private (rw-------)", "Sensitive files, owner only", _fixed((6, 0, 0))),
    PermissionTemplate("700", "Private Exec (rwx------)", "Private scripts/directories", _fixed((7, 0, 0))),
    PermissionTemplate("775", "Group Share (rwxrwxr-x)", "Shared directories", _fixed((7, 7, 5))),
    PermissionTemplate("664", "Group Write (rw-rw-r--)", "Collaborative files", _fixed((6, 6, 4))),
    PermissionTemplate("666", "All Write (rw-rw-rw-)", "Temporary/log files", _fixed((6, 6, 6))),
    PermissionTemplate("777", "Full Access (rwxrwxrwx)", "DANGEROUS - everyone has full access", _fixed((7, 7, 7))),
    PermissionTemplate("400", "Read Only Owner (r--------)", "Protected configs", _fixed((4, 0, 0))),
    PermissionTemplate("500", "Exec Only Owner (r-x------)", "Protected scripts", _fixed((5, 0, 0))),
    PermissionTemplate("+x", "Make executable", "Add execute wherever read is granted", _make_executable),
)


def template_by_label(label: str) -> PermissionTemplate:
    for template in PERMISSION_TEMPLATES:
        if template.label == label:
            return template
    raise InvalidInputError(f"Unknown permission template: {label}")


def initial_digits(targets: Sequence[Entry]) -> Triple:
    """Current bits of a single target, the shared bits of several, else 644."""
    if not targets:
        return DEFAULT_DIGITS
    triples = {entry.octal_triple for entry in targets}
    if len(triples) == 1:
        return triples.pop()
    return DEFAULT_DIGITS


def describe_digit(digit: int) -> str:
    parts: list[str] = []
    if digit & 4:
        parts.append("read")
    if digit & 2:
        parts.append("write")
    if digit & 1:
        parts.append("execute/enter")
    return ", ".join(parts) if parts else "nothing (no access)"


def security_assessment(digits: Triple) -> str:
    octal = "".join(str(value) for value in digits)
    if octal in RISKY_MODES:
        return RISKY_MODES[octal]
    known = {
        "755": "Standard - safe for programs and directories",
        "644": "Standard - safe for regular files",
        "600": "Secure - only the owner has access",
        "700": "Secure - private directory/executable",
        "000": "Locked - nobody can access (unusual)",
    }
    if octal in known:
        return known[octal]
    if digits[Digit.OTHER] & 2:
        return "World-writable - consider restricting"
    return "Custom permissions"


class PermissionSession:
    def __init__(self, targets: Sequence[Entry], fs: FilesystemOps | None = None) -> None:
        self.targets: tuple[Entry, ...] = tuple(targets)
        self.fs = fs if fs is not None else FilesystemOps()
        self.digits: list[int] = list(initial_digits(self.targets))
        self.cursor = Digit.OWNER
        self.templates_visible = False
        self.template_index = 0

    @property
    def triple(self) -> Triple:
        return self.digits[0], self.digits[1], self.digits[2]

    @property
    def mode_value(self) -> int:
        owner, group, other = self.triple
        return owner * 64 + group * 8 + other

    @property
    def octal(self) -> str:
        return "".join(str(value) for value in self.digits)

    @property
    def symbolic(self) -> str:
        return format_permissions(self.mode_value)

    @property
    def warning(self) -> str | None:
        """Annotation for risky values; these are flagged, never blocked."""
        return RISKY_MODES.get(self.octal)

    def explanations(self) -> list[str]:
        owner, group, other = self.triple
        return [
            f"Owner can: {describe_digit(owner)}",
            f"Group members can: {describe_digit(group)}",
            f"Everyone else can: {describe_digit(other)}",
            security_assessment(self.triple),
        ]

    def move_cursor(self, delta: int) -> None:
        self.cursor = Digit(max(Digit.OWNER, min(Digit.OTHER, self.cursor + delta)))

    def adjust(self, delta: int) -> None:
        """Change the digit under the cursor, clamping at 0 and 7."""
        current = self.digits[self.cursor]
        self.digits[self.cursor] = max(0, min(7, current + delta))

    def set_digit(self, value: int) -> None:
        """Set the digit under the cursor and advance; out-of-range is rejected."""
        if not 0 <= value <= 7:
            raise InvalidInputError(f"Permission digit must be 0-7, got {value}")
        self.digits[self.cursor] = value
        self.move_cursor(1)

    def toggle_templates(self) -> None:
        self.templates_visible = not self.templates_visible

    def move_template(self, delta: int) -> None:
        self.template_index = max(0, min(len(PERMISSION_TEMPLATES) - 1, self.template_index + delta))

    def apply_template(self, template: PermissionTemplate | None = None) -> None:
        """Replace all three digits at once and return to the digit view."""
        if template is None:
            template = PERMISSION_TEMPLATES[self.template_index]
        self.digits = list(template.apply(self.triple))
        self.templates_visible = False

    def apply(self) -> BatchResult:
        mode = self.mode_value
        return run_batch(
            f"chmod {self.octal}",
            (entry.path for entry in self.targets),
            lambda path: self.fs.chmod(path, mode),
        )


__all__ = [
    "DEFAULT_DIGITS",
    "Digit",
    "PERMISSION_TEMPLATES",
    "PermissionSession",
    "PermissionTemplate",
    "describe_digit",
    "initial_digits",
    "security_assessment",
    "template_by_label",
]
