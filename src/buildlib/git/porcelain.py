"""Decoder for ``git status --porcelain=v2 --branch`` output.

The format is line oriented with space separated fields:

    # branch.oid <commit> | (initial)
    # branch.head <branch> | (detached)
    # branch.upstream <upstream_branch>
    # branch.ab +<ahead> -<behind>
    1 <XY> <sub> <mH> <mI> <mW> <hH> <hI> <path>
    2 <XY> <sub> <mH> <mI> <mW> <hH> <hI> <X><score> <path><sep><origPath>
    u <XY> <sub> <m1> <m2> <m3> <mW> <h1> <h2> <h3> <path>
    ? <path>
    ! <path>

Only the fields needed for clean/sync checks are decoded. Unknown record
types and branch headers are skipped so newer git versions keep working.

See https://git-scm.com/docs/git-status#_porcelain_format_version_2
"""

from __future__ import annotations

from pathlib import Path

from buildlib.errors import StatusDecodeError

from .models import ChangeArea, StatusInfo

# XY status letter -> ChangeArea counter
_AREA_COUNTERS = {
    "M": "modified",
    "A": "added",
    "D": "deleted",
    "R": "renamed",
    "C": "copied",
}


def parse_status_output(data: bytes | str, working_dir: str | Path = ".") -> StatusInfo:
    """Parse porcelain v2 status text into a StatusInfo.

    Args:
        data: Raw stdout of ``git status --porcelain=v2 --branch``
        working_dir: Directory the output was produced in

    Returns:
        A freshly populated StatusInfo

    Raises:
        StatusDecodeError: If a ``branch.ab`` counter is not a number
    """
    if isinstance(data, bytes):
        data = data.decode("utf-8", errors="replace")

    info = StatusInfo(working_dir=Path(working_dir))
    for line in data.split("\n"):
        tokens = line.split()
        if not tokens:
            continue
        _parse_line(info, tokens)
    return info


def _parse_line(info: StatusInfo, tokens: list[str]) -> None:
    kind = tokens[0]
    if kind == "#":
        _parse_branch_header(info, tokens[1:])
    elif kind in ("1", "2"):
        # Renamed/copied entries carry the same XY field as ordinary ones.
        _parse_changed_entry(info, tokens[1:])
    elif kind == "u":
        info.unmerged += 1
    elif kind == "?":
        info.untracked += 1


def _parse_branch_header(info: StatusInfo, tokens: list[str]) -> None:
    if not tokens:
        return

    key, values = tokens[0], tokens[1:]
    if key == "branch.oid":
        info.commit = _first(values)
    elif key == "branch.head":
        info.branch = _first(values)
    elif key == "branch.upstream":
        info.upstream = _first(values)
    elif key == "branch.ab":
        _parse_ahead_behind(info, values[:2])


def _parse_ahead_behind(info: StatusInfo, tokens: list[str]) -> None:
    # Classified by sign, so "+N -M" and "-M +N" decode the same way.
    for token in tokens:
        sign, digits = token[:1], token[1:]
        if not (digits.isascii() and digits.isdigit()):
            raise StatusDecodeError(
                f"invalid branch.ab value {token!r}",
                details=f"expected +<ahead> -<behind>, got {' '.join(tokens)!r}",
            )

        if sign == "+":
            info.ahead = int(digits)
        elif sign == "-":
            info.behind = int(digits)


def _parse_changed_entry(info: StatusInfo, tokens: list[str]) -> None:
    if not tokens:
        return

    xy = tokens[0]
    _count(info.staged, xy[:1])
    _count(info.unstaged, xy[1:2])


def _count(area: ChangeArea, code: str) -> None:
    counter = _AREA_COUNTERS.get(code)
    if counter is not None:
        setattr(area, counter, getattr(area, counter) + 1)


def _first(values: list[str]) -> str:
    return values[0] if values else ""
