"""Git status decoding and checks.

- models: StatusInfo and ChangeArea
- porcelain: porcelain v2 decoder
- checks: clean/sync predicates turned into errors

The commands that produce the status text live in ``buildlib.shell.git``.
"""

from .checks import ensure_clean, status_error
from .models import ChangeArea, StatusInfo
from .porcelain import parse_status_output

__all__ = [
    "ChangeArea",
    "StatusInfo",
    "ensure_clean",
    "parse_status_output",
    "status_error",
]
