"""Directory scoping and step chaining for build scripts.

Example:
    >>> with in_directory("$GOPATH/src/example.com/app"):
    ...     chain(
    ...         deferred(runner.run_verbose, ["go", "mod", "tidy"]),
    ...         deferred(runner.run_verbose, ["go", "build", "./..."]),
    ...     )
"""

from __future__ import annotations

import os
import shutil
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from loguru import logger

from buildlib.errors import BuildLibError

from .runner import raise_for_result
from .types import CommandResult, Step


@contextmanager
def in_directory(path: str | Path) -> Iterator[Path]:
    """Change the process working directory for the duration of the block.

    ``$VARS`` in ``path`` are expanded and relative paths are made absolute.
    The previous directory is restored on every exit path.

    Note:
        This changes process-wide state and must not be used from several
        threads at once.

    Raises:
        BuildLibError: If the current directory cannot be read or ``path``
                       cannot be entered
    """
    target = Path(os.path.expandvars(str(path)))
    try:
        target = target.absolute()
        previous = Path.cwd()
    except OSError as e:
        raise BuildLibError("Getwd", details=str(e)) from e

    try:
        os.chdir(target)
    except OSError as e:
        raise BuildLibError(f"Chdir: {target}", details=str(e)) from e

    logger.debug(f"entered {target}")
    try:
        yield target
    finally:
        os.chdir(previous)
        logger.debug(f"returned to {previous}")


def chain(*steps: Step) -> None:
    """Run steps in order, stopping at the first failure.

    A step fails by raising, or by returning an unsuccessful CommandResult
    (which is raised as CommandError).
    """
    for step in steps:
        result = step()
        if isinstance(result, CommandResult):
            raise_for_result(result)


def chained(*steps: Step) -> Step:
    """Return a step that runs ``steps`` with ``chain`` when called."""

    def run() -> None:
        chain(*steps)

    return run


def deferred(func: Callable[..., Any], *args: Any, **kwargs: Any) -> Step:
    """Bind arguments to ``func`` so it can be used as a chain step."""

    def run() -> Any:
        return func(*args, **kwargs)

    return run


def copy_file(dst: str | Path, src: str | Path) -> Step:
    """Return a step that copies ``src`` over ``dst``.

    ``dst`` is overwritten if it exists. File modes are not copied.
    """

    def run() -> None:
        logger.debug(f"copy {src} -> {dst}")
        try:
            shutil.copyfile(src, dst)
        except OSError as e:
            raise BuildLibError(f"can't copy {src} to {dst}", details=str(e)) from e

    return run


def remove_path(path: str | Path) -> Step:
    """Return a step that removes a file or a whole directory tree.

    A missing ``path`` is not an error.
    """

    def run() -> None:
        target = Path(path)
        logger.debug(f"remove {target}")
        try:
            if target.is_dir() and not target.is_symlink():
                shutil.rmtree(target)
            else:
                target.unlink(missing_ok=True)
        except OSError as e:
            raise BuildLibError(f"can't remove {target}", details=str(e)) from e

    return run
