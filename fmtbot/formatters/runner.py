# SPDX-License-Identifier: AGPL-3.0-only
#
# Copyright (c) 2026 Fmtbot Contributors
#
# This file is part of Fmtbot.
#
# Fmtbot is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, version 3 only.
#
# Fmtbot is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.
# See the GNU Affero General Public License for more details.

import os
import subprocess
from collections.abc import Iterable
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from pathlib import Path

from fmtbot.core.errors import FormatterError
from fmtbot.files.select import FileFilter
from fmtbot.formatters.resolve import FormatterSpec
from fmtbot.vcs.git import GitRepository, echo_command


def _format_one(formatter: FormatterSpec, path: str, cwd: Path) -> str:
    argv = formatter.argv(path)
    echo_command(argv[0], argv[1:])
    try:
        result = subprocess.run(argv, cwd=str(cwd), check=False)
    except OSError as e:
        raise FormatterError(
            f"{formatter.name}: cannot run {formatter.binary}: {e}",
            code="formatter_spawn_failed",
            details={"formatter": formatter.name, "path": path},
        ) from e

    if result.returncode != 0:
        raise FormatterError(
            f"{formatter.name} failed on {path} with exit code {result.returncode}",
            code="formatter_failed",
            details={"formatter": formatter.name, "path": path, "exit_code": result.returncode},
        )
    return path


def run_all(
    paths: Iterable[str],
    formatter: FormatterSpec,
    cwd: Path,
    *,
    max_workers: int | None = None,
) -> int:
    """
    Format every path in place, one process per file, in parallel.

    Paths are submitted as the (possibly lazy) iterable is consumed. Returns
    the number of files formatted once all of them have finished. The first
    failing invocation cancels work that has not started yet and is raised
    as FormatterError after running invocations complete.
    """
    workers = max(1, max_workers or (os.cpu_count() or 1))
    pool = ThreadPoolExecutor(max_workers=workers, thread_name_prefix=f"fmt-{formatter.name}")
    futures: list[Future[str]] = []

    try:
        for path in paths:
            futures.append(pool.submit(_format_one, formatter, path, cwd))

        for fut in as_completed(futures):
            fut.result()
    except BaseException:
        pool.shutdown(wait=True, cancel_futures=True)
        raise

    pool.shutdown(wait=True)
    return len(futures)


def format_all(
    repo: GitRepository,
    *,
    native: FormatterSpec,
    native_filter: FileFilter,
    script: FormatterSpec,
    script_filter: FileFilter,
    max_workers: int | None = None,
) -> int:
    """
    Run the native formatter over the native file set, then the script
    formatter over the script file set. Each set is selected from a fresh
    listing of the files tracked at HEAD.

    A file matching both sets is formatted by both tools.
    """
    count = run_all(native_filter.select(repo.tracked_files()), native, repo.root, max_workers=max_workers)
    count += run_all(script_filter.select(repo.tracked_files()), script, repo.root, max_workers=max_workers)
    return count
