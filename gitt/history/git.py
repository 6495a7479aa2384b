"""Git-backed history source.

Walks history by streaming ``git log`` output, so records are parsed only as
far as the navigation engine asks for them. Detail content comes from
``git show`` and is regenerated on every request.
"""

from __future__ import annotations

import logging
import subprocess
import tempfile
from collections.abc import Iterator
from datetime import datetime
from pathlib import Path

from ..errors import ConstructionError, TraversalError
from .diff import parse_detail, sanitize_terminal_text
from .filters import FilterSet, filter_records
from .types import DetailLine, Record

logger = logging.getLogger(__name__)

GIT_QUERY_TIMEOUT_SECONDS = 5.0

_RECORD_START = "\x1e"
_FIELD_SEP = "\x1f"
_BODY_END = "\x1d"
_LOG_FORMAT = "%x1e%H%x1f%P%x1f%an%x1f%ae%x1f%aI%x1f%B%x1d"


def _run_git(
    repo_root: Path,
    args: list[str],
    timeout_seconds: float | None = GIT_QUERY_TIMEOUT_SECONDS,
    *,
    text: bool = True,
) -> subprocess.CompletedProcess | None:
    """Execute a git subcommand, returning ``None`` when git cannot be started."""
    extra: dict[str, object] = {"encoding": "utf-8", "errors": "replace"} if text else {}
    try:
        return subprocess.run(
            ["git", "-C", str(repo_root), *args],
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=text,
            check=False,
            timeout=timeout_seconds,
            **extra,
        )
    except (OSError, subprocess.TimeoutExpired) as exc:
        logger.debug("git %s failed to run: %s", " ".join(args), exc)
        return None


def _stderr_text(proc: subprocess.CompletedProcess) -> str:
    stderr = proc.stderr or ""
    if isinstance(stderr, bytes):
        stderr = stderr.decode("utf-8", errors="replace")
    return stderr.strip()


def resolve_repo_root(path: Path) -> Path:
    """Resolve the repository top-level directory containing ``path``."""
    proc = _run_git(path, ["rev-parse", "--show-toplevel"])
    if proc is None:
        raise ConstructionError("unable to run git")
    if proc.returncode != 0:
        raise ConstructionError(f"not a git repository: {path}")
    top = proc.stdout.strip()
    if not top:
        raise ConstructionError(f"not a git repository: {path}")
    return Path(top).resolve()


def _unquote_path(path: str) -> str:
    if len(path) >= 2 and path.startswith('"') and path.endswith('"'):
        return path[1:-1].replace('\\"', '"').replace("\\\\", "\\")
    return path


def _parse_timestamp(value: str) -> datetime | None:
    try:
        return datetime.fromisoformat(value.strip())
    except ValueError:
        return None


def parse_log_chunk(chunk: str, with_paths: bool) -> Record | None:
    """Parse one ``_LOG_FORMAT`` record (without the leading marker)."""
    header, _, names_block = chunk.partition(_BODY_END)
    fields = header.split(_FIELD_SEP, 5)
    if len(fields) < 6 or not fields[0].strip():
        return None
    record_id, parents, author, email, date_text, body = fields
    message = sanitize_terminal_text(body.strip("\n"))
    summary = message.split("\n", 1)[0] if message else ""
    paths: tuple[str, ...] | None = None
    if with_paths:
        paths = tuple(
            _unquote_path(line.strip()) for line in names_block.splitlines() if line.strip()
        )
    return Record(
        id=record_id.strip(),
        parents=tuple(parents.split()),
        author=sanitize_terminal_text(author),
        email=sanitize_terminal_text(email),
        timestamp=_parse_timestamp(date_text),
        summary=summary,
        message=message,
        paths=paths,
    )


class GitHistorySource:
    """History source reading a local repository through the git CLI."""

    def __init__(self, repo_root: Path) -> None:
        self.repo_root = repo_root

    @classmethod
    def discover(cls, path: Path) -> GitHistorySource:
        """Locate the repository containing ``path`` (like ``git2::discover``)."""
        target = path if path.is_dir() else path.parent
        if not target.exists():
            raise ConstructionError(f"path not found: {path}")
        return cls(resolve_repo_root(target))

    def resolve(self, start_point: str | None) -> str:
        spec = start_point if start_point else "HEAD"
        if spec.startswith("-"):
            raise ConstructionError(f"invalid revision specifier: {spec}")
        proc = _run_git(self.repo_root, ["rev-parse", "--verify", "--quiet", f"{spec}^{{commit}}"])
        if proc is None:
            raise ConstructionError("unable to run git")
        resolved = proc.stdout.strip()
        if proc.returncode != 0 or not resolved:
            if start_point is None:
                raise ConstructionError("repository has no commits")
            raise ConstructionError(f"invalid revision specifier: {spec}")
        return resolved

    def traverse(self, start_point: str | None, filters: FilterSet) -> Iterator[Record]:
        resolved = self.resolve(start_point)
        return filter_records(self._walk(resolved, with_paths=filters.needs_paths), filters)

    def _walk(self, resolved: str, *, with_paths: bool) -> Iterator[Record]:
        args = [
            "git",
            "-C",
            str(self.repo_root),
            "-c",
            "core.quotePath=false",
            "log",
            "--no-color",
            f"--format={_LOG_FORMAT}",
        ]
        if with_paths:
            # Merges list the paths they changed relative to their first parent.
            args.extend(["--name-only", "--diff-merges=first-parent"])
        args.append(resolved)
        logger.debug("starting walk from %s (paths=%s)", resolved[:10], with_paths)
        errors = tempfile.TemporaryFile()
        try:
            proc = subprocess.Popen(args, stdout=subprocess.PIPE, stderr=errors)
        except OSError as exc:
            errors.close()
            raise TraversalError(f"unable to run git log: {exc}") from exc

        finished = False
        try:
            assert proc.stdout is not None
            pending: list[str] = []
            for raw in proc.stdout:
                line = raw.decode("utf-8", errors="replace")
                if line.startswith(_RECORD_START):
                    if pending:
                        record = parse_log_chunk("".join(pending), with_paths)
                        if record is not None:
                            yield record
                    pending = [line[len(_RECORD_START):]]
                elif pending:
                    pending.append(line)
            if pending:
                record = parse_log_chunk("".join(pending), with_paths)
                if record is not None:
                    yield record
            returncode = proc.wait()
            finished = True
            if returncode != 0:
                errors.seek(0)
                message = errors.read().decode("utf-8", errors="replace").strip()
                raise TraversalError(f"git log failed: {message or f'exit status {returncode}'}")
        finally:
            if not finished and proc.poll() is None:
                proc.kill()
                proc.wait()
            if proc.stdout is not None:
                proc.stdout.close()
            errors.close()

    def detail_for(self, record: Record) -> list[DetailLine]:
        proc = _run_git(
            self.repo_root,
            [
                "show",
                "--no-color",
                "--patch-with-stat",
                "--pretty=fuller",
                "--date=iso",
                record.id,
                "--",
            ],
            timeout_seconds=None,
            text=False,
        )
        if proc is None:
            raise TraversalError(f"unable to run git show for {record.short_id}")
        if proc.returncode != 0:
            raise TraversalError(f"git show {record.short_id} failed: {_stderr_text(proc)}")
        return parse_detail(proc.stdout)


__all__ = [
    "GIT_QUERY_TIMEOUT_SECONDS",
    "GitHistorySource",
    "parse_log_chunk",
    "resolve_repo_root",
]
