"""Human-readable renderers for debug output of serialized records."""

import json
import logging
import shutil
import subprocess
from collections.abc import Sequence
from typing import Protocol

from onelog.constants import DEFAULT_PRETTY_COMMAND, DEFAULT_PRETTY_INDENT
from onelog.exceptions import RenderError

logger = logging.getLogger(__name__)


class Renderer(Protocol):
    """Turns one serialized record into display text."""

    def render(self, text: str) -> str: ...


class IndentRenderer:
    """Re-indent a serialized record in-process, keeping its key order."""

    def __init__(self, indent: int = DEFAULT_PRETTY_INDENT) -> None:
        self.indent = indent

    def render(self, text: str) -> str:
        try:
            # Raw messages may hold control characters such as tabs verbatim.
            document = json.loads(text, strict=False)
        except json.JSONDecodeError as exc:
            raise RenderError(f"record is not parseable as JSON: {exc.msg} at offset {exc.pos}") from exc
        return json.dumps(document, indent=self.indent, ensure_ascii=False)


class CommandRenderer:
    """Pipe a serialized record through an external formatter such as ``jq``.

    The command receives the record on stdin; its stdout is the rendering.
    """

    def __init__(self, argv: Sequence[str] = DEFAULT_PRETTY_COMMAND, *, timeout: float | None = 10.0) -> None:
        if not argv:
            raise ValueError("renderer command must not be empty")
        self.argv = tuple(argv)
        self.timeout = timeout

    def is_available(self) -> bool:
        return shutil.which(self.argv[0]) is not None

    def render(self, text: str) -> str:
        try:
            completed = subprocess.run(
                self.argv,
                input=text,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=False,
            )
        except FileNotFoundError as exc:
            raise RenderError(f"command not found: {self.argv[0]}") from exc
        except subprocess.TimeoutExpired as exc:
            raise RenderError(f"command timed out after {self.timeout}s: {self.argv[0]}") from exc

        if completed.returncode != 0:
            logger.warning("Renderer %s exited with status %d", self.argv[0], completed.returncode)
            raise RenderError(completed.stderr.strip() or self.argv[0], returncode=completed.returncode)
        return completed.stdout.rstrip("\n")
