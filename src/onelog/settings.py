"""Process-wide defaults for new aggregators, loaded from environment variables."""

import functools
import shlex
import sys
from typing import BinaryIO, Literal, TextIO

from pydantic import field_validator
from pydantic_settings import BaseSettings

from onelog.constants import DEFAULT_PRETTY_INDENT, DEFAULT_TIME_LAYOUT
from onelog.renderers import CommandRenderer, IndentRenderer, Renderer
from onelog.timefmt import validate_layout

StreamName = Literal["stdout", "stderr"]
Sink = BinaryIO | TextIO


def standard_stream(name: StreamName) -> Sink | None:
    """Return the current ``sys.stdout``/``sys.stderr`` as a record sink.

    Prefers the byte buffer underneath; a replacement stream without one
    (``io.StringIO``, a notebook's output stream) is returned as-is and
    written to as text. None when the stream itself is None, as under
    ``pythonw``.
    """
    stream = getattr(sys, name)
    if stream is None:
        return None
    return getattr(stream, "buffer", stream)


class OnelogSettings(BaseSettings):
    """Defaults applied by ``LogAggregator.from_settings``."""

    TIME_LAYOUT: str = DEFAULT_TIME_LAYOUT
    STREAM: StreamName = "stdout"

    # Pretty printing (debug only)
    PRETTY_COMMAND: str = ""  # e.g. "jq ." -- empty renders in-process
    PRETTY_INDENT: int = DEFAULT_PRETTY_INDENT

    model_config = {"env_prefix": "ONELOG_"}

    @field_validator("TIME_LAYOUT")
    @classmethod
    def check_layout(cls, value: str) -> str:
        return validate_layout(value)

    def output_stream(self) -> Sink | None:
        """The selected standard stream as it is right now."""
        return standard_stream(self.STREAM)

    def renderer(self) -> Renderer:
        if self.PRETTY_COMMAND.strip():
            return CommandRenderer(shlex.split(self.PRETTY_COMMAND))
        return IndentRenderer(indent=self.PRETTY_INDENT)


@functools.lru_cache(maxsize=1)
def get_settings() -> OnelogSettings:
    """Return cached settings singleton."""
    return OnelogSettings()
