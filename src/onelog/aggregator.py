"""Per-unit-of-work record aggregator with a one-shot emission gate."""

import io
import logging
import threading
from collections.abc import Callable, Iterable
from types import TracebackType

from onelog.constants import (
    DEFAULT_ENCODING,
    DEFAULT_TIME_LAYOUT,
    ERR_KEY,
    LEVEL_KEY,
    LINE_TERMINATOR,
    MSG_KEY,
    TIME_KEY,
    Level,
    NodeKind,
)
from onelog.document import Array, Dict, Group, Node, Pair, serialize_dict
from onelog.escape import escape
from onelog.exceptions import FieldNotFoundError, FieldTypeError
from onelog.gate import OneShotGate
from onelog.renderers import IndentRenderer, Renderer
from onelog.settings import OnelogSettings, Sink, StreamName, standard_stream
from onelog.timefmt import Clock, format_timestamp, local_now, validate_layout

logger = logging.getLogger(__name__)

CustomLogResult = tuple[Level | str, Iterable[str], Iterable[Node]]
CustomLogFunc = Callable[..., CustomLogResult]


class LogAggregator:
    """Builds one structured record over the life of a request and writes it once.

    Any number of threads may record messages and set fields concurrently;
    every operation runs under a single per-instance lock. ``emit()`` is
    guarded by a separate one-shot gate so that exactly one call writes,
    however many threads race on it.

    Usage::

        log = LogAggregator()
        log.set_group("request", Pair("method", "GET"), Pair("url", "/ping"))
        log.record_info("handling request")
        ...
        log.emit()

    Output (one line)::

        {"time": "...", "level": "INFO", "msgs": ["handling request"],
         "request": {"method": "GET", "url": "/ping"}}
    """

    def __init__(
        self,
        *,
        output: Sink | None = None,
        stream: StreamName = "stdout",
        time_layout: str = DEFAULT_TIME_LAYOUT,
        renderer: Renderer | None = None,
        clock: Clock = local_now,
    ) -> None:
        self._lock = threading.Lock()
        self._gate = OneShotGate()
        # Without an explicit sink, sys.<stream> is looked up at write time.
        self._out = output
        self._stream = stream
        self._time_layout = validate_layout(time_layout)
        self._renderer: Renderer = renderer if renderer is not None else IndentRenderer()
        self._clock = clock
        self._level = Level.INFO
        self._messages = Array(MSG_KEY)
        self._fields: dict[str, Node] = {}

    @classmethod
    def from_settings(cls, settings: OnelogSettings, *, clock: Clock = local_now) -> "LogAggregator":
        """Create an aggregator using the configured stream, layout and renderer."""
        return cls(
            stream=settings.STREAM,
            time_layout=settings.TIME_LAYOUT,
            renderer=settings.renderer(),
            clock=clock,
        )

    # -------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------

    @property
    def level(self) -> Level:
        with self._lock:
            return self._level

    @property
    def messages(self) -> tuple[str, ...]:
        """Recorded messages in output order (raw first, then escaped)."""
        with self._lock:
            return tuple(self._messages)

    @property
    def emitted(self) -> bool:
        """Whether the emission gate has fired since creation or the last reset."""
        return self._gate.fired

    def set_output(self, output: Sink) -> None:
        """Replace the sink. Only meaningful before the first emit."""
        with self._lock:
            self._out = output

    def set_time_layout(self, layout: str) -> None:
        with self._lock:
            self._time_layout = validate_layout(layout)

    # -------------------------------------------------------------------
    # Messages and level
    # -------------------------------------------------------------------

    def record_info(self, fmt: str, *args: str) -> None:
        """Append a message without touching the level.

        With ``args``, ``fmt`` and every arg are quote-escaped and
        concatenated into one message. Without, ``fmt`` is stored verbatim.
        """
        with self._lock:
            self._append(fmt, args)

    def record_warn(self, fmt: str, *args: str) -> None:
        """Append a message and raise the level to WARN unless it is ERROR."""
        with self._lock:
            self._promote(Level.WARN)
            self._append(fmt, args)

    def record_error(self, err: BaseException | str) -> None:
        """Set the level to ERROR and store the escaped error text.

        A record holds a single error; a later call replaces it.
        """
        pair = Pair(ERR_KEY, escape(str(err)))
        with self._lock:
            self._promote(Level.ERROR)
            self._fields[ERR_KEY] = pair

    def record_failure(self, err: BaseException | str, fmt: str, *args: str) -> None:
        """Append a message and record ``err`` as one step.

        Same as :meth:`record_info` followed by :meth:`record_error`, except
        that a concurrent :meth:`emit` sees either both changes or neither.
        """
        pair = Pair(ERR_KEY, escape(str(err)))
        with self._lock:
            self._append(fmt, args)
            self._promote(Level.ERROR)
            self._fields[ERR_KEY] = pair

    def record_custom(self, fn: CustomLogFunc, err: BaseException | None, *args: str) -> None:
        """Apply a caller-computed ``(level, messages, fields)`` to the record.

        ``fn(err, *args)`` is called before the lock is taken, so it may read
        from this aggregator. The returned level is assigned as-is, ignoring
        the usual promotion order; messages are appended verbatim and fields
        are upserted by key.
        """
        level, messages, fields = fn(err, *args)
        new_level = Level(level)
        new_messages = list(messages)
        new_fields = list(fields)
        for node in new_fields:
            _check_node(node)

        with self._lock:
            self._level = new_level
            self._messages.extend(new_messages)
            for node in new_fields:
                self._fields[node.key] = node

    def _promote(self, level: Level) -> None:
        if not self._level.at_least(level):
            self._level = level

    def _append(self, fmt: str, args: tuple[str, ...]) -> None:
        if args:
            self._messages.add_safe(fmt, *args)
        else:
            self._messages.add(fmt)

    # -------------------------------------------------------------------
    # Fields
    # -------------------------------------------------------------------

    def set_field(self, node: Node) -> None:
        """Store ``node`` under its own key, replacing any previous field."""
        _check_node(node)
        with self._lock:
            self._fields[node.key] = node

    def set_pair(self, key: str, value: str) -> None:
        self.set_field(Pair(key, value))

    def set_group(self, key: str, *nodes: Node) -> Group:
        """Store a group built from ``nodes`` and return it."""
        group = Group(key, Dict(nodes))
        self.set_field(group)
        return group

    def get_field(self, key: str) -> Node:
        with self._lock:
            try:
                return self._fields[key]
            except KeyError:
                raise FieldNotFoundError(key) from None

    def pop_field(self, key: str) -> Node:
        with self._lock:
            try:
                return self._fields.pop(key)
            except KeyError:
                raise FieldNotFoundError(key) from None

    def has_field(self, key: str) -> bool:
        with self._lock:
            return key in self._fields

    def get_as(self, key: str, kind: NodeKind) -> Node:
        """Return the field under ``key`` if it is a node of ``kind``."""
        node = self.get_field(key)
        if node.kind is not kind:
            raise FieldTypeError(key, expected=kind.value, actual=node.kind.value)
        return node

    def get_pair(self, key: str) -> Pair:
        return self.get_as(key, NodeKind.PAIR)  # type: ignore[return-value]

    def get_array(self, key: str) -> Array:
        return self.get_as(key, NodeKind.ARRAY)  # type: ignore[return-value]

    def get_group(self, key: str) -> Group:
        return self.get_as(key, NodeKind.GROUP)  # type: ignore[return-value]

    # -------------------------------------------------------------------
    # Emission
    # -------------------------------------------------------------------

    def emit(self) -> bool:
        """Write the record to the sink, at most once until :meth:`reset`.

        Returns True if this call wrote the record. A record with no messages
        is not written at all, and still uses up the gate.
        """
        if not self._gate.try_fire():
            logger.debug("Record already emitted; ignoring emit()")
            return False

        with self._lock:
            written = bool(self._messages)
            if written:
                self._write_line(serialize_dict(self._build_record()))

        if not written:
            logger.debug("Record has no messages; nothing emitted")
        return written

    def pretty_emit(self) -> str:
        """Render the current record for humans and write it to the sink.

        Debug aid: ignores the emission gate, so it neither blocks nor is
        blocked by :meth:`emit`, and writes even when there are no messages.
        Returns the rendered text.
        """
        with self._lock:
            text = serialize_dict(self._build_record())
        rendered = self._renderer.render(text)
        with self._lock:
            self._write_line(rendered)
        return rendered

    def reset(self) -> None:
        """Re-arm the emission gate so the record can be emitted again."""
        self._gate.reset()

    def snapshot(self) -> Dict:
        """The record as it would be emitted right now."""
        with self._lock:
            record = self._build_record()
            if MSG_KEY in record and record[MSG_KEY] is self._messages:
                record.set(self._messages.copy())
            return record

    def _write_line(self, text: str) -> None:
        # One write call per line; the caller holds the lock.
        out = self._out if self._out is not None else standard_stream(self._stream)
        if out is None:
            logger.debug("sys.%s is None; record dropped", self._stream)
            return
        line = text + LINE_TERMINATOR
        if isinstance(out, io.TextIOBase):
            out.write(line)
        else:
            out.write(line.encode(DEFAULT_ENCODING))
        flush = getattr(out, "flush", None)
        if flush is not None:
            flush()

    def _build_record(self) -> Dict:
        # Fields go in last so a caller-set "time" or "level" pair wins.
        record = Dict()
        record.set_pair(TIME_KEY, format_timestamp(self._clock(), self._time_layout))
        record.set_pair(LEVEL_KEY, self._level.value)
        if self._messages:
            record.set(self._messages)
        for node in self._fields.values():
            record.set(node)
        return record

    # -------------------------------------------------------------------
    # Context manager
    # -------------------------------------------------------------------

    def __enter__(self) -> "LogAggregator":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if exc is not None:
            self.record_error(exc)
        self.emit()


def _check_node(node: object) -> None:
    if not isinstance(node, (Pair, Array, Group)):
        raise TypeError(f"expected Pair, Array or Group, got {type(node).__name__}")
