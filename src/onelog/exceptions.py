"""Exceptions raised by record lookups and renderers."""


class OnelogError(Exception):
    """Base exception for onelog errors."""


class FieldNotFoundError(OnelogError):
    """No field is stored under the requested key."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"key not found: {key!r}")


class FieldTypeError(OnelogError):
    """A field exists but holds a different node kind than requested."""

    def __init__(self, key: str, expected: str, actual: str) -> None:
        self.key = key
        self.expected = expected
        self.actual = actual
        super().__init__(f"field {key!r} holds a {actual}, not a {expected}")


class RenderError(OnelogError):
    """A pretty-printing renderer could not render a record."""

    def __init__(self, detail: str, returncode: int | None = None) -> None:
        self.detail = detail
        self.returncode = returncode
        msg = f"render failed: {detail}"
        if returncode is not None:
            msg += f" (exit status {returncode})"
        super().__init__(msg)
