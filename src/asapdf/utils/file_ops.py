"""Input/output stream handling."""

import contextlib
import pathlib
import sys
import warnings
from typing import BinaryIO, Iterable, Iterator, Union

# Longest payload kept per input line; longer lines are truncated
MAX_LINE_LENGTH = 4095

STDIO_PATH = '-'


@contextlib.contextmanager
def open_input(path: Union[str, pathlib.Path, None]) -> Iterator[BinaryIO]:
    """Open ``path`` for binary reading; '-' or None means stdin."""
    if path is None or str(path) == STDIO_PATH:
        yield sys.stdin.buffer
        return
    with open(path, 'rb') as f:
        yield f


@contextlib.contextmanager
def open_output(path: Union[str, pathlib.Path, None]) -> Iterator[BinaryIO]:
    """Open ``path`` for binary writing; '-' or None means stdout."""
    if path is None or str(path) == STDIO_PATH:
        out = sys.stdout.buffer
        try:
            yield out
        finally:
            out.flush()
        return
    out_path = pathlib.Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with open(out_path, 'wb') as f:
        yield f


def read_lines(source: Iterable[bytes], max_length: int = MAX_LINE_LENGTH) -> Iterator[str]:
    """Yield decoded lines without their terminating newline.

    Bytes decode as latin-1 so each input byte is exactly one character.
    Lines longer than ``max_length`` are cut to that length with a warning.
    """
    for lineno, raw in enumerate(source, start=1):
        if raw.endswith(b'\n'):
            raw = raw[:-1]
        if len(raw) > max_length:
            warnings.warn(
                f"Line {lineno} truncated to {max_length} characters (was {len(raw)})",
                UserWarning,
            )
            raw = raw[:max_length]
        yield raw.decode('latin-1')

