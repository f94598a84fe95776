from __future__ import annotations

from pathlib import Path
from typing import Iterator, TextIO


def ensure_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def read_lines(stream: TextIO) -> Iterator[str]:
    for raw in stream:
        yield raw.rstrip("\r\n")
