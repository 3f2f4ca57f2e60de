"""Data storage utilities for Parquet and JSONL output."""

import json
import sys
from contextlib import nullcontext
from pathlib import Path
from typing import Any, ContextManager, Dict, Iterable, List, Optional, TextIO

import pandas as pd


def save_to_parquet(data: Iterable[Dict[str, Any]], file_path: Path) -> int:
    """Save data to a Parquet file, returning the number of rows written."""
    file_path.parent.mkdir(parents=True, exist_ok=True)
    df = pd.DataFrame(list(data))
    df.to_parquet(file_path, index=False)
    return len(df)


def write_to_jsonl(data: Iterable[Dict[str, Any]], output_file=None) -> int:
    """Write data to JSONL format (stdout or file), returning the number of lines."""
    output = output_file or sys.stdout
    n = 0
    for item in data:
        print(json.dumps(item), file=output)
        n += 1
    return n


class RecordWriter:
    """Write several batches of records to one destination.

    ``-`` is stdout, a ``.parquet`` path collects every batch and writes a
    single file when the writer is closed, anything else is a JSONL file
    opened once. Batches written before an error are kept.

    Usage:
        with RecordWriter("followers.jsonl") as out:
            for user in users:
                out.write(records_for(user))
    """

    def __init__(self, path: str):
        self.path = path
        self.rows: List[Dict[str, Any]] = []
        self.file: Optional[TextIO] = None

    @property
    def parquet(self) -> bool:
        return Path(self.path).suffix == ".parquet"

    def __enter__(self) -> "RecordWriter":
        if self.path != "-" and not self.parquet:
            file_path = Path(self.path)
            file_path.parent.mkdir(parents=True, exist_ok=True)
            self.file = file_path.open("w")
        return self

    def write(self, data: Iterable[Dict[str, Any]]) -> int:
        """Write one batch, returning how many records it held."""
        if self.parquet:
            n = len(self.rows)
            self.rows.extend(data)
            return len(self.rows) - n
        return write_to_jsonl(data, self.file)

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self.file is not None:
            self.file.close()
        elif self.parquet:
            save_to_parquet(self.rows, Path(self.path))
        return False


def record_writer(path: Optional[str]) -> ContextManager[Optional[RecordWriter]]:
    """A RecordWriter for ``path``, or a context yielding None when there is no path."""
    return RecordWriter(path) if path else nullcontext()
