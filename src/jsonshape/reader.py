import io
import json
import sys
from pathlib import Path
from typing import Any, BinaryIO, Generator, List, Optional

import ijson
from tqdm import tqdm

from .errors import InputError
from .log import get_logger
from .sanitize import parse_lenient

logger = get_logger(__name__)

STDIN = "-"


class JsonSource:
    """
    One or more JSON inputs (files, or `-` for stdin).

    A single input loads as its own value; several inputs load as a list of
    values so that their common structure is inferred as sibling samples.
    """

    def __init__(self, file_paths: str | Path | List[str | Path], lenient: bool = False):
        if isinstance(file_paths, (str, Path)):
            file_paths = [file_paths]

        self.file_paths = [p if str(p) == STDIN else Path(p) for p in file_paths]
        if not self.file_paths:
            raise InputError("<input>", "no input files given")
        for p in self.file_paths:
            if p != STDIN and not p.exists():
                raise FileNotFoundError(f"File not found: {p}")

        self.lenient = lenient
        self._stdin_cache: Optional[bytes] = None

    def load(self) -> Any:
        """Parse every input as a whole document."""
        values = [self._load_one(p) for p in self.file_paths]
        return values[0] if len(values) == 1 else values

    def iter_items(self) -> Generator[Any, None, None]:
        """
        Yields the items of each input's top-level array.
        Uses ijson for memory-efficient streaming.
        """
        for p in self.file_paths:
            with self._open(p) as f:
                try:
                    # use_float=True yields floats instead of Decimal for numbers
                    yield from ijson.items(f, "item", use_float=True)
                except ijson.JSONError as exc:
                    raise InputError(self._name(p), f"cannot stream items: {exc}") from exc

    def sample(self, sample_size: Optional[int] = None, progress: bool = True) -> List[Any]:
        """
        Collect up to `sample_size` array items across all inputs
        (all of them when `sample_size` is None).
        """
        if sample_size is not None and sample_size < 0:
            raise ValueError(f"sample_size must be >= 0, got {sample_size}")
        items = []
        with tqdm(desc="Reading items", unit=" items", disable=not progress, file=sys.stderr) as pbar:
            for item in self.iter_items():
                if sample_size is not None and len(items) >= sample_size:
                    break
                items.append(item)
                pbar.update(1)
        logger.debug("Sampled %d items from %d inputs", len(items), len(self.file_paths))
        return items

    def _load_one(self, p: str | Path) -> Any:
        name = self._name(p)
        raw = self._read_bytes(p)
        try:
            text = raw.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise InputError(name, f"not UTF-8 text ({exc.reason})") from exc

        if self.lenient:
            return parse_lenient(text, source=name)
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise InputError(name, f"{exc.msg} at line {exc.lineno} column {exc.colno}") from exc

    def _read_bytes(self, p: str | Path) -> bytes:
        if p == STDIN:
            if self._stdin_cache is None:
                self._stdin_cache = sys.stdin.buffer.read()
            return self._stdin_cache
        try:
            return Path(p).read_bytes()
        except OSError as exc:
            raise InputError(self._name(p), exc.strerror or str(exc)) from exc

    def _open(self, p: str | Path) -> BinaryIO:
        if p == STDIN:
            return io.BytesIO(self._read_bytes(p))
        return open(p, "rb")

    @staticmethod
    def _name(p: str | Path) -> str:
        return "<stdin>" if p == STDIN else str(p)
