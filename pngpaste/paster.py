"""Fetch all image fragments from a server with several threads and paste them together."""

from __future__ import annotations

import getopt
import os
import sys
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Optional, Sequence, Union

from .catpng import DEFAULT_OUTPUT, concatenate
from .fetch import RecvBuf, fetch
from .png import PNGError, SimplePNG, write_png
from .zutil import ZlibError

NUM_FRAGMENTS = 50
DEFAULT_BASE_URL = "http://localhost:2520/image"
MAX_THREADS = 1000
MAX_IMAGE = 3
_PROG = "paster"
_NEEDS_ARGUMENT = "option requires an argument"

Fetcher = Callable[[str], RecvBuf]


class FragmentStore:
    """Thread-safe slots for the numbered fragments of one image."""

    def __init__(self, total: int = NUM_FRAGMENTS) -> None:
        self.total = total
        self._fragments: dict[int, bytes] = {}
        self._lock = threading.Lock()

    def add(self, seq: int, data: bytes) -> bool:
        """Store fragment ``seq`` unless it is already present; return whether it was new."""
        if not 0 <= seq < self.total:
            raise ValueError(f"fragment sequence number {seq} out of range")
        with self._lock:
            if seq in self._fragments:
                return False
            self._fragments[seq] = bytes(data)
            return True

    def is_full(self) -> bool:
        """Return whether every fragment has been received."""
        with self._lock:
            return len(self._fragments) == self.total

    def ordered(self) -> list[bytes]:
        """Return the fragments in sequence order; all of them must be present."""
        with self._lock:
            if len(self._fragments) != self.total:
                raise ValueError("not all fragments received")
            return [self._fragments[seq] for seq in range(self.total)]

    def __len__(self) -> int:
        with self._lock:
            return len(self._fragments)


def _strtoul(text: str) -> int:
    """Read a leading decimal number the way strtoul does; 0 when there is none."""
    text = text.lstrip(" \t\n\v\f\r")
    sign = 1
    if text[:1] in ("+", "-"):
        sign = -1 if text[0] == "-" else 1
        text = text[1:]
    digits = ""
    for ch in text:
        if not ch.isdigit():
            break
        digits += ch
    return sign * int(digits) if digits else 0


def parse_args(argv: Sequence[str]) -> tuple[int, int]:
    """Parse ``[-t <threads>] [-n <image>]`` and return ``(threads, image)``.

    Both default to 1. Threads must lie in 1..1000 and the image in 1..3;
    anything else, or an unknown option, raises :class:`ValueError`.
    """
    try:
        options, _ = getopt.getopt(list(argv), "t:n:")
    except getopt.GetoptError as exc:
        raise ValueError(f"{_PROG}: {exc}") from exc
    threads = 1
    image = 1
    for option, value in options:
        if option == "-t":
            threads = _strtoul(value)
            if threads <= 0 or threads > MAX_THREADS:
                raise ValueError(f"{_PROG}: {_NEEDS_ARGUMENT} between 0 and 10 -- 't'")
        elif option == "-n":
            image = _strtoul(value)
            if image <= 0 or image > MAX_IMAGE:
                raise ValueError(f"{_PROG}: {_NEEDS_ARGUMENT} 1, 2, or 3 -- 'n'")
    return threads, image


def fragment_url(base_url: str, image: int) -> str:
    """Return the URL that serves fragments of image number ``image``."""
    return f"{base_url}?img={image}"


def worker(
    store: FragmentStore,
    url: str,
    thread_num: int,
    fetcher: Fetcher = fetch,
) -> Optional[RecvBuf]:
    """Fetch fragments from ``url`` into ``store`` until it is full.

    Returns the fetch that this thread saw complete the store, or ``None``
    if the store filled up without this thread observing it.
    """
    last: Optional[RecvBuf] = None
    while not store.is_full():
        try:
            recv = fetcher(url)
        except OSError as exc:
            print(f"curl_easy_perform() failed: {exc} in thread {thread_num}", file=sys.stderr)
            continue
        print(f"Thread {thread_num}: {recv.size} bytes received, seq={recv.seq}.")
        if 0 <= recv.seq < store.total:
            store.add(recv.seq, recv.data)
        if store.is_full():
            last = recv
    return last


def paste(
    threads: int = 1,
    image: int = 1,
    base_url: str = DEFAULT_BASE_URL,
    output: Union[str, os.PathLike] = DEFAULT_OUTPUT,
    fetcher: Fetcher = fetch,
) -> Optional[SimplePNG]:
    """Collect every fragment of ``image`` with ``threads`` workers and write the joined PNG.

    Returns the written image, or ``None`` if not all fragments arrived.
    """
    store = FragmentStore()
    url = fragment_url(base_url, image)
    with ThreadPoolExecutor(max_workers=threads) as pool:
        futures = [pool.submit(worker, store, url, num, fetcher) for num in range(threads)]
        for future in futures:
            future.result()
    if not store.is_full():
        return None
    png = concatenate(store.ordered())
    write_png(output, png)
    return png


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Command entry point: ``paster [-t <threads>] [-n <image>]``."""
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        threads, image = parse_args(args)
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return -1
    print(f"t: {threads}, n: {image}")
    try:
        png = paste(threads, image, DEFAULT_BASE_URL, DEFAULT_OUTPUT, fetch)
    except (OSError, PNGError, ZlibError) as exc:
        print(f"catpng failed: {exc}", file=sys.stderr)
        return 0
    if png is None:
        print("Not all fragments received.")
        return -1
    print("All fragments received.")
    print("catpng succeeded")
    return 0


if __name__ == "__main__":
    sys.exit(main())