"""Fetch one image fragment over HTTP into memory and save it to a file."""

from __future__ import annotations

import os
import sys
import urllib.error
import urllib.request
from dataclasses import dataclass, field
from typing import Optional, Sequence, Union

DEFAULT_URL = "http://localhost:2520/image?img=1"
FRAGMENT_HEADER = "X-Ece252-Fragment: "
USER_AGENT = "libcurl-agent/1.0"
BUF_SIZE = 1048576
BUF_INC = 524288
_READ_SIZE = 16384


def _leading_int(text: str) -> int:
    """Parse a leading decimal integer the way C's atoi does; 0 if there is none."""
    text = text.lstrip(" \t\n\v\f\r")
    sign = 1
    if text[:1] in ("+", "-"):
        sign = -1 if text[0] == "-" else 1
        text = text[1:]
    digits = []
    for ch in text:
        if not ch.isdigit():
            break
        digits.append(ch)
    return sign * int("".join(digits)) if digits else 0


def parse_fragment_header(line: Union[str, bytes]) -> Optional[int]:
    """Return the sequence number carried by a fragment header line.

    The line must start with the fragment header prefix and be longer than
    it; otherwise ``None`` is returned. Text after the prefix is read like
    ``atoi``, so a value without leading digits gives 0.
    """
    if isinstance(line, (bytes, bytearray)):
        line = bytes(line).decode("latin-1")
    if len(line) > len(FRAGMENT_HEADER) and line.startswith(FRAGMENT_HEADER):
        return _leading_int(line[len(FRAGMENT_HEADER):])
    return None


@dataclass
class RecvBuf:
    """Received body data together with the fragment sequence number.

    ``seq`` stays negative until a fragment header is seen.
    """

    max_size: int = BUF_SIZE
    seq: int = -1
    buf: bytearray = field(default_factory=bytearray)

    @property
    def size(self) -> int:
        """Number of bytes received so far."""
        return len(self.buf)

    @property
    def data(self) -> bytes:
        """The received bytes."""
        return bytes(self.buf)

    def write(self, data: bytes) -> int:
        """Append body data, growing the capacity as needed; return its length."""
        realsize = len(data)
        if self.size + realsize + 1 > self.max_size:
            self.max_size += max(BUF_INC, realsize + 1)
        self.buf.extend(data)
        return realsize

    def handle_header(self, line: Union[str, bytes]) -> int:
        """Take one header line, recording a fragment sequence number; return its length."""
        seq = parse_fragment_header(line)
        if seq is not None:
            self.seq = seq
        return len(line)


def fetch(url: str) -> RecvBuf:
    """GET ``url`` and return its body and fragment number.

    As with a plain transfer, an HTTP error status still yields the body the
    server sent. Connection failures raise :class:`OSError`.
    """
    recv = RecvBuf()
    request = urllib.request.Request(url, headers={"User-Agent": USER_AGENT})
    try:
        response = urllib.request.urlopen(request)
    except urllib.error.HTTPError as err:
        response = err
    with response:
        for name, value in response.headers.items():
            recv.handle_header(f"{name}: {value}\r\n")
        while True:
            piece = response.read(_READ_SIZE)
            if not piece:
                break
            recv.write(piece)
    return recv


def write_file(path: Union[str, os.PathLike], data: bytes) -> None:
    """Write ``data`` to the file at ``path``."""
    if path is None:
        raise ValueError("write_file: file name is null!")
    if data is None:
        raise ValueError("write_file: input data is null!")
    with open(path, "wb") as fp:
        written = fp.write(data)
    if written != len(data):
        raise OSError("write_file: incomplete write!")


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Command entry point: ``fetch [URL]``; saves the body as ``./output_<seq>_<pid>.png``."""
    args = list(sys.argv[1:] if argv is None else argv)
    url = args[0] if args else DEFAULT_URL
    print(f"fetch: URL is {url}")
    try:
        recv = fetch(url)
    except OSError as exc:
        print(f"curl_easy_perform() failed: {exc}", file=sys.stderr)
        recv = RecvBuf()
    else:
        print(f"{recv.size} bytes received in memory, seq={recv.seq}.")
    fname = f"./output_{recv.seq}_{os.getpid()}.png"
    try:
        write_file(fname, recv.data)
    except OSError as exc:
        print(f"fopen: {exc}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())