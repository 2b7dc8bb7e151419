import threading

import pytest

from pngpaste.fetch import RecvBuf
from pngpaste.paster import (
    NUM_FRAGMENTS,
    FragmentStore,
    fragment_url,
    main,
    parse_args,
    paste,
    worker,
)
from pngpaste.png import DataIHDR, SimplePNG, make_chunk, parse_png_chunks, parse_png_ihdr
from pngpaste.zutil import mem_def, mem_inf


def _raw_row(seq):
    return b"\x00" + bytes([seq, seq, seq, 255])


def _strip(seq):
    return SimplePNG(
        make_chunk("IHDR", DataIHDR(1, 1).to_bytes()),
        make_chunk("IDAT", mem_def(_raw_row(seq))),
        make_chunk("IEND"),
    ).to_bytes()


class _CyclingFetcher:
    def __init__(self):
        self.calls = 0
        self.urls = []
        self._lock = threading.Lock()

    def __call__(self, url):
        with self._lock:
            n = self.calls
            self.calls += 1
            self.urls.append(url)
        seq = NUM_FRAGMENTS - 1 - (n % NUM_FRAGMENTS)
        recv = RecvBuf(seq=seq)
        recv.write(_strip(seq))
        return recv


def test_parse_args_defaults():
    assert parse_args([]) == (1, 1)


def test_parse_args_values():
    assert parse_args(["-t", "5", "-n", "2"]) == (5, 2)
    assert parse_args(["-t1000", "-n3"]) == (1000, 3)


@pytest.mark.parametrize(
    "argv",
    [["-t", "0"], ["-t", "1001"], ["-t", "abc"], ["-n", "0"], ["-n", "4"], ["-x"], ["-t"]],
)
def test_parse_args_rejects(argv):
    with pytest.raises(ValueError):
        parse_args(argv)


def test_fragment_url():
    assert fragment_url("http://localhost:2520/image", 2) == "http://localhost:2520/image?img=2"


def test_store_add_and_duplicates():
    store = FragmentStore(3)
    assert store.add(1, b"a") is True
    assert store.add(1, b"b") is False
    assert len(store) == 1
    assert store.is_full() is False


def test_store_ordered():
    store = FragmentStore(3)
    for seq, data in [(2, b"c"), (0, b"a"), (1, b"b")]:
        store.add(seq, data)
    assert store.is_full() is True
    assert store.ordered() == [b"a", b"b", b"c"]


def test_store_ordered_incomplete():
    store = FragmentStore(2)
    store.add(0, b"a")
    with pytest.raises(ValueError):
        store.ordered()


@pytest.mark.parametrize("seq", [-1, 3])
def test_store_rejects_out_of_range(seq):
    store = FragmentStore(3)
    with pytest.raises(ValueError):
        store.add(seq, b"x")


def test_worker_fills_store():
    store = FragmentStore()
    fetcher = _CyclingFetcher()
    last = worker(store, "http://localhost/image?img=1", 0, fetcher)
    assert store.is_full()
    assert fetcher.calls == NUM_FRAGMENTS
    assert last.seq == 0


def test_worker_on_full_store_does_not_fetch():
    store = FragmentStore(1)
    store.add(0, b"x")
    fetcher = _CyclingFetcher()
    assert worker(store, "http://localhost/image", 0, fetcher) is None
    assert fetcher.calls == 0


def test_worker_survives_fetch_errors():
    store = FragmentStore(1)
    attempts = []

    def flaky(url):
        attempts.append(url)
        if len(attempts) == 1:
            raise OSError("connection refused")
        recv = RecvBuf(seq=0)
        recv.write(b"data")
        return recv

    last = worker(store, "http://localhost/image", 3, flaky)
    assert len(attempts) == 2
    assert store.ordered() == [b"data"]
    assert last.data == b"data"


def test_worker_ignores_invalid_seq():
    store = FragmentStore(1)
    seqs = iter([-1, 0])

    def fetcher(url):
        recv = RecvBuf(seq=next(seqs))
        recv.write(b"z")
        return recv

    worker(store, "http://localhost/image", 0, fetcher)
    assert store.ordered() == [b"z"]


@pytest.mark.parametrize("threads", [1, 4])
def test_paste_joins_fragments_in_order(tmp_path, threads):
    output = tmp_path / "all.png"
    fetcher = _CyclingFetcher()
    png = paste(threads, 2, "http://localhost:2520/image", output, fetcher)
    written = output.read_bytes()
    assert written == png.to_bytes()
    header = parse_png_ihdr(written)
    assert (header.width, header.height) == (1, NUM_FRAGMENTS)
    raw = mem_inf(parse_png_chunks(written).idat.data)
    assert raw == b"".join(_raw_row(seq) for seq in range(NUM_FRAGMENTS))
    assert set(fetcher.urls) == {"http://localhost:2520/image?img=2"}


def test_main_rejects_bad_image(capsys):
    assert main(["-n", "5"]) == -1
    assert "1, 2, or 3 -- 'n'" in capsys.readouterr().err