"""Unit tests for the batched word source.

WHY: The word source is the only component that touches the input file.
A token lost or repeated at a batch boundary, or a refill that never
stops, would be visible to every reader.

HOW: Tests use real files in tmp_path for open() behavior and io.StringIO
streams (with a small batch size) for batching edge cases. A stream
subclass raises from readline() to simulate read failures.
"""

import io
import logging

import pytest

from rsvp_reader.config import BATCH_LINES
from rsvp_reader.core.errors import FileOpenError
from rsvp_reader.core.source import WordSource


class FailingStream(io.StringIO):
    """StringIO whose readline() raises after ``good_lines`` lines."""

    def __init__(self, text, good_lines, exc=None):
        super().__init__(text)
        self.good_lines = good_lines
        self.calls = 0
        self.exc = exc if exc is not None else OSError("disk on fire")

    def readline(self, *args):
        self.calls += 1
        if self.calls > self.good_lines:
            raise self.exc
        return super().readline(*args)


def _drain(source):
    words = []
    while True:
        word = source.next_word()
        if word is None:
            return words
        words.append(word)


class TestOpen:
    def test_opens_existing_file(self, text_file):
        path = text_file("one two")
        with WordSource.open(path) as source:
            assert source.next_word() == "one"

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileOpenError) as excinfo:
            WordSource.open(tmp_path / "missing.txt")
        assert "missing.txt" in str(excinfo.value)

    def test_directory_raises(self, tmp_path):
        with pytest.raises(FileOpenError):
            WordSource.open(tmp_path)

    def test_default_batch_size(self, text_file):
        with WordSource.open(text_file("x")) as source:
            assert source.batch_lines == BATCH_LINES == 100

    def test_rejects_zero_batch(self):
        with pytest.raises(ValueError):
            WordSource(io.StringIO(""), batch_lines=0)


class TestSequence:
    def test_250_tokens_one_per_line_across_batches(self, text_file):
        tokens = ["w{}".format(i) for i in range(250)]
        with WordSource.open(text_file("\n".join(tokens) + "\n")) as source:
            assert _drain(source) == tokens
            assert source.lines_read == 250

    def test_250_tokens_many_per_line(self, text_file):
        tokens = ["w{}".format(i) for i in range(250)]
        lines = [" ".join(tokens[i:i + 10]) for i in range(0, 250, 10)]
        with WordSource.open(text_file("\n".join(lines))) as source:
            assert _drain(source) == tokens

    def test_none_forever_after_end(self):
        source = WordSource(io.StringIO("a b\n"))
        assert _drain(source) == ["a", "b"]
        assert source.exhausted
        for _ in range(5):
            assert source.next_word() is None

    def test_exact_multiple_of_batch(self):
        text = "".join("line{}\n".format(i) for i in range(6))
        source = WordSource(io.StringIO(text), batch_lines=3)
        assert _drain(source) == ["line{}".format(i) for i in range(6)]

    def test_token_spanning_no_boundary_issue(self):
        # Lines never split a token, so batch edges fall between tokens
        source = WordSource(io.StringIO("alpha beta\ngamma\ndelta epsilon\n"), batch_lines=1)
        assert _drain(source) == ["alpha", "beta", "gamma", "delta", "epsilon"]

    def test_iteration_protocol(self):
        source = WordSource(io.StringIO("one two three"))
        assert list(source) == ["one", "two", "three"]
        assert list(source) == []

    def test_words_read_counter(self):
        source = WordSource(io.StringIO("a b c"))
        _drain(source)
        assert source.words_read == 3

    def test_empty_file(self, text_file):
        with WordSource.open(text_file("")) as source:
            assert source.next_word() is None


class TestWhitespace:
    def test_consecutive_whitespace_yields_no_empty_tokens(self):
        source = WordSource(io.StringIO("  one \t\t two\n\n\nthree   \n"))
        assert _drain(source) == ["one", "two", "three"]

    def test_blank_full_batch_does_not_end_stream(self):
        text = "\n" * 4 + "after blank lines\n"
        source = WordSource(io.StringIO(text), batch_lines=2)
        assert _drain(source) == ["after", "blank", "lines"]

    def test_punctuation_stays_attached(self):
        source = WordSource(io.StringIO("Hello, world."))
        assert _drain(source) == ["Hello,", "world."]


class TestReadFailures:
    def test_failure_ends_batch_with_accumulated_text(self):
        stream = FailingStream("a b\nc\nd\ne\n", good_lines=2)
        source = WordSource(stream, batch_lines=10)
        assert _drain(source) == ["a", "b", "c"]

    def test_failure_is_permanent(self):
        stream = FailingStream("a\nb\nc\nd\n", good_lines=1)
        source = WordSource(stream, batch_lines=10)
        assert _drain(source) == ["a"]
        calls = stream.calls
        assert source.next_word() is None
        assert stream.calls == calls

    def test_decode_error_treated_as_read_failure(self):
        exc = UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")
        stream = FailingStream("a\nb\n", good_lines=1, exc=exc)
        source = WordSource(stream)
        assert _drain(source) == ["a"]

    def test_failure_is_logged(self, caplog):
        stream = FailingStream("a\n", good_lines=0)
        source = WordSource(stream, name="book.txt")
        with caplog.at_level(logging.WARNING, logger="rsvp_reader.core.source"):
            assert source.next_word() is None
        assert "book.txt" in caplog.text
        assert "ending batch early" in caplog.text

    def test_undecodable_file_on_disk(self, tmp_path):
        path = tmp_path / "latin1.txt"
        path.write_bytes(b"fine words\nbad \xff byte\n")
        with WordSource.open(path) as source:
            assert _drain(source) == ["fine", "words"]

    def test_bad_byte_keeps_every_earlier_line(self, tmp_path, caplog):
        path = tmp_path / "mostly_utf8.txt"
        path.write_bytes(b"fine words\n" * 50 + b"bad \xff byte\n" + b"never shown\n")
        with caplog.at_level(logging.WARNING, logger="rsvp_reader.core.source"):
            with WordSource.open(path) as source:
                words = _drain(source)
        assert words == ["fine", "words"] * 50
        assert "line 51" in caplog.text

    def test_utf8_text_is_decoded(self, tmp_path):
        path = tmp_path / "umlaut.txt"
        path.write_bytes("K\u00fcche caf\u00e9\n".encode("utf-8"))
        with WordSource.open(path) as source:
            assert _drain(source) == ["K\u00fcche", "caf\u00e9"]
