"""
Line protocol reader tests.

Focus areas:
1. Line framing (LF, CRLF, end of stream)
2. Card block decoding
3. List terminator and lenient handling of unknown discriminators
4. Malformed blocks raise, transport problems become None
5. Close semantics
"""
import io
import logging

import pytest

from cards.card import Card, Rank
from protocol.card_reader import CardReader
from protocol.errors import CardFormatError, ProtocolError, StreamClosedError
from fakes import card_lines, wire


def reader_for(*lines: str) -> CardReader:
    return CardReader(io.BytesIO(wire(*lines)))


class BrokenStream:
    """readline() always fails like a reset socket."""

    def readline(self):
        raise ConnectionResetError(104, "Connection reset by peer")

    def close(self):
        raise OSError("already gone")


class TestReadLine:

    def test_strips_newline(self):
        reader = reader_for("hello", "world")
        assert reader.read_line() == "hello"
        assert reader.read_line() == "world"

    def test_strips_crlf(self):
        reader = CardReader(io.BytesIO(b"OK\r\nCARD\r\n"))
        assert reader.read_line() == "OK"
        assert reader.read_line() == "CARD"

    def test_last_line_without_newline(self):
        reader = CardReader(io.BytesIO(b"OK"))
        assert reader.read_line() == "OK"

    def test_empty_line_is_a_line(self):
        reader = CardReader(io.BytesIO(b"\nOK\n"))
        assert reader.read_line() == ""
        assert reader.read_line() == "OK"

    def test_end_of_stream_is_none(self):
        reader = reader_for("only")
        reader.read_line()
        assert reader.read_line() is None

    def test_io_error_is_none_and_logged(self, caplog):
        reader = CardReader(BrokenStream())
        with caplog.at_level(logging.ERROR, logger="protocol.card_reader"):
            assert reader.read_line() is None
        assert "Could not read response from server" in caplog.text

    def test_undecodable_bytes_is_none(self):
        reader = CardReader(io.BytesIO(b"\xff\xfe\n"))
        assert reader.read_line() is None

    def test_configured_encoding(self):
        reader = CardReader(io.BytesIO("Caf\xe9\n".encode("latin-1")), encoding="latin-1")
        assert reader.read_line() == "Caf\xe9"


class TestReadCard:

    def test_well_formed_block(self):
        reader = reader_for(*card_lines(12345, "Butler", "COMMON", 20))
        card = reader.read_card()

        assert card.id == 12345
        assert card.name == "Butler"
        assert card.rank == Rank.COMMON
        assert card.price == 20

    def test_name_kept_raw(self):
        reader = reader_for(*card_lines(7, "  Gate Lodge  ", "RARE", 5))
        assert reader.read_card().name == "  Gate Lodge  "

    def test_ok_ends_list(self):
        assert reader_for("OK").read_card() is None

    def test_unknown_discriminator_ends_list_with_warning(self, caplog):
        reader = reader_for("CARDZ", "whatever")
        with caplog.at_level(logging.WARNING, logger="protocol.card_reader"):
            assert reader.read_card() is None
        assert "CARDZ" in caplog.text

    def test_unknown_rank_raises(self):
        reader = reader_for(*card_lines(1, "Butler", "common", 0))
        with pytest.raises(CardFormatError):
            reader.read_card()

    def test_bad_id_raises(self):
        reader = reader_for("CARD", "abc", "Butler", "COMMON", "0")
        with pytest.raises(CardFormatError):
            reader.read_card()

    def test_bad_price_raises(self):
        reader = reader_for("CARD", "1", "Butler", "COMMON", "free")
        with pytest.raises(CardFormatError):
            reader.read_card()

    def test_negative_price_raises(self):
        reader = reader_for(*card_lines(1, "Butler", "COMMON", -3))
        with pytest.raises(CardFormatError):
            reader.read_card()

    def test_truncated_block_raises(self):
        reader = reader_for("CARD", "1", "Butler")
        with pytest.raises(StreamClosedError):
            reader.read_card()

    def test_empty_stream_raises(self):
        with pytest.raises(StreamClosedError):
            reader_for().read_card()

    def test_errors_share_base(self):
        assert issubclass(CardFormatError, ProtocolError)
        assert issubclass(StreamClosedError, ProtocolError)


class TestReadCards:

    def test_wire_order_preserved(self):
        reader = reader_for(
            *card_lines(2, "Butler", "COMMON", 20),
            *card_lines(1, "Gate Lodge", "RARE", 5),
            "OK",
        )
        assert list(reader.read_cards()) == [
            Card(2, "Butler", Rank.COMMON),
            Card(1, "Gate Lodge", Rank.RARE),
        ]

    def test_empty_list(self):
        assert list(reader_for("OK").read_cards()) == []

    def test_stops_at_terminator(self):
        reader = reader_for(*card_lines(1, "Butler", "COMMON"), "OK", "500")
        assert len(list(reader.read_cards())) == 1
        assert reader.read_line() == "500"


class TestClose:

    def test_close_closes_stream(self):
        stream = io.BytesIO(b"OK\n")
        reader = CardReader(stream)
        reader.close()
        assert stream.closed
        assert reader.closed

    def test_read_after_close_is_none(self):
        reader = reader_for("OK")
        reader.close()
        assert reader.read_line() is None

    def test_close_twice(self):
        reader = reader_for("OK")
        reader.close()
        reader.close()

    def test_close_error_logged_not_raised(self, caplog):
        reader = CardReader(BrokenStream())
        with caplog.at_level(logging.ERROR, logger="protocol.card_reader"):
            reader.close()
        assert "Failed to close card reader" in caplog.text
