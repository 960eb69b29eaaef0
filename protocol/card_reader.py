"""
Line protocol reader.

Turns the server's byte stream into either raw lines or decoded cards.

Framing:
    - One logical value per line, terminated by "\\n" ("\\r\\n" tolerated)
    - A card travels as five lines: CARD, id, name, rank, price
    - A card list is zero or more card blocks followed by a single OK

Failure policy:
    - read_line() never raises: I/O errors and end of stream become None
    - read_card() raises ProtocolError subclasses for a broken card block,
      so the caller can fail the whole listing
    - An unknown discriminator is logged and treated as end of list
"""
from __future__ import annotations

from typing import BinaryIO, Iterator, Optional

from cards.card import Card, Rank
from infrastructure.logger import get_logger
from protocol import commands
from protocol.errors import CardFormatError, StreamClosedError

logger = get_logger(__name__)


class CardReader:
    """
    Reads lines and cards from a binary input stream.

    The stream should be buffered (socket.makefile("rb") or io.BytesIO);
    readline() on it blocks until a full line or EOF.

    Not thread-safe. One reader per connection.
    """

    def __init__(self, stream: BinaryIO, encoding: str = "utf-8"):
        self._stream = stream
        self._encoding = encoding
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    # ==================== Lines ====================

    def read_line(self) -> Optional[str]:
        """
        Read one line without its end-of-line marker.

        Returns:
            str, or None if the stream ended or the read failed
        """
        if self._closed:
            logger.error("Read attempted on closed card reader")
            return None

        try:
            raw = self._stream.readline()
        except (OSError, ValueError) as e:
            # ValueError: read on a file object closed underneath us
            logger.error("Could not read response from server: %s", e)
            return None

        if not raw:
            logger.debug("Server closed the stream")
            return None

        try:
            line = raw.decode(self._encoding)
        except UnicodeDecodeError as e:
            logger.error("Undecodable line from server (%s): %r", e, raw)
            return None

        if line.endswith("\n"):
            line = line[:-1]
            if line.endswith("\r"):
                line = line[:-1]
        logger.debug("<< %s", line)
        return line

    def _require_line(self, what: str) -> str:
        line = self.read_line()
        if line is None:
            raise StreamClosedError(f"stream ended while reading {what}")
        return line

    # ==================== Cards ====================

    def read_card(self) -> Optional[Card]:
        """
        Read one card block, or the list terminator.

        Returns:
            Card for a CARD block, None for OK (or an unrecognized line)

        Raises:
            StreamClosedError: stream ended before or inside a block
            CardFormatError: id/price not an integer, or unknown rank
        """
        header = self._require_line("card header")

        if header == commands.OK:
            return None

        if header != commands.CARD:
            logger.warning("Card input stream incorrectly formatted. Received {%s}", header)
            return None

        raw_id = self._require_line("card id")
        name = self._require_line("card name")
        raw_rank = self._require_line("card rank")
        raw_price = self._require_line("card price")

        try:
            card_id = int(raw_id)
        except ValueError:
            raise CardFormatError(f"card id is not an integer: {raw_id!r}") from None
        try:
            rank = Rank.parse(raw_rank)
        except ValueError as e:
            raise CardFormatError(str(e)) from None
        try:
            price = int(raw_price)
        except ValueError:
            raise CardFormatError(f"card price is not an integer: {raw_price!r}") from None

        try:
            return Card(card_id, name, rank, price)
        except ValueError as e:
            raise CardFormatError(f"invalid card {card_id}: {e}") from None

    def read_cards(self) -> Iterator[Card]:
        """Yield cards until the list terminator (wire order, unsorted)."""
        while True:
            card = self.read_card()
            if card is None:
                return
            yield card

    # ==================== Lifecycle ====================

    def close(self) -> None:
        """Close the underlying stream. Errors are logged, not raised."""
        if self._closed:
            return
        self._closed = True
        try:
            self._stream.close()
        except OSError as e:
            logger.error("Failed to close card reader: %s", e)
