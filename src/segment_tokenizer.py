import logging
from typing import BinaryIO, Iterator

from x12_errors import MalformedSegmentError, SegmentDecodeError
from x12_models import Element, Segment

logger = logging.getLogger(__name__)

LINE_BREAKS = "\r\n"


def iter_raw_segments(
    stream: BinaryIO,
    terminator: bytes,
    encoding: str = "latin-1",
    ignore_line_breaks: bool = True,
    chunk_size: int = 4096,
) -> Iterator[str]:
    """
    Lazily splits a byte stream into raw segment records, terminator removed.

    Records are yielded in source order. Bytes after the last terminator form an
    unterminated record and are dropped, the same as reaching end of data.
    Only the newly read chunk is searched for the terminator, so a record is
    copied once no matter how many chunks it spans.
    """
    if len(terminator) != 1:
        raise ValueError(f"Segment terminator must be a single byte, got {terminator!r}")

    pending = bytearray()
    position = 0
    while True:
        chunk = stream.read(chunk_size)
        if not chunk:
            break
        parts = chunk.split(terminator)
        if len(parts) == 1:
            pending += chunk
            continue

        pending += parts[0]
        completed = [bytes(pending)] + parts[1:-1]
        pending = bytearray(parts[-1])
        for raw in completed:
            position += 1
            yield _decode_record(raw, encoding, position, ignore_line_breaks)

    if pending:
        logger.debug(f"Dropping {len(pending)} trailing bytes with no segment terminator")


def _decode_record(raw: bytes, encoding: str, position: int, ignore_line_breaks: bool) -> str:
    try:
        record = raw.decode(encoding)
    except UnicodeDecodeError as e:
        raise SegmentDecodeError(encoding, position, e.start, str(e.reason)) from e
    if ignore_line_breaks:
        record = record.strip(LINE_BREAKS)
    return record


def split_segment(record: str, separator: str = "*", position: int = 0) -> Segment:
    """Splits one raw record into its identifier and positional elements."""
    index = record.find(separator)
    if index == -1:
        raise MalformedSegmentError(record, separator, position)

    tokens = record.split(separator)
    elements = [Element(id="", value=token) for token in tokens[1:]]
    return Segment(id=tokens[0], elements=elements, position=position)
