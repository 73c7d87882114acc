import logging
from abc import ABC, abstractmethod
from typing import BinaryIO

from parser_config import DetectorKind
from x12_errors import TerminatorNotFoundError

logger = logging.getLogger(__name__)

COMPONENT_SEPARATOR = b">"
ISA_SEGMENT_LENGTH = 106
ISA_TERMINATOR_OFFSET = 105
# Same bytes the tokenizer strips from record edges
LEADING_LINE_BREAKS = b"\r\n"


class TerminatorDetector(ABC):
    """Works out the single byte that terminates every segment of a document."""

    name = "detector"

    def __init__(self, chunk_size: int = 4096):
        self.chunk_size = chunk_size

    @abstractmethod
    def detect(self, stream: BinaryIO) -> bytes:
        """Consumes as much of the stream as needed and returns a one-byte terminator."""


class ComponentSeparatorDetector(TerminatorDetector):
    """
    Returns the byte that follows the first '>' in the stream.

    The ISA segment conventionally ends with '>' as its component element
    separator, immediately followed by the segment terminator. The scan does
    not look at ISA field positions, so a '>' appearing earlier than ISA16
    will produce the wrong terminator.
    """

    name = "component-separator"

    def detect(self, stream: BinaryIO) -> bytes:
        offset = 0
        found = False
        while True:
            chunk = stream.read(self.chunk_size)
            if not chunk:
                break
            if found:
                logger.debug(f"Segment terminator {chunk[:1]!r} found at offset {offset}")
                return chunk[:1]
            index = chunk.find(COMPONENT_SEPARATOR)
            if index != -1:
                if index + 1 < len(chunk):
                    logger.debug(f"Segment terminator {chunk[index + 1:index + 2]!r} found at offset {offset + index + 1}")
                    return chunk[index + 1:index + 2]
                found = True
            offset += len(chunk)

        detail = "'>' is the last byte of the input" if found else "no '>' found in input"
        raise TerminatorNotFoundError(self.name, detail)


class IsaPositionDetector(TerminatorDetector):
    """
    Reads the terminator from its fixed position right after the 106-byte ISA segment's last field.

    Leading CR/LF bytes are skipped; any other leading byte means the input does
    not start with ISA.
    """

    name = "isa-position"

    def detect(self, stream: BinaryIO) -> bytes:
        head = b""
        while True:
            chunk = stream.read(self.chunk_size)
            if not chunk:
                break
            head = (head + chunk).lstrip(LEADING_LINE_BREAKS)
            if len(head) >= ISA_SEGMENT_LENGTH:
                break

        if not head.startswith(b"ISA"):
            raise TerminatorNotFoundError(self.name, "input does not start with an ISA segment")
        if len(head) < ISA_SEGMENT_LENGTH:
            raise TerminatorNotFoundError(self.name, f"ISA segment is shorter than {ISA_SEGMENT_LENGTH} bytes")

        terminator = head[ISA_TERMINATOR_OFFSET:ISA_TERMINATOR_OFFSET + 1]
        logger.debug(f"Segment terminator {terminator!r} read from ISA position {ISA_TERMINATOR_OFFSET}")
        return terminator


_DETECTORS = {
    DetectorKind.COMPONENT_SEPARATOR: ComponentSeparatorDetector,
    DetectorKind.ISA_POSITION: IsaPositionDetector,
}


def get_detector(kind: DetectorKind, chunk_size: int = 4096) -> TerminatorDetector:
    return _DETECTORS[DetectorKind(kind)](chunk_size=chunk_size)
