import io
import logging
from pathlib import Path
from typing import BinaryIO, List, Optional, Union

from parser_config import BodySlicing, ParserConfig
from segment_tokenizer import iter_raw_segments, split_segment
from terminator_detector import TerminatorDetector, get_detector
from x12_errors import BoundaryMismatchError, EnvelopeMismatchError, IncompleteGroupingError, SegmentDecodeError
from x12_models import FunctionalGroup, Interchange, Segment, TransactionSet

logger = logging.getLogger(__name__)


class X12Parser:
    """
    Builds an Interchange tree out of an X12 byte stream.

    The parser keeps no state between calls besides its configuration, so one
    instance can parse any number of documents. Every structural problem raises
    an X12ParseError; there is no partial result.
    """

    def __init__(self, config: Optional[ParserConfig] = None, detector: Optional[TerminatorDetector] = None):
        self.config = config or ParserConfig()
        self.detector = detector or get_detector(self.config.detector, chunk_size=self.config.chunk_size)

    # --- Entry points ---

    def parse(self, stream: BinaryIO) -> Interchange:
        if not stream.seekable():
            stream = io.BytesIO(stream.read())

        start = stream.tell()
        terminator = self.detector.detect(stream)
        stream.seek(start)
        return self._parse_with_terminator(stream, terminator)

    def parse_file(self, path: Union[str, Path]) -> Interchange:
        # Detection and tokenizing each get their own handle.
        logger.info(f"Parsing X12 file: {path}")
        with open(path, "rb") as f:
            terminator = self.detector.detect(f)
        with open(path, "rb") as f:
            return self._parse_with_terminator(f, terminator)

    def parse_bytes(self, data: bytes) -> Interchange:
        return self.parse(io.BytesIO(data))

    # --- Pipeline ---

    def _parse_with_terminator(self, stream: BinaryIO, terminator: bytes) -> Interchange:
        try:
            segment_terminator = terminator.decode(self.config.encoding)
        except UnicodeDecodeError as e:
            raise SegmentDecodeError(self.config.encoding, reason=str(e.reason)) from e
        segments = self._read_segments(stream, terminator)
        logger.debug(f"Read {len(segments)} segments using terminator {terminator!r}")
        interchange = self._build_interchange(segments, segment_terminator)
        logger.info(
            f"Parsed interchange {interchange.control_number!r}: "
            f"{len(interchange.functional_groups)} functional groups, "
            f"{sum(len(g.transaction_sets) for g in interchange.functional_groups)} transaction sets"
        )
        return interchange

    def _read_segments(self, stream: BinaryIO, terminator: bytes) -> List[Segment]:
        records = iter_raw_segments(
            stream,
            terminator,
            encoding=self.config.encoding,
            ignore_line_breaks=self.config.ignore_line_breaks,
            chunk_size=self.config.chunk_size,
        )
        return [
            split_segment(record, self.config.element_separator, position=i + 1)
            for i, record in enumerate(records)
        ]

    def _build_interchange(self, segments: List[Segment], segment_terminator: str) -> Interchange:
        if not segments:
            raise EnvelopeMismatchError("ISA", None)

        header, trailer = segments[0], segments[-1]
        if header.id != "ISA":
            raise EnvelopeMismatchError("ISA", header.id, header.position)
        if trailer.id != "IEA":
            raise EnvelopeMismatchError("IEA", trailer.id, trailer.position)

        functional_groups = self._get_functional_groups(segments[1:-1])
        return Interchange(
            header=header,
            trailer=trailer,
            functional_groups=functional_groups,
            segment_terminator=segment_terminator,
        )

    def _split_on_trailer(self, segments: List[Segment], trailer_id: str, container: str) -> List[List[Segment]]:
        """Cuts a flat segment list into buffers, each closed by a segment with trailer_id."""
        buffers: List[List[Segment]] = []
        buffer: List[Segment] = []
        for segment in segments:
            buffer.append(segment)
            if segment.id == trailer_id:
                buffers.append(buffer)
                buffer = []

        if buffer:
            logger.debug(f"Unclosed {container} starting at segment {buffer[0].position} ('{buffer[0].id}')")
            raise IncompleteGroupingError(len(buffer), container, buffer[0].id)
        return buffers

    def _get_functional_groups(self, segments: List[Segment]) -> List[FunctionalGroup]:
        return [
            self._build_functional_group(buffer)
            for buffer in self._split_on_trailer(segments, "GE", "functional group")
        ]

    def _get_transaction_sets(self, segments: List[Segment]) -> List[TransactionSet]:
        return [
            self._build_transaction_set(buffer)
            for buffer in self._split_on_trailer(segments, "SE", "transaction set")
        ]

    @staticmethod
    def _check_boundaries(segments: List[Segment], header_id: str, trailer_id: str) -> None:
        # Re-checked here even though the scan only closes a buffer on its trailer id.
        header, trailer = segments[0], segments[-1]
        if header.id != header_id:
            raise BoundaryMismatchError(header_id, header.id, header.position)
        if trailer.id != trailer_id:
            raise BoundaryMismatchError(trailer_id, trailer.id, trailer.position, closing=True)

    def _build_functional_group(self, segments: List[Segment]) -> FunctionalGroup:
        self._check_boundaries(segments, "GS", "GE")
        header, trailer = segments[0], segments[-1]
        logger.debug(f"Functional group {header.get_element(6)!r}: {len(segments)} segments")
        return FunctionalGroup(
            header=header,
            trailer=trailer,
            transaction_sets=self._get_transaction_sets(segments[1:-1]),
        )

    def _build_transaction_set(self, segments: List[Segment]) -> TransactionSet:
        self._check_boundaries(segments, "ST", "SE")
        header, trailer = segments[0], segments[-1]
        if self.config.body_slicing == BodySlicing.STRICT:
            body = segments[1:-1]
        else:
            body = segments[1:-2]
        logger.debug(f"Transaction set {header.get_element(2)!r}: {len(body)} body segments")
        return TransactionSet(header=header, trailer=trailer, body=body)


def parse_file(path: Union[str, Path], config: Optional[ParserConfig] = None) -> Interchange:
    return X12Parser(config).parse_file(path)


def parse_bytes(data: bytes, config: Optional[ParserConfig] = None) -> Interchange:
    return X12Parser(config).parse_bytes(data)
