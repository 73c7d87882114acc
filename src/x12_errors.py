from typing import Optional


class X12ParseError(Exception):
    """Base class for every fatal parse failure. A parse that raises never yields a partial tree."""


class TerminatorNotFoundError(X12ParseError):
    def __init__(self, detector: str, detail: str = ""):
        self.detector = detector
        message = "Could not identify segment terminator"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class EnvelopeMismatchError(X12ParseError):
    """The outermost segments are not ISA ... IEA."""

    def __init__(self, expected_id: str, found_id: Optional[str], position: Optional[int] = None):
        self.expected_id = expected_id
        self.found_id = found_id
        self.position = position
        where = "first" if expected_id == "ISA" else "last"
        if found_id is None:
            message = f"Expected {expected_id} as {where} segment, document contains no segments"
        else:
            message = f"Expected {expected_id} as {where} segment, not {found_id}"
        super().__init__(message)


class BoundaryMismatchError(X12ParseError):
    """A buffered functional group or transaction set does not open/close with the expected id."""

    def __init__(self, expected_id: str, found_id: str, position: Optional[int] = None, closing: bool = False):
        self.expected_id = expected_id
        self.found_id = found_id
        self.position = position
        self.closing = closing
        where = "last" if closing else "first"
        message = f"Expected {expected_id} as {where} segment, not {found_id}"
        if position:
            message = f"{message} (segment {position})"
        super().__init__(message)


class IncompleteGroupingError(X12ParseError):
    """Segments were left in the scan buffer with no closing segment."""

    def __init__(self, count: int, container: str, first_segment_id: Optional[str] = None):
        self.count = count
        self.container = container
        self.first_segment_id = first_segment_id
        super().__init__(f"Found {count} segments outside of {container}.")


class SegmentDecodeError(X12ParseError):
    """A raw record (or the terminator byte) cannot be decoded with the configured encoding."""

    def __init__(self, encoding: str, position: Optional[int] = None, offset: Optional[int] = None, reason: str = ""):
        self.encoding = encoding
        self.position = position
        self.offset = offset
        location = f"segment {position}" if position else "segment terminator"
        message = f"Cannot decode {location} as {encoding}"
        if offset is not None:
            message = f"{message}: invalid byte at offset {offset}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class MalformedSegmentError(X12ParseError):
    def __init__(self, record: str, separator: str, position: Optional[int] = None):
        self.record = record
        self.separator = separator
        self.position = position
        location = f" at position {position}" if position else ""
        super().__init__(f"Malformed segment{location}: no element separator '{separator}' in {record!r}")
