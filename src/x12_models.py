from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Iterator, Optional, Tuple

# Parsed X12 document tree. Built once by the parser and never mutated; child collections are tuples.
# Serialized field names are camelCase (functionalGroups, transactionSets, segmentTerminator).


class X12Node(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    def to_json(self, indent: Optional[int] = None) -> str:
        return self.model_dump_json(by_alias=True, indent=indent)


class Element(X12Node):
    """A single data element. The id is positional and left empty by the parser."""
    id: str = ""
    value: str

    def __str__(self) -> str:
        return f'Element{{Id: "{self.id}", Value: "{self.value}"}}'


class Segment(X12Node):
    """One terminator-delimited record: a leading identifier followed by its elements."""
    id: str
    elements: Tuple[Element, ...] = ()
    position: int = Field(default=0, exclude=True)

    def get_element(self, position: int) -> Optional[str]:
        """Retrieves the value of an element by its position (1-based index)."""
        if 1 <= position <= len(self.elements):
            return self.elements[position - 1].value
        return None

    def to_raw(self, separator: str = "*") -> str:
        return separator.join([self.id] + [element.value for element in self.elements])

    def __str__(self) -> str:
        return self.to_json()


class TransactionSet(X12Node):
    header: Segment
    trailer: Segment
    body: Tuple[Segment, ...] = ()

    @property
    def control_number(self) -> Optional[str]:
        return self.header.get_element(2)


class FunctionalGroup(X12Node):
    header: Segment
    trailer: Segment
    transaction_sets: Tuple[TransactionSet, ...] = ()

    @property
    def control_number(self) -> Optional[str]:
        return self.header.get_element(6)


class Interchange(X12Node):
    header: Segment
    trailer: Segment
    functional_groups: Tuple[FunctionalGroup, ...] = ()
    segment_terminator: str

    @property
    def control_number(self) -> Optional[str]:
        return self.header.get_element(13)

    def iter_segments(self) -> Iterator[Segment]:
        """Yields every segment held by the tree in document order."""
        yield self.header
        for group in self.functional_groups:
            yield group.header
            for transaction_set in group.transaction_sets:
                yield transaction_set.header
                yield from transaction_set.body
                yield transaction_set.trailer
            yield group.trailer
        yield self.trailer
