import codecs
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DetectorKind(str, Enum):
    COMPONENT_SEPARATOR = "component-separator"
    ISA_POSITION = "isa-position"


class BodySlicing(str, Enum):
    """
    How the body of a transaction set is cut out of its ST..SE buffer.

    LEGACY drops the header and the last two segments, so the segment right
    before SE never reaches the body. STRICT keeps everything between ST and SE.
    """
    LEGACY = "legacy"
    STRICT = "strict"


class ParserConfig(BaseModel):
    """
    Parser options.

    ignore_line_breaks is on by default, so CR/LF bytes at the two edges of each
    record are removed (files commonly carry a newline after every terminator,
    and a leading CR/LF before ISA is skipped the same way). Turn it off to get
    every record exactly as its raw bytes decode; a newline after a terminator
    then becomes part of the next segment id.
    """
    model_config = ConfigDict(frozen=True)

    element_separator: str = Field("*", description="Character separating the elements of a segment.")
    detector: DetectorKind = DetectorKind.COMPONENT_SEPARATOR
    body_slicing: BodySlicing = BodySlicing.LEGACY
    encoding: str = Field("latin-1", description="Codec used to decode raw segment records.")
    ignore_line_breaks: bool = Field(True, description="Strip CR/LF at the edges of each record.")
    chunk_size: int = Field(4096, gt=0)

    @field_validator("element_separator")
    @classmethod
    def _single_character(cls, value: str) -> str:
        if len(value) != 1:
            raise ValueError("element_separator must be exactly one character")
        return value

    @field_validator("encoding")
    @classmethod
    def _known_codec(cls, value: str) -> str:
        try:
            codecs.lookup(value)
        except LookupError:
            raise ValueError(f"unknown encoding: {value}")
        return value
