'''
The type of a chunk is a 4-byte code restricted to the ASCII letters
(A-Z and a-z): the case of each letter, i.e. its bit 5, encodes a property
of the chunk.

 1. ancillary bit: uppercase means critical, a decoder must understand the chunk
 2. private bit: uppercase means public, i.e. registered by the standard
 3. reserved bit: must be uppercase to conform to the current version
 4. safe-to-copy bit: lowercase means that editors can copy the chunk even
    if they don't recognize it

See <http://www.libpng.org/pub/png/spec/1.2/PNG-Structure.html#Chunk-naming-conventions>.
'''
import logging

from bitstring import BitArray

from .enum import ChunkTypeFlag
from .exceptions import InvalidTypeByte, InvalidTypeLength


logger = logging.getLogger(__name__)

CHUNK_TYPE_SIZE = 4
# bit 5 counted from the most significant one
PROPERTY_BIT = 7 - 5


def is_ascii_alphabetic(value: int) -> bool:
    return 0x41 <= value <= 0x5a or 0x61 <= value <= 0x7a


class ChunkType(object):

    def __init__(self, raw: bytes):
        if not isinstance(raw, (bytes, bytearray, memoryview)):
            raise TypeError(f'chunk type must be built from bytes, not {raw.__class__.__name__}')

        raw = bytes(raw)

        if len(raw) != CHUNK_TYPE_SIZE:
            raise InvalidTypeLength(
                chain=[], msg=f'chunk type must be {CHUNK_TYPE_SIZE} bytes, got {len(raw)}')

        for value in raw:
            if not is_ascii_alphabetic(value):
                raise InvalidTypeByte(chain=[], msg=f'0x{value:02x} is not ascii alphabetic')

        self._raw = raw
        self._bits = BitArray(self._raw)

    @classmethod
    def from_bytes(cls, raw) -> "ChunkType":
        chunk_type = cls(raw)

        if not chunk_type.is_valid():
            logger.warning('chunk type %s has the reserved bit set', chunk_type)

        return chunk_type

    @classmethod
    def from_str(cls, value: str) -> "ChunkType":
        if len(value) != CHUNK_TYPE_SIZE:
            raise InvalidTypeLength(
                chain=[], msg=f'chunk type must be {CHUNK_TYPE_SIZE} characters, got {value!r}')

        for char in value:
            if not (char.isascii() and char.isalpha()):
                raise InvalidTypeByte(chain=[], msg=f'{char!r} is not ascii alphabetic')

        return cls.from_bytes(value.encode('ascii'))

    @property
    def raw(self) -> bytes:
        return self._raw

    def __bytes__(self):
        return self._raw

    def __str__(self):
        return self._raw.decode('ascii')

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, self)

    def __eq__(self, other):
        if not isinstance(other, ChunkType):
            return NotImplemented

        return self._raw == other._raw

    def __hash__(self):
        return hash(self._raw)

    def _is_set(self, flag: ChunkTypeFlag) -> bool:
        return self._bits[flag.value * 8 + PROPERTY_BIT]

    def is_critical(self) -> bool:
        return not self._is_set(ChunkTypeFlag.ANCILLARY)

    def is_public(self) -> bool:
        return not self._is_set(ChunkTypeFlag.PRIVATE)

    def is_reserved_bit_valid(self) -> bool:
        return not self._is_set(ChunkTypeFlag.RESERVED)

    def is_safe_to_copy(self) -> bool:
        return self._is_set(ChunkTypeFlag.SAFE_TO_COPY)

    def is_valid(self) -> bool:
        return self.is_reserved_bit_valid()
