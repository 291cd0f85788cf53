import logging

from . import fields
from .common import crc
from .chunk_type import ChunkType, CHUNK_TYPE_SIZE
from .exceptions import (
    ChunkException,
    CrcMismatch,
    LengthOverflow,
)
from .streams import Stream


logger = logging.getLogger(__name__)

MAX_LENGTH = 2 ** 31


class Chunk(object):
    '''This is the main data structure of the format: the 4 fields represent
    a chunk into the file. Each integer field is intended big-endian.

     1. length: number of bytes of the data field, it must be less than 2^31
     2. type: see ChunkType
     3. data: opaque payload
     4. crc: network-byte-order CRC-32 computed over the chunk type and chunk data, but not the length

    An instance is immutable: the crc is always the one calculated from type and data.
    '''
    length_field = fields.StructField('I', name='length')
    type_field   = fields.StringField(CHUNK_TYPE_SIZE, name='type')
    crc_field    = fields.StructField('I', name='crc')

    def __init__(self, chunk_type: ChunkType, data: bytes):
        if not isinstance(chunk_type, ChunkType):
            raise TypeError(f'chunk_type must be a ChunkType, not {chunk_type.__class__.__name__}')

        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError(f'data must be bytes, not {data.__class__.__name__}')

        data = bytes(data)
        if len(data) >= MAX_LENGTH:
            raise LengthOverflow(chain=['data'], msg=f'data of {len(data)} bytes cannot be framed in a chunk')

        self._chunk_type = chunk_type
        self._data = data
        self._crc = self.calculate_crc(chunk_type, data)

    @staticmethod
    def calculate_crc(chunk_type: ChunkType, data: bytes) -> int:
        return crc.calculate(chunk_type.raw, data)

    @property
    def length(self) -> int:
        return len(self._data)

    @property
    def chunk_type(self) -> ChunkType:
        return self._chunk_type

    @property
    def data(self) -> bytes:
        return self._data

    @property
    def crc(self) -> int:
        return self._crc

    @property
    def size(self) -> int:
        '''Number of bytes of the encoded chunk.'''
        return self.length_field.size + self.type_field.size + self.length + self.crc_field.size

    def is_critical(self):
        return self._chunk_type.is_critical()

    def data_as_string(self) -> str:
        '''The payload is opaque, if it's not UTF-8 we fall back to its hex representation.'''
        try:
            return self._data.decode('utf-8')
        except UnicodeDecodeError:
            return self._data.hex()

    def pack(self) -> bytes:
        return b''.join([
            self.length_field.pack(self.length),
            self._chunk_type.raw,
            self._data,
            self.crc_field.pack(self._crc),
        ])

    raw = property(fget=lambda self: self.pack())

    @classmethod
    def unpack(cls, stream: Stream) -> "Chunk":
        '''Read a chunk starting at the actual offset of the stream.

        The fields are read in order and the first one that is not right
        makes the whole chunk fail: the exception raised has the name of
        the field in its chain.'''
        offset = stream.tell()
        logger.debug('unpacking chunk at offset %d', offset)

        length = cls.length_field.unpack(stream)
        if length >= MAX_LENGTH:
            raise LengthOverflow(chain=['length'], msg=f'length 0x{length:08x} exceeds 2^31')

        raw_type = cls.type_field.unpack(stream)
        try:
            chunk_type = ChunkType.from_bytes(raw_type)
        except ChunkException as e:
            e.chain.append('type')
            raise

        data = fields.StringField(length, name='data').unpack(stream)

        expected = cls.crc_field.unpack(stream)
        calculated = cls.calculate_crc(chunk_type, data)
        if expected != calculated:
            raise CrcMismatch(chain=['crc'], expected=expected, calculated=calculated)

        chunk = cls(chunk_type, data)
        logger.debug('unpacked %r', chunk)

        return chunk

    @classmethod
    def parse(cls, raw) -> "Chunk":
        '''Parse a chunk from the beginning of raw, trailing bytes are ignored.'''
        return cls.unpack(Stream(raw))

    def __eq__(self, other):
        if not isinstance(other, Chunk):
            return NotImplemented

        return (self._chunk_type, self._data, self._crc) == (other._chunk_type, other._data, other._crc)

    def __hash__(self):
        return hash((self._chunk_type, self._data))

    def __repr__(self):
        return '<%s(length=%d,type=%s,crc=0x%08x)>' % (
            self.__class__.__name__,
            self.length,
            self._chunk_type,
            self._crc,
        )

    def __str__(self):
        return 'Length: %d, Chunk type: %s, Data: %s, Crc: %d' % (
            self.length,
            self._chunk_type,
            self.data_as_string(),
            self._crc,
        )
