'''
# Portable Network Graphics

The file is a fixed signature followed by a sequence of chunks: here we don't
give any meaning to the chunks (IHDR, IDAT and IEND are chunks as any other)
so the only guarantee is that the framing of the chunks is right.

The specification is at <http://www.libpng.org/pub/png/spec/1.2/PNG-Contents.html>.
'''
import logging
from typing import List, Optional

from . import fields
from .chunk import Chunk
from .exceptions import (
    ChunkException,
    ChunkNotFound,
    InvalidSignature,
    Truncated,
)
from .streams import Stream


logger = logging.getLogger(__name__)

PNG_SIGNATURE = b'\x89\x50\x4e\x47\x0d\x0a\x1a\x0a'


class ChunkStream(object):
    '''In-memory representation of the whole file: the signature and the
    chunks in the order they appear.'''
    signature_field = fields.StringField(len(PNG_SIGNATURE), name='signature')

    def __init__(self, chunks=None):
        self._chunks: List[Chunk] = list(chunks) if chunks else []

    @property
    def signature(self) -> bytes:
        return PNG_SIGNATURE

    @property
    def chunks(self):
        '''Read-only view of the chunks.'''
        return tuple(self._chunks)

    def __len__(self):
        return len(self._chunks)

    def __iter__(self):
        return iter(self._chunks)

    def __eq__(self, other):
        if not isinstance(other, ChunkStream):
            return NotImplemented

        return self._chunks == other._chunks

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, ','.join([repr(_) for _ in self._chunks]))

    def __str__(self):
        return '\n'.join(['[%02d] %s' % (idx, chunk) for idx, chunk in enumerate(self._chunks)])

    def append(self, chunk: Chunk):
        self._chunks.append(chunk)

    def insert(self, index: int, chunk: Chunk):
        self._chunks.insert(index, chunk)

    def _index_by_type(self, chunk_type: str) -> Optional[int]:
        for idx, chunk in enumerate(self._chunks):
            if str(chunk.chunk_type) == chunk_type:
                return idx

        return None

    def find_by_type(self, chunk_type: str) -> Optional[Chunk]:
        '''Returns the first chunk with the given type, None if there is not.'''
        idx = self._index_by_type(chunk_type)

        return self._chunks[idx] if idx is not None else None

    def remove_by_type(self, chunk_type: str) -> Chunk:
        '''Removes the first chunk with the given type and returns it.'''
        idx = self._index_by_type(chunk_type)

        if idx is None:
            raise ChunkNotFound(chain=[], msg=f'no chunk with type {chunk_type}')

        logger.debug('removing chunk %s at index %d', chunk_type, idx)

        return self._chunks.pop(idx)

    def pack(self) -> bytes:
        return PNG_SIGNATURE + b''.join([chunk.pack() for chunk in self._chunks])

    def serialize(self) -> bytes:
        return self.pack()

    @classmethod
    def unpack(cls, stream: Stream) -> "ChunkStream":
        '''Read the signature and then the chunks until the end of the stream.

        Any failure aborts the whole parsing, the chain of the exception tells
        the index of the chunk that failed.'''
        try:
            signature = cls.signature_field.unpack(stream)
        except Truncated as e:
            raise InvalidSignature(chain=e.chain, msg='stream is too short for the signature') from e

        if signature != PNG_SIGNATURE:
            raise InvalidSignature(chain=['signature'], msg=f'wrong signature {signature!r}')

        chunks = []
        while not stream.at_end():
            offset = stream.tell()
            try:
                chunk = Chunk.unpack(stream)
            except ChunkException as e:
                e.chain.append('chunks[%d]' % len(chunks))
                raise

            logger.debug('chunk %d at offset %d: %r', len(chunks), offset, chunk)
            # the cursor must advance of exactly the encoded size
            stream.seek(offset + chunk.size)
            chunks.append(chunk)

        return cls(chunks)

    @classmethod
    def parse(cls, raw) -> "ChunkStream":
        return cls.unpack(Stream(raw))
