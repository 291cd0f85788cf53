"""
# PNG chunks manipulation.

A PNG file is a fixed signature followed by a stream of chunks, each one
made of

 1. length: big-endian 32 bits unsigned integer
 2. type: four ASCII letters whose case encodes properties of the chunk
 3. data: length bytes
 4. crc: big-endian CRC-32 of type and data

This package allows to insert, retrieve, remove and list chunks without
touching the rest of the file: parsing and then packing a file gives back
the same bytes.

Two operations are defined on the chunks and on the whole file

 1. unpack(): read the binary data from a stream and build the high-level
    representation of it, failing at the first field that is not right.

 2. pack(): encode the high-level representation into binary data.
"""
from .chunk_type import ChunkType
from .chunk import Chunk
from .container import ChunkStream, PNG_SIGNATURE
from .exceptions import (
    ChunkException,
    ChunkNotFound,
    CrcMismatch,
    InvalidSignature,
    InvalidTypeByte,
    InvalidTypeLength,
    LengthOverflow,
    Truncated,
)
