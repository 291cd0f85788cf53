'''
Operations on PNG files: the file is read, parsed as a ChunkStream, modified
and written back. Errors reading or writing the files are not handled here.
'''
import logging
from pathlib import Path
from typing import List, Optional

from .chunk import Chunk
from .chunk_type import ChunkType
from .container import ChunkStream


logger = logging.getLogger(__name__)


def read_png(path) -> ChunkStream:
    logger.debug('reading \'%s\'', path)
    return ChunkStream.parse(Path(path).read_bytes())


def write_png(path, png: ChunkStream):
    logger.debug('writing %d chunks to \'%s\'', len(png), path)
    Path(path).write_bytes(png.serialize())


def encode(path, chunk_type: str, message: str, output_path=None) -> Chunk:
    '''Append a chunk with the message as data, by default the file is overwritten.'''
    png = read_png(path)

    chunk = Chunk(ChunkType.from_str(chunk_type), message.encode('utf-8'))
    png.append(chunk)

    write_png(output_path or path, png)

    return chunk


def decode(path, chunk_type: str) -> Optional[str]:
    chunk = read_png(path).find_by_type(chunk_type)

    return chunk.data_as_string() if chunk else None


def remove(path, chunk_type: str) -> Chunk:
    png = read_png(path)

    chunk = png.remove_by_type(chunk_type)

    write_png(path, png)

    return chunk


def print_chunks(path) -> List[Chunk]:
    return list(read_png(path).chunks)
