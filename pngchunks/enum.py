from enum import Enum


class ChunkTypeFlag(Enum):
    '''Each byte of a chunk type carries a property in its bit 5 (value 0x20),
    the value of the member is the index of the byte.'''
    ANCILLARY    = 0
    PRIVATE      = 1
    RESERVED     = 2
    SAFE_TO_COPY = 3
