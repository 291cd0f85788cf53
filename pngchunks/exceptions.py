class ChunkException(Exception):
    '''Base class to extend in order to throw exception in pngchunks.

    It takes as first argument the chain of the layers that caused the
    exception: the innermost layer comes first and each layer the exception
    bubbles through appends its own name.
    '''

    def __init__(self, chain, msg=None):
        self.chain = chain
        self.msg = msg
        super().__init__(msg)

    @property
    def path(self):
        return '.'.join(reversed(self.chain))

    def __str__(self):
        msg = self.msg or self.__class__.__name__
        if not self.chain:
            return msg

        return f'{msg} (at {self.path})'


class InvalidSignature(ChunkException):
    pass


class LengthOverflow(ChunkException):
    pass


class Truncated(ChunkException):
    pass


class InvalidTypeByte(ChunkException):
    pass


class InvalidTypeLength(ChunkException):
    pass


class CrcMismatch(ChunkException):

    def __init__(self, chain, expected, calculated):
        self.expected = expected
        self.calculated = calculated
        super().__init__(chain, msg=f'crc does not match: expected 0x{expected:08x}, calculated 0x{calculated:08x}')


class ChunkNotFound(ChunkException):
    '''This is raised when a chunk type is not present: the caller is
    expected to recover from it.'''
    pass
