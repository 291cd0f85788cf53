import io
import logging


logger = logging.getLogger(__name__)


class Stream(object):
    '''This is a simple wrapper around binary buffers to uniform their
    properties: mainly we need to know how many bytes are left to read.'''
    def __init__(self, obj):
        '''Here we normalize the object in order to be accessed as a normal file object'''
        self._type = type(obj)
        self.obj = obj

        init_method_name = 'init_%s' % self.obj.__class__.__name__

        init_method = getattr(self, init_method_name, None)

        if init_method is None:
            raise ValueError('\'%s\' is the wrong kind of object to use as stream' % self._type.__name__)

        init_method()
        logger.debug('stream over %s of %d bytes', self._type.__name__, self.remaining())

    def __getattr__(self, name):
        return getattr(self.obj, name)

    def __repr__(self):
        return '<%s(%s, offset=%d)>' % (self.__class__.__name__, self._type.__name__, self.tell())

    def init_bytes(self):
        '''We think these are raw bytes'''
        self.obj = io.BytesIO(self.obj)

    def init_bytearray(self):
        self.obj = io.BytesIO(bytes(self.obj))

    def init_memoryview(self):
        self.obj = io.BytesIO(self.obj.tobytes())

    def init_BytesIO(self):
        pass

    def seek(self, offset):
        if not isinstance(offset, int):
            raise ValueError('\'%s\' is the wrong kind of offset to use' % offset.__class__.__name__)

        self.obj.seek(offset)

    def remaining(self):
        '''Number of bytes between the actual offset and the end of the stream.'''
        with self.obj.getbuffer() as view:
            return view.nbytes - self.obj.tell()

    def at_end(self):
        return self.remaining() == 0
