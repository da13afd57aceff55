import io
import logging
import os

from .exceptions import SourceUnavailable, Truncated


logger = logging.getLogger(__name__)

# a single call to the underlying read() never asks for more than this,
# a declared length coming from the file must not become an allocation size
MAX_READ_SIZE = 0x10000


class Stream(object):
    '''This is a simple wrapper around bytes/path/file objects to
    uniform their properties: the cursor only moves forward and every
    read that can't be satisfied completely raises Truncated.

    A path is opened (and closed) by the stream itself, an already opened
    file object is left to its owner.'''
    def __init__(self, obj):
        '''Here we normalize the object in order to be accessed as a normal file object'''
        self._type = type(obj)
        self.obj = obj
        self._offset = 0
        self._pending = b''  # byte peeked by at_eof() and not consumed yet
        self._owned = False

        init_method_name = 'init_%s' % self.obj.__class__.__name__

        init_method = getattr(self, init_method_name, self.init_file)

        init_method()

    def __repr__(self):
        return '<%s(%s @ %d)>' % (self.__class__.__name__, self._type.__name__, self._offset)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def close(self):
        if self._owned:
            self.obj.close()

    def init_str(self):
        '''We think this is a path'''
        logger.debug('opening path \'%s\'' % self.obj)
        try:
            self.obj = open(self.obj, 'rb')
        except OSError as e:
            raise SourceUnavailable(chain=[], reason=f'can\'t open \'{self.obj}\': {e.strerror}') from e

        self._owned = True

    def init_PosixPath(self):
        self.obj = os.fspath(self.obj)
        self.init_str()

    init_WindowsPath = init_PosixPath

    def init_bytes(self):
        '''We think these are raw bytes'''
        self.obj = io.BytesIO(self.obj)

    init_bytearray = init_bytes
    init_memoryview = init_bytes

    def init_file(self):
        '''Anything else must already behave like a binary file'''
        if not hasattr(self.obj, 'read'):
            raise TypeError('\'%s\' can\'t be used as a stream' % self._type.__name__)

    def tell(self) -> int:
        return self._offset

    def _read_raw(self, n: int) -> bytes:
        try:
            return self.obj.read(n) or b''
        except OSError as e:
            raise SourceUnavailable(chain=[], reason=f'read failed at offset {self._offset}: {e}') from e

    def read(self, n: int) -> bytes:
        '''Read up to n bytes, fewer only if the stream ends.'''
        data = []
        remaining = n

        if self._pending and remaining > 0:
            data.append(self._pending)
            remaining -= len(self._pending)
            self._pending = b''

        while remaining > 0:
            piece = self._read_raw(min(remaining, MAX_READ_SIZE))
            if not piece:
                break
            data.append(piece)
            remaining -= len(piece)

        data = b''.join(data)
        self._offset += len(data)

        return data

    def read_exact(self, n: int) -> bytes:
        offset = self._offset
        data = self.read(n)

        if len(data) != n:
            raise Truncated(chain=[], reason=f'wanted {n} bytes at offset {offset}, got {len(data)}')

        return data

    def skip(self, n: int) -> None:
        '''Like read_exact() but without keeping the data around.'''
        offset = self._offset
        skipped = 0
        while skipped < n:
            piece = self.read(min(n - skipped, MAX_READ_SIZE))
            if not piece:
                break
            skipped += len(piece)

        if skipped != n:
            raise Truncated(chain=[], reason=f'wanted to skip {n} bytes at offset {offset}, got {skipped}')

    def at_eof(self) -> bool:
        '''True if not even a single byte is left; it works also with
        non-seekable objects since the peeked byte is kept for the next read.'''
        if self._pending:
            return False

        self._pending = self._read_raw(1)

        return not self._pending
