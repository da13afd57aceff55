class PNGStructException(Exception):
    '''Base class to extend in order to throw exception in pngstruct.

    It takes as first argument the chain of the layers that caused the exception,
    innermost first: each Chunk the exception passes through appends the name of
    the field it was unpacking, so that at the top we know the full path.
    '''

    def __init__(self, chain, reason=None):
        self.chain = chain
        self.reason = reason
        super().__init__(reason)

    @property
    def path(self) -> str:
        return '.'.join(reversed(self.chain))

    def __str__(self):
        reason = self.reason or self.__class__.__name__
        if not self.chain:
            return reason

        return f'{self.path}: {reason}'


class SourceUnavailable(PNGStructException):
    '''The input can not be opened or read at all.'''
    pass


class BadSignature(PNGStructException):
    '''The magic at the start of the stream is not the expected one.'''
    pass


class Truncated(PNGStructException):
    '''Fewer bytes are available than the format requires.'''
    pass


class MalformedChunk(PNGStructException):
    '''The payload violates the fixed contract of its chunk.'''
    pass
