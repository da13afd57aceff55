"""
Core module for the abstraction of a file format

"""
from typing import Tuple, List, Dict

from .fields import Field
from .meta import MetaChunk
from .streams import Stream
from .exceptions import (
    PNGStructException,
    MalformedChunk,
)
from .properties import (
    get_root_from_chunk,
    ChunkPhase,
)


class Chunk(Field, metaclass=MetaChunk):
    """
    Together with Field is the main class that defines a format: a Chunk is
    a sequence of fields (or other chunks) unpacked one after the other
    from the same stream.

    If the container knows in advance how many bytes the chunk occupies
    (via the "size" argument, usually a Dependency) the chunk refuses to
    unpack when that doesn't match its own fixed size.

    Passing a source (path, bytes or file object) to the constructor
    unpacks it immediately.
    """

    def __init__(self, source=None, **kwargs):
        super().__init__(**kwargs)

        if source is not None:
            self.logger.debug('unpacking \'%s\' from %s' % (self.__class__.__name__, type(source).__name__))
            with Stream(source) as stream:
                self.unpack(stream)

    def init(self):
        # the fields are created lazily by their descriptors
        pass

    def get_ordered_fields_name(self) -> List[str]:
        return self._meta.fields

    def get_fields(self) -> List[Tuple[str, Field]]:
        '''It returns a list of couples (name, instance) for each field.'''
        return [(_, getattr(self, _)) for _ in self.get_ordered_fields_name()]

    @property
    def value(self) -> Dict[str, object]:
        return {name: field.value for name, field in self.get_fields()}

    def __repr__(self):
        msg = []
        for field_name, field in self.get_fields():
            msg.append('%s=%s' % (field_name, repr(field)))
        return '<%s(%s)>' % (self.__class__.__name__, ','.join(msg))

    def __str__(self):
        msg = ''
        for field_name, field in self.get_fields():
            msg += '%s: %s\n' % (field_name, repr(field))
        return msg

    @property
    def root(self):
        '''Obtain the final father of this chunk'''
        return get_root_from_chunk(self)

    def _get_size(self):
        '''the size is derived from the subchunks'''
        return sum(field.size for _, field in self.get_fields())

    @property
    def layout(self) -> Dict[str, Tuple[int, int]]:
        result = {}
        for name, field in self.get_fields():
            result[name] = (field.offset, field.size)

        return result

    def _check_declared_size(self):
        declared = self.declared_size
        if declared is None:
            return

        if declared != self.size:
            raise MalformedChunk(
                chain=[],
                reason=f'{self.__class__.__name__} must be {self.size} bytes long, declared {declared}')

    def validate(self):
        '''Called once all the fields are unpacked, override to check
        constraints between fields; raise to refuse the data.'''
        pass

    def unpack(self, stream):
        '''This is one of the main APIs to take care of: its aim is to take a binary
        data and transform in the representation given by the class this method
        is implemented.

        The fields are unpacked in order from the current position of the stream,
        the first error stops everything: the exception is re-raised with the name
        of the field appended to its chain.
        '''
        self._phase = ChunkPhase.UNPACKING
        self.offset = stream.tell()

        try:
            self._check_declared_size()

            for field_name, field in self.get_fields():
                field.offset = stream.tell()
                self.logger.debug('unpacking %s.%s at offset %d' % (self.__class__.__name__, field_name, field.offset))

                try:
                    field.unpack(stream)
                except PNGStructException as e:
                    e.chain.append(field_name)
                    raise

            self.validate()
        except PNGStructException:
            self._phase = ChunkPhase.ERROR
            raise

        self._phase = ChunkPhase.DONE
