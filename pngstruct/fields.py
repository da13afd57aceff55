"""
A Field is "fundamental" datatype from the format point of view, something directly
unpackable from the stream without need of sub-components.
"""
import logging
import struct
from enum import Flag, auto

from .enum import Compliant
from .meta import FieldBase, Endianess
from .properties import ChunkPhase, PropertyDescriptor
from .exceptions import PNGStructException, BadSignature, MalformedChunk


class Field(FieldBase):
    """Base class to subclass from"""

    declared_size = PropertyDescriptor('declared_size', int)

    def __init__(self, *args, name=None, father=None, default=None, offset=None, size=None,
                 endianess=Endianess.LITTLE_ENDIAN, compliant=Compliant.INHERIT, is_magic=False):
        super().__init__()
        self._phase = ChunkPhase.INIT
        self.logger = logging.getLogger(__name__)
        self.name = name
        self.father = father
        self.default = default
        self.offset = offset
        self.declared_size = size  # the size the container says this field has, if any
        self.endianess = endianess
        self.compliant = compliant
        self.is_magic = is_magic

        self.init()

    def init(self):
        self.value = self.value_from_default()

    def value_from_default(self):
        return self.default

    def __str__(self):
        return str(self.value)

    def is_compliant(self, level):
        '''Returns True if this field, or the first ancestor not inheriting, requires the level'''
        instance = self
        # an empty ArrayField is falsy
        while instance is not None:
            if instance.compliant & level:
                return True
            if not instance.compliant & Compliant.INHERIT:
                break

            instance = instance.father

        return False

    def _get_size(self):
        raise NotImplementedError(f"method {self.__class__.__name__}._get_size() not implemented")

    size = property(
        fget=lambda self: self._get_size(),
    )

    def unpack(self, stream):
        raise NotImplementedError('you need to implement this in the subclass')


class StructField(Field):
    """
    Simplest of the fields: mimic the behaviour of the struct module unpacking
    integers from bytes.

    The main advantage is the possibility to indicate via the "enum" argument some subclass
    of enum.Enum so to have directly a representation of the integer value of the field itself.
    """

    def __init__(self, format, default=0, enum=None, **kw):
        self.format = format
        self.enum = enum
        super().__init__(default=default, **kw)

    def __repr__(self):
        if self.enum and isinstance(self.value, self.enum):
            return f'<{self.__class__.__name__}({self.value!r})>'

        return '<%s(%s)>' % (self.__class__.__name__, hex(self.value))

    def value_from_default(self):
        if not self.enum:
            return super().value_from_default()

        return self.enum(self.default)

    def get_format(self):
        return '%s%s' % (self.endianess.struct_prefix, self.format)

    def _get_size(self):
        return struct.calcsize(self.get_format())

    def _unpack_enum(self, value: int):
        try:
            return self.enum(value)
        except ValueError:
            if self.is_compliant(Compliant.ENUM):
                raise MalformedChunk(chain=[], reason=f'0x{value:x} is not a valid {self.enum.__name__}')

            self.logger.warning(f'enum {self.enum.__name__} doesn\'t have element with value 0x{value:x} in it')

        return value

    def unpack(self, stream):
        raw = stream.read_exact(self.size)
        value = struct.unpack(self.get_format(), raw)[0]

        if self.enum:
            value = self._unpack_enum(value)

        self.value = value


class StringField(Field):
    """Represent a contiguous chunk of bytes."""

    length = PropertyDescriptor('length', int)

    def __init__(self, n=None, **kw):
        if n is None and 'default' not in kw:
            raise ValueError(f"StringField must have 'n' or 'default' indicated!")

        self.length = n if n is not None else len(kw['default'])

        super().__init__(**kw)

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, repr(self.value))

    def value_from_default(self):
        return self.default or b''

    def _get_size(self):
        return self.length

    def unpack(self, stream):
        value = stream.read_exact(self.length)

        if self.is_magic and value != self.default:
            raise BadSignature(chain=[], reason=f'expected {self.default!r}, found {value!r}')

        self.value = value


class SkipField(Field):
    '''Bytes that are consumed from the stream but never kept.'''

    length = PropertyDescriptor('length', int)

    def __init__(self, n, **kw):
        self.length = n
        super().__init__(**kw)

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.length})>'

    def _get_size(self):
        return self.length

    def unpack(self, stream):
        self.logger.debug('skipping %d bytes at offset %d' % (self.length, stream.tell()))
        stream.skip(self.length)


class TextField(Field):
    '''A keyword and a text separated by the first NUL byte, the text is
    not terminated and takes the rest of the payload.

    The keyword has a maximum length, anything longer is rejected.'''

    length = PropertyDescriptor('length', int)

    def __init__(self, n, max_keyword_length=79, encoding='latin-1', **kw):
        self.length = n
        self.max_keyword_length = max_keyword_length
        self.encoding = encoding
        super().__init__(**kw)

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.value[0]!r}, {self.value[1]!r})>'

    def value_from_default(self):
        return self.default or (b'', b'')

    def _get_size(self):
        return self.length

    @property
    def keyword(self) -> str:
        return self.value[0].decode(self.encoding)

    @property
    def text(self) -> str:
        return self.value[1].decode(self.encoding)

    def unpack(self, stream):
        length = self.length
        if length == 0:
            raise MalformedChunk(chain=[], reason='empty payload, nothing to split in keyword and text')

        payload = stream.read_exact(length)

        keyword, separator, text = payload.partition(b'\x00')
        if not separator:
            raise MalformedChunk(chain=[], reason='no NUL separator between keyword and text')

        if len(keyword) > self.max_keyword_length:
            raise MalformedChunk(
                chain=[],
                reason=f'keyword is {len(keyword)} bytes long (max {self.max_keyword_length})')

        self.value = (keyword, text)


class ArrayField(Field):
    '''Unpack an array of Chunks.

    You can indicate an explicit number of elements via the parameter named "n"
    (an integer or a Dependency), otherwise elements are unpacked until the
    stream is exhausted: the end of the stream is legit only between two elements.
    '''

    n = PropertyDescriptor('n', int)

    def __init__(self, field_cls, n=None, **kw):
        self.field_cls = field_cls
        self.n = n

        super().__init__(**kw)

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.value!r})>'

    def __getitem__(self, item):
        return self.value[item]

    def __len__(self):
        return len(self.value)

    def __iter__(self):
        return iter(self.value)

    def value_from_default(self):
        return []

    def _get_size(self):
        return sum(element.size for element in self.value)

    def instance_element(self):
        return self.field_cls.create(father=self)  # pass the father so that we don't lose the hierarchy

    def append(self, element):
        element.father = self
        self.value.append(element)

    def _is_there_more(self, stream):
        n = self.n
        if n is None:
            return not stream.at_eof()

        return len(self.value) < n

    def unpack(self, stream):
        self.value = []
        while self._is_there_more(stream):
            idx = len(self.value)
            element = self.instance_element()
            element.offset = stream.tell()

            self.logger.debug('unpacking element %d of \'%s\' at offset %d' % (idx, self.name, element.offset))

            try:
                element.unpack(stream)
            except PNGStructException as e:
                e.chain.append(str(idx))
                raise

            self.append(element)


class SelectField(Field):
    """Allow to select the kind of final field based on the value of another field.
    You need to pass a Dependency pointing to the field to use as key and a dictionary
    with the mapping between its value and a triple (field class, args, kwargs).
    You can use Type.DEFAULT as a default.

    Like in the following example we have a format that uses the first 4 bytes to indicate what
    follows: for b'INTG' you have another 4 bytes, otherwise you have a blob as long as
    the field length says

        type2field = {
            b'INTG': (fields.StructField, ('I',), {}),
            SelectField.Type.DEFAULT: (fields.StringField, (Dependency('.length'),), {}),
        }

        class DummyChunk(Chunk):
            type = fields.StringField(4)
            length = fields.StructField('I')
            data = fields.SelectField(Dependency('.type'), type2field)

    The selected field has as father the father of the SelectField, so its Dependency
    expressions are relative to the same chunk.
    """
    class Type(Flag):
        DEFAULT = auto()

    def __init__(self, key, mapping, **kwargs):
        self._key = key
        self._mapping = mapping

        super().__init__(**kwargs)

    def __repr__(self):
        return f'<{self.__class__.__name__}{self._field!r}>'

    def init(self):
        self._field = None

    @property
    def field(self):
        return self._field

    @property
    def value(self):
        return self._field.value if self._field is not None else None

    def _get_size(self) -> int:
        return self._field.size if self._field is not None else 0

    def unpack(self, stream):
        self.logger.debug('resolving key %r' % self._key)
        key_value = self._key.resolve(self)

        key = key_value if key_value in self._mapping else SelectField.Type.DEFAULT

        self.logger.debug('using key \'%s\' (original was \'%s\')' % (key, key_value))

        field_class, args, kwargs = self._mapping[key]
        self._field = field_class(*args, **kwargs)
        self._field.father = self.father
        self._field.name = self.name
        self._field.offset = stream.tell()

        self._field.unpack(stream)
        self.logger.debug(f'unpacked {self._field!r}')
