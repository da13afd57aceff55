from enum import IntEnum

import pytest

from pngstruct.enum import Compliant
from pngstruct.exceptions import BadSignature, MalformedChunk, Truncated
from pngstruct.fields import (
    ArrayField,
    SkipField,
    StringField,
    StructField,
    TextField,
)
from pngstruct.meta import Endianess
from pngstruct.streams import Stream


class DummyEnum(IntEnum):
    NONE = 0
    FIRST = 1
    SECOND = 2


def test_structfield_little_and_big_endian():
    field = StructField('I')
    field.unpack(Stream(b'\xfe\xca\x00\x00'))

    assert field.size == 4
    assert field.value == 0xcafe

    field = StructField('I', endianess=Endianess.BIG_ENDIAN)
    field.unpack(Stream(b'\x00\x00\xca\xfe'))

    assert field.value == 0xcafe


def test_structfield_truncated():
    field = StructField('I')

    with pytest.raises(Truncated):
        field.unpack(Stream(b'\x01\x02\x03'))


def test_structfield_enum():
    field = StructField('B', enum=DummyEnum)

    assert field.value == DummyEnum.NONE

    field.unpack(Stream(b'\x02'))

    assert field.value is DummyEnum.SECOND


def test_structfield_enum_unknown_value_is_kept():
    field = StructField('B', enum=DummyEnum)

    field.unpack(Stream(b'\x04'))

    assert field.value == 4
    assert not isinstance(field.value, DummyEnum)


def test_structfield_enum_compliant():
    field = StructField('B', enum=DummyEnum, compliant=Compliant.ENUM)

    with pytest.raises(MalformedChunk):
        field.unpack(Stream(b'\x04'))


def test_stringfield():
    field = StringField(0x10)

    assert field.size == 0x10
    assert field.value == b''

    data = bytes(range(0x10))
    field.unpack(Stream(data + b'trailing'))

    assert field.value == data


def test_stringfield_magic():
    field = StringField(default=b'MAGIC', is_magic=True)

    assert field.size == 5

    field.unpack(Stream(b'MAGIC'))

    with pytest.raises(BadSignature):
        StringField(default=b'MAGIC', is_magic=True).unpack(Stream(b'MAGIK'))

    with pytest.raises(Truncated):
        StringField(default=b'MAGIC', is_magic=True).unpack(Stream(b'MAG'))


def test_skipfield():
    stream = Stream(b'\x00' * 10 + b'\x01')
    field = SkipField(10)

    field.unpack(stream)

    assert field.size == 10
    assert stream.tell() == 10

    with pytest.raises(Truncated):
        SkipField(2).unpack(stream)


def test_textfield():
    payload = b'title\x00Hello World'
    field = TextField(len(payload))

    field.unpack(Stream(payload))

    assert field.value == (b'title', b'Hello World')
    assert field.keyword == 'title'
    assert field.text == 'Hello World'


def test_textfield_splits_on_first_nul():
    payload = b'key\x00a\x00b\xe9'
    field = TextField(len(payload))

    field.unpack(Stream(payload))

    assert field.keyword == 'key'
    assert field.text == 'a\x00b\xe9'


def test_textfield_empty_text_and_keyword():
    field = TextField(4)
    field.unpack(Stream(b'key\x00'))

    assert (field.keyword, field.text) == ('key', '')

    field = TextField(6)
    field.unpack(Stream(b'\x00value'))

    assert (field.keyword, field.text) == ('', 'value')


@pytest.mark.parametrize('payload', [
    b'no separator at all',
    b'',
])
def test_textfield_malformed(payload):
    with pytest.raises(MalformedChunk):
        TextField(len(payload)).unpack(Stream(payload))


def test_textfield_keyword_bound():
    field = TextField(79 + 1 + 5)
    field.unpack(Stream(b'k' * 79 + b'\x00value'))

    assert field.keyword == 'k' * 79

    with pytest.raises(MalformedChunk) as exc:
        TextField(80 + 1 + 5).unpack(Stream(b'k' * 80 + b'\x00value'))

    assert 'max 79' in str(exc.value)


def test_textfield_truncated_before_split():
    """The payload is read completely before looking for the separator."""
    with pytest.raises(Truncated):
        TextField(20).unpack(Stream(b'no separator'))


def test_arrayfield_with_n():
    array = ArrayField(StructField('H'), n=3)
    stream = Stream(b'\x01\x00\x02\x00\x03\x00\x04\x00')

    array.unpack(stream)

    assert len(array) == 3
    assert [_.value for _ in array] == [1, 2, 3]
    assert [_.offset for _ in array] == [0, 2, 4]
    assert array[0] is not array[1]
    assert array.size == 6
    assert stream.tell() == 6


def test_arrayfield_until_eof():
    array = ArrayField(StructField('H'))

    array.unpack(Stream(b'\x01\x00\x02\x00'))

    assert [_.value for _ in array] == [1, 2]

    array = ArrayField(StructField('H'))
    array.unpack(Stream(b''))

    assert len(array) == 0


def test_arrayfield_partial_element():
    array = ArrayField(StructField('H'))

    with pytest.raises(Truncated) as exc:
        array.unpack(Stream(b'\x01\x00\x02'))

    assert exc.value.chain == ['1']


def test_arrayfield_elements_inherit_compliance():
    array = ArrayField(StructField('B', enum=DummyEnum), compliant=Compliant.ENUM)

    with pytest.raises(MalformedChunk) as exc:
        array.unpack(Stream(b'\x04\x01'))

    assert exc.value.chain == ['0']

    array = ArrayField(StructField('B', enum=DummyEnum))
    array.unpack(Stream(b'\x04\x01'))

    assert [_.value for _ in array] == [4, DummyEnum.FIRST]
