import copy
import logging
from enum import Enum, auto


class Endianess(Enum):
    LITTLE_ENDIAN = auto()
    BIG_ENDIAN    = auto()

    @property
    def struct_prefix(self) -> str:
        return {
            Endianess.LITTLE_ENDIAN: '<',
            Endianess.BIG_ENDIAN: '>',
        }[self]


class FieldDescriptor(object):
    """Wrapper around field access of a Chunk: the field declared in the class
    is a prototype, each chunk instance gets its own copy the first time
    the attribute is accessed."""

    def __init__(self, field_instance: "Field", field_name: str):
        self.logger = logging.getLogger(f"{self.__module__}.{self.__class__.__name__}")
        self.field = field_instance
        self.field.name = field_name

    def __get__(self, instance, type=None):
        if instance is None:
            return self.field

        data = instance.__dict__

        if self.field.name not in data:
            self.logger.debug("create new field '%s' for %s", self.field.name, instance.__class__.__name__)
            data[self.field.name] = self.field.create(father=instance)

        return data[self.field.name]

    def __set__(self, instance, value):
        data = instance.__dict__

        # if the value is a field of the same type then set as it is
        if isinstance(value, self.field.__class__):
            value.father = instance
            value.name = self.field.name
            data[self.field.name] = value
        # otherwise delegate to the field
        else:
            self.__get__(instance).value = value


class FieldBase(object):

    def contribute_to_chunk(self, cls, name):
        if name in cls.__dict__:
            raise AttributeError(f'field {name} is already present in class {cls.__name__}')

        setattr(cls, name, FieldDescriptor(self, name))

    def create(self, father):
        instance = copy.deepcopy(self)
        instance.father = father
        return instance


class Meta(object):
    """Class containing metadata about the format"""

    def __init__(self):
        self.fields = []


class MetaChunk(type):

    def __new__(cls, names, bases, attrs):
        '''The fields are collected in declaration order, inspired by how Django does a similar thing.'''
        new_cls = super(MetaChunk, cls).__new__(cls, names, bases, {
            _k: _v for _k, _v in attrs.items() if not isinstance(_v, FieldBase)
        })

        new_cls._meta = Meta()

        # handle inheritance: the fields of the parents come first
        for parent in [_ for _ in bases if isinstance(_, MetaChunk)]:
            for field_name in parent._meta.fields:
                if field_name not in new_cls._meta.fields:
                    new_cls._meta.fields.append(field_name)

        for obj_name, obj in attrs.items():
            new_cls.add_to_class(obj_name, obj)

        return new_cls

    def add_to_class(cls, name, value):
        if isinstance(value, FieldBase):
            logging.getLogger(__name__).debug('contribute_to_chunk() found for field \'%s\'' % name)
            cls._meta.fields.append(name)
            value.contribute_to_chunk(cls, name)
