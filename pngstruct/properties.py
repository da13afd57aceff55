import logging
from enum import Enum, auto
from typing import List


class ChunkPhase(Enum):
    '''Enum to state the actual phase of a chunk'''
    INIT      = 0
    UNPACKING = auto()
    DONE      = auto()
    ERROR     = auto()


def get_root_from_chunk(instance):
    return get_instance_from_chunk(instance, condition=lambda x: x.father is None)


def get_instance_from_chunk(instance, condition):
    while not condition(instance):
        instance = instance.father

        if instance is None:
            raise AttributeError('no chunk satisfies the condition')

    return instance


class Dependency:
    '''This makes the relation between fields possible: a value of a field
    (typically a length) is read from another field at the moment it's needed.

    In practice this class allows to write something like

        class Simple(Chunk):
            length = fields.StructField('I')
            data = fields.StringField(Dependency('.length'))

    and have the length of the string contained in the field named 'data'
    taken from the field named 'length' while unpacking.

    The syntax for the expression is inspired from module resolution
    with an extra element via the first char of the expression:

     - '.' indicates we refer to a field at the same level (the father of the instance)
     - otherwise the resolution starts from the root chunk
    '''
    def __init__(self, expression):
        self.expression = expression
        self.logger = logging.getLogger(__name__)

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.expression})>'

    def _start(self, instance, fields_path: List[str]):
        head = fields_path[0]

        if head == '':
            self.logger.debug(' resolve from father: \'%s\'' % instance.father.__class__.__name__)
            return instance.father, fields_path[1:]

        root = get_root_from_chunk(instance)
        self.logger.debug(' resolve from root: \'%s\'' % root.__class__.__name__)

        return root, fields_path

    def resolve_field(self, instance):
        '''Return the field the expression points to, starting from instance.'''
        if instance.father is None:
            raise AttributeError(f'can\'t resolve {self!r} for a field without father')

        # '.miao'.split(".") -> ['', 'miao']
        # 'miao'.split(".") -> ['miao']
        field, fields_path = self._start(instance, self.expression.split('.'))

        for component_name in fields_path:
            field = getattr(field, component_name)
            self.logger.debug(' resolved sub-component "%s" from "%s"' % (
                field.__class__.__name__, component_name))

        return field

    def resolve(self, instance):
        '''With this method we resolve the attribute with respect to the instance
        passed as argument.'''
        value = self.resolve_field(instance).value

        self.logger.debug(' %r resolved with value %r' % (self, value))

        return value


class PropertyDescriptor(object):
    """This the glue for dependency management: the attribute can be
    a plain value or a Dependency resolved each time it's read."""

    def __init__(self, name: str, _type: type):
        self.name = name
        self.type = _type

    def __get__(self, instance, owner):
        if instance is None:
            return self

        data = instance.__dict__
        if self.name not in data:
            raise AttributeError(f"no '{self.name}' here!")

        value = data[self.name]

        if isinstance(value, Dependency):
            return value.resolve(instance)

        return value

    def __set__(self, instance, value):
        if value is not None and not isinstance(value, (self.type, Dependency)):
            raise ValueError(f"A property must be of type {self.type} or a Dependency")

        instance.__dict__[self.name] = value
