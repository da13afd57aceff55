"""
# pngstruct: PNG structure for humans.

A file format is described declaratively: a Chunk is a sequence of fields,
each field knows how to unpack itself from a stream and the size of some fields
can depend on the value of others (see properties.Dependency).

Only one operation is defined:

 1. unpack(): reading the binary data and build a high-level representation of it.
    The unpacking always starts at the actual offset of the stream and the chunk
    itself knows how many bytes needs to read to finalize the representation.

An instance representing a file format can be in one of the following states

 1. INIT
 2. UNPACKING
 3. DONE
 4. ERROR

The PNG format lives in pngstruct.images.png, the entry point to get the plain
metadata out of a file is parse().
"""
from .images.png.document import (
    parse,
    PngDocument,
    ImageProperties,
    TextRecord,
)
from .enum import Compliant
from .exceptions import (
    PNGStructException,
    SourceUnavailable,
    BadSignature,
    Truncated,
    MalformedChunk,
)
