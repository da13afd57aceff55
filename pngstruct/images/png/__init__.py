'''
# Portable Network Graphics

Format created to replace patent-emcumbered GIF files.

The specification is at <http://www.libpng.org/pub/png/spec/1.2/PNG-Contents.html> and
is available a full test-suite with a lot of PNG images covering all
the possible cases at <http://www.schaik.com/pngsuite/>.

Only the structure is read here: the IHDR and tEXt chunks are decoded,
every other chunk is skipped without looking at it. The CRC is skipped too.
'''
import logging
from enum import IntEnum

from pngstruct.core import Chunk
from pngstruct import (
    fields,
)
from pngstruct.enum import Compliant
from pngstruct.exceptions import MalformedChunk
from pngstruct.properties import Dependency


logger = logging.getLogger(__name__)

PNG_SIGNATURE = b'\x89\x50\x4e\x47\x0d\x0a\x1a\x0a'

# keywords are 1-79 bytes long
TEXT_KEYWORD_MAX_LENGTH = 79


class PNGColorType(IntEnum):
    '''The color type definition of the PNG is a little tricky and doesn't seem
    to follow a bit-mask. We are going to list all the valid cases.'''
    GRAYSCALE = 0x00
    RGB       = 0x02
    RGB_PALETTE = 0x03
    GS_ALPHA    = 0x04
    RGBA        = 0x06


class PNGCompressionType(IntEnum):
    '''There is only one method of compression'''
    DEFLATE = 0x00


class PNGFilterType(IntEnum):
    '''This indicates the preprocessing method applied to the image data before compression. At present, only filter method 0 is defined'''
    ADAPTIVE = 0x00


class PNGInterlaceType(IntEnum):
    NONE  = 0x00
    ADAM7 = 0x01


class IHDRData(Chunk):
    '''
    Width and height give the image dimensions in pixels.
    Bit depth is a single-byte integer giving the number of bits per sample or per palette index (not per pixel).
    Color type is a single-byte integer that describes the interpretation of the image data.

    The chunk has a fixed size of 13 bytes.
    '''
    width       = fields.StructField('I', endianess=fields.Endianess.BIG_ENDIAN)
    height      = fields.StructField('I', endianess=fields.Endianess.BIG_ENDIAN)
    depth       = fields.StructField('B')
    color       = fields.StructField('B', enum=PNGColorType, default=PNGColorType.GRAYSCALE)
    compression = fields.StructField('B', enum=PNGCompressionType, default=PNGCompressionType.DEFLATE)
    filter      = fields.StructField('B', enum=PNGFilterType, default=PNGFilterType.ADAPTIVE)
    interlace   = fields.StructField('B', enum=PNGInterlaceType, default=PNGInterlaceType.NONE)

    def __str__(self):
        return '%dx%dx%d' % (
            self.width.value,
            self.height.value,
            self.depth.value,
        )


class PNGHeader(Chunk):
    magic = fields.StringField(8, default=PNG_SIGNATURE, is_magic=True)


class PNGChunkHeader(Chunk):
    '''Length of the data (big endian, it doesn't count itself, the type and the crc)
    followed by the 4 bytes of the type.'''
    length = fields.StructField('I', endianess=fields.Endianess.BIG_ENDIAN)
    type   = fields.StringField(4)


type2field = {
    b'IHDR': (IHDRData, (), {'size': Dependency('.header.length')}),
    b'tEXt': (fields.TextField, (Dependency('.header.length'),), {'max_keyword_length': TEXT_KEYWORD_MAX_LENGTH}),
    fields.SelectField.Type.DEFAULT: (fields.SkipField, (Dependency('.header.length'),), {}),
}


class PNGChunk(Chunk):
    '''This is the main data structure of the format: the 4 fields represent
    a chunk into the file. Each field is intended big-endian.

    A chunk is defined as critical or ancillary depending on the case of the
    starting letter of the type field.

    The crc field is network-byte-order CRC-32 computed over the chunk type and chunk data,
    it's skipped and never verified.

    # Critical chunks

     1. IHDR: contains image's width, height, bit depth, color type, compression method, filter method and interlace method
     2. PLTE: contains the palette data
     3. IDAT: contains the actual image data (compressed)
     4. IEND: is the terminator chunk
    '''
    header = PNGChunkHeader()
    Data   = fields.SelectField(Dependency('.header.type'), type2field)
    crc    = fields.SkipField(4)

    @property
    def type(self) -> bytes:
        return self.header.type.value

    def isCritical(self):
        return chr(self.type[0]).isupper()


class PNGFile(Chunk):
    '''Signature followed by chunks until the stream ends.

    Nothing stops at IEND: whatever follows is read as chunks too.'''
    header = PNGHeader()
    chunks = fields.ArrayField(PNGChunk())

    def __init__(self, source=None, compliant=Compliant.NONE, **kwargs):
        super().__init__(source, compliant=compliant, **kwargs)

    def validate(self):
        n_headers = len([_ for _ in self.chunks if _.type == b'IHDR'])

        if n_headers == 1:
            return

        if self.is_compliant(Compliant.HEADER):
            raise MalformedChunk(chain=[], reason=f'expected exactly one IHDR chunk, found {n_headers}')

        logger.warning('found %d IHDR chunks, %s', n_headers, 'using the last one' if n_headers else 'no image properties')
