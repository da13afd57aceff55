'''
Plain values extracted from an unpacked PNGFile: the image properties from the IHDR
chunk and the tEXt records, nothing refers back to the stream or to the chunks.
'''
import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from pngstruct.enum import Compliant
from pngstruct.images.png import (
    PNGColorType,
    PNGFile,
)
from pngstruct.images.png.utils import (
    get_chunks_by_type,
    get_last_chunk_by_type,
)


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImageProperties:
    width: int
    height: int
    bit_depth: int
    color_type: int
    compression_method: int
    filter_method: int
    interlace_method: int

    @property
    def color(self) -> Optional[PNGColorType]:
        try:
            return PNGColorType(self.color_type)
        except ValueError:
            return None

    @classmethod
    def from_chunk(cls, data) -> "ImageProperties":
        return cls(
            width=data.width.value,
            height=data.height.value,
            bit_depth=data.depth.value,
            color_type=int(data.color.value),
            compression_method=int(data.compression.value),
            filter_method=int(data.filter.value),
            interlace_method=int(data.interlace.value),
        )


@dataclass(frozen=True)
class TextRecord:
    '''keyword and value are decoded as latin-1 so every byte
    (NUL included) is preserved.'''
    keyword: str
    value: str

    @classmethod
    def from_field(cls, field) -> "TextRecord":
        return cls(keyword=field.keyword, value=field.text)


@dataclass(frozen=True)
class PngDocument:
    image: Optional[ImageProperties] = None
    text_records: Tuple[TextRecord, ...] = ()

    def get_text(self, keyword: str) -> List[str]:
        return [_.value for _ in self.text_records if _.keyword == keyword]

    @classmethod
    def from_png_file(cls, png: PNGFile) -> "PngDocument":
        ihdr = get_last_chunk_by_type(png.chunks, 'IHDR')

        return cls(
            image=ImageProperties.from_chunk(ihdr.Data.field) if ihdr else None,
            text_records=tuple(
                TextRecord.from_field(_.Data.field) for _ in get_chunks_by_type(png.chunks, 'tEXt')
            ),
        )


def parse(source, compliant=Compliant.NONE) -> PngDocument:
    '''Read the PNG from source (a path, bytes or a binary file object).

    Any problem raises one of the pngstruct.exceptions, there is no partial result.'''
    png = PNGFile(source, compliant=compliant)

    document = PngDocument.from_png_file(png)
    logger.debug('parsed %r', document)

    return document
