import struct
import zlib

import pytest

from pngstruct.images.png import PNG_SIGNATURE


def build_chunk(type, data, crc=None):
    if crc is None:
        crc = zlib.crc32(type + data)

    return struct.pack('>I', len(data)) + type + data + struct.pack('>I', crc)


def build_ihdr(width=1, height=1, depth=8, color=2, compression=0, filter=0, interlace=0):
    return build_chunk(b'IHDR', struct.pack('>IIBBBBB', width, height, depth, color, compression, filter, interlace))


def build_png(*chunks):
    return PNG_SIGNATURE + b''.join(chunks)


@pytest.fixture
def chunk():
    return build_chunk


@pytest.fixture
def ihdr():
    return build_ihdr


@pytest.fixture
def png():
    return build_png


@pytest.fixture
def minimal_png():
    """IHDR, one tEXt, a small IDAT and IEND."""
    return build_png(
        build_ihdr(width=0x20, height=0x10, depth=8, color=6),
        build_chunk(b'tEXt', b'title\x00Hello World'),
        build_chunk(b'IDAT', b'\x78\x9c\x63\x00\x00\x00\x01\x00\x01'),
        build_chunk(b'IEND', b''),
    )
