#!/usr/bin/env python3
'''
Print the dimensions and the tEXt records of a PNG file

 $ pnginfo.py image.png
 image.png: 5x10
 Title: red square
'''
import logging
import sys
import os

from pngstruct import parse, PNGStructException


logging.basicConfig(level=logging.DEBUG if 'DEBUG' in os.environ else logging.INFO)
logger = logging.getLogger(__name__)


def usage(progname):
    print(f'usage: {progname} <png file path>')
    sys.exit(1)


if __name__ == '__main__':
    if len(sys.argv) < 2:
        usage(sys.argv[0])

    filepath = sys.argv[1]

    try:
        document = parse(filepath)
    except PNGStructException as e:
        logger.error(f'{filepath}: {e}')
        sys.exit(1)

    if document.image:
        print(f'{filepath}: {document.image.width}x{document.image.height}')
    else:
        print(f'{filepath}: no IHDR chunk')

    for record in document.text_records:
        print(f'{record.keyword}: {record.value}')
