import logging
from typing import List


logger = logging.getLogger(__name__)


def get_chunks_by_type(chunks, name) -> List:
    '''Return the chunks with the given type, in the order they appear in the file.'''
    if isinstance(name, str):
        name = name.encode('ascii')

    return [_ for _ in chunks if _.type == name]


def get_last_chunk_by_type(chunks, name):
    '''When a chunk type is repeated the last one wins, None if there isn't any.'''
    found = get_chunks_by_type(chunks, name)

    if len(found) > 1:
        logger.debug('%d chunks with type %r, using the last one', len(found), name)

    return found[-1] if found else None
