#!/usr/bin/env python3
'''
Hide messages into PNG files

 $ pngme.py encode image.png ruSt 'secret message' [output.png]
 $ pngme.py decode image.png ruSt
 $ pngme.py remove image.png ruSt
 $ pngme.py print image.png
'''
import os
import sys
import logging

from pngchunks import commands
from pngchunks.exceptions import ChunkException, ChunkNotFound


logging.basicConfig(level=logging.DEBUG if 'DEBUG' in os.environ else logging.INFO)
logger = logging.getLogger(__name__)


def usage(progname):
    print(f'''usage: {progname} encode <png file path> <chunk type> <message> [output path]
       {progname} decode <png file path> <chunk type>
       {progname} remove <png file path> <chunk type>
       {progname} print <png file path>''')
    sys.exit(1)


def do_encode(path, chunk_type, message, output_path=None):
    chunk = commands.encode(path, chunk_type, message, output_path=output_path)
    logger.info(f'added chunk {chunk!r} to \'{output_path or path}\'')


def do_decode(path, chunk_type):
    message = commands.decode(path, chunk_type)

    if message is None:
        raise ChunkNotFound(chain=[], msg=f'no chunk with type {chunk_type}')

    print(message)


def do_remove(path, chunk_type):
    chunk = commands.remove(path, chunk_type)
    print(f'removed {chunk}')


def do_print(path):
    for idx, chunk in enumerate(commands.print_chunks(path)):
        print(f'[{idx:02d}] {chunk}')


COMMANDS = {
    'encode': (do_encode, 3, 4),
    'decode': (do_decode, 2, 2),
    'remove': (do_remove, 2, 2),
    'print': (do_print, 1, 1),
}


if __name__ == '__main__':
    if len(sys.argv) < 3 or sys.argv[1] not in COMMANDS:
        usage(sys.argv[0])

    command, n_min, n_max = COMMANDS[sys.argv[1]]
    args = sys.argv[2:]

    if not n_min <= len(args) <= n_max:
        usage(sys.argv[0])

    try:
        command(*args)
    except ChunkException as e:
        logger.error(f'{sys.argv[1]} failed: {e}')
        sys.exit(2)
