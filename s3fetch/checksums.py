""" Choosing and computing content digests. """

import hashlib
import string
from typing import BinaryIO

# The algorithm is inferred from the hex length of the expected digest.
# This would become ambiguous if another supported algorithm also produced
# 40 or 64 hex characters, so any new entry must have a distinct length.
HASH_ALGORITHMS = {
    40: 'sha1',
    64: 'sha256',
}

CHUNK_SIZE = 1024 * 1024


def hash_algorithm(expected_hash: str) -> str:
    """ Get the name of the digest algorithm matching an expected hex digest. """

    if not all(c in string.hexdigits for c in expected_hash):
        raise ValueError(f"invalid hash specified: {expected_hash}")
    try:
        return HASH_ALGORITHMS[len(expected_hash)]
    except KeyError:
        raise ValueError(f"invalid hash specified: {expected_hash}")


def file_digest(f: BinaryIO, algorithm: str) -> str:
    """
    Compute the hex digest of an open binary file, reading it from the start.

    :param f: file opened for reading
    :param algorithm: name of a hashlib algorithm, eg. 'sha256'
    :return: lowercase hex digest of the file's contents
    """
    h = hashlib.new(algorithm)
    f.seek(0)  # the file cursor is at the end after downloading
    for chunk in iter(lambda: f.read(CHUNK_SIZE), b''):
        h.update(chunk)
    return h.hexdigest()


def digests_match(expected: str, actual: str) -> bool:
    return expected.lower() == actual.lower()
