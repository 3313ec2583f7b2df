""" Download an S3 object into a temporary file, verify it, and commit it. """

import logging
import os
import posixpath
import sys
import warnings
from dataclasses import dataclass
from typing import BinaryIO, Optional, Tuple

from boto3.s3.transfer import TransferConfig
from botocore.exceptions import BotoCoreError, ClientError
from tqdm import TqdmWarning, tqdm

from s3fetch.checksums import digests_match, file_digest, hash_algorithm
from s3fetch.common import logprint
from s3fetch.exceptions import (CommitFailed, HashMismatch, InvalidHash, InvalidRequest,
                                PathResolutionFailed, TempFileError, TransferFailed)

TMP_SUFFIX = '.unconfirmed'

# Transfers run on the calling thread, writing parts strictly in order.
TRANSFER_CONFIG = TransferConfig(use_threads=False)


def output_name(key: str) -> str:
    """ Get the local file name for an object key (its last path segment). """

    name = posixpath.basename(key.rstrip('/'))
    if name in ('', '.', '..'):
        raise InvalidRequest(f"object key has no usable file name: '{key}'")
    return name


@dataclass(frozen=True)
class DownloadRequest:
    """ Identity of the object to download and how to check it. """

    bucket: str
    key: str
    version_id: Optional[str] = None
    expected_hash: Optional[str] = None
    stream: bool = False  # write to stdout; no temporary file, no verification

    def __post_init__(self):
        if not self.bucket:
            raise InvalidRequest("bucket name required")
        if not self.key:
            raise InvalidRequest("object key required")
        if self.stream:
            return
        output_name(self.key)
        if self.expected_hash:
            try:
                hash_algorithm(self.expected_hash)
            except ValueError as e:
                raise InvalidHash(str(e))

    @property
    def extra_args(self) -> dict:
        return {'VersionId': self.version_id} if self.version_id else {}

    @property
    def url(self) -> str:
        url = f"s3://{self.bucket}/{self.key}"
        if self.version_id:
            url += f" (version {self.version_id})"
        return url


@dataclass(frozen=True)
class DownloadResult:
    """ Outcome of a successful download. A hash mismatch raises instead. """

    nbytes: int
    path: Optional[str] = None        # absent in stream mode
    verified: Optional[bool] = None   # None when no hash was checked


def fetch(client, request: DownloadRequest, f: BinaryIO, progress: bool = True) -> int:
    """
    Transfer the requested object into a writable binary file.

    Raises:
        TransferFailed if the object can't be found or the transfer fails

    :param client: boto3 S3 client
    :param request: object to download
    :param f: destination file object, written sequentially
    :param progress: whether to show a progress bar on stderr
    :return: number of bytes transferred
    """
    nbytes = 0
    pbar = None

    def on_chunk(n):
        nonlocal nbytes
        nbytes += n
        if pbar is not None:
            pbar.update(n)

    try:
        if progress:
            warnings.filterwarnings("ignore", category=TqdmWarning)
            response = client.head_object(Bucket=request.bucket, Key=request.key, **request.extra_args)
            pbar = tqdm(total=response['ContentLength'], unit='B', unit_scale=True)

        logging.info(f"downloading {request.url}")
        client.download_fileobj(request.bucket, request.key, f,
                                ExtraArgs=request.extra_args or None,
                                Callback=on_chunk, Config=TRANSFER_CONFIG)
    except (BotoCoreError, ClientError) as e:
        raise TransferFailed(f"unable to download item {request.url}: {e}") from e
    finally:
        if pbar is not None:
            pbar.close()

    return nbytes


def verify(f: BinaryIO, expected_hash: str) -> str:
    """ Check the downloaded file against the expected digest, returning the actual digest. """

    actual = file_digest(f, hash_algorithm(expected_hash))
    if not digests_match(expected_hash, actual):
        raise HashMismatch(expected=expected_hash, actual=actual)
    return actual


def resolve_paths(tmp_file: str, out_file: str) -> Tuple[str, str]:
    paths = []
    for file in (tmp_file, out_file):
        try:
            paths.append(os.path.abspath(file))
        except OSError as e:
            raise PathResolutionFailed(f"failed to resolve path for {file}: {e}") from e
    return paths[0], paths[1]


def commit(tmp_path: str, out_path: str):
    """ Move the verified temporary file onto its final name in one atomic step. """

    try:
        os.replace(tmp_path, out_path)
    except OSError as e:
        raise CommitFailed(f"failed to move file: {tmp_path} to {out_path}: {e}") from e


def discard(tmp_file: str):
    if not os.path.exists(tmp_file):
        return
    try:
        os.remove(tmp_file)
    except OSError as e:
        logging.warning(f"could not remove {tmp_file}: {e}")


def download_object(request: DownloadRequest, client, out_dir: str = '.',
                    out_stream: BinaryIO = None, progress: bool = True) -> DownloadResult:
    """
    Download an object and commit it under the last segment of its key.

    The object is written to '<name>.unconfirmed' first and only renamed to
    '<name>' once the transfer finished and the expected hash (if any)
    matched. On any failure the temporary file is removed and the final path
    is left untouched. In stream mode the bytes go straight to out_stream and
    nothing is written to disk or verified.

    :param request: object to download
    :param client: boto3 S3 client
    :param out_dir: directory to write the file into
    :param out_stream: binary stream used in stream mode, defaults to stdout
    :param progress: whether to show a progress bar while downloading to a file
    :return: byte count, committed path and verification result
    """
    if request.stream:
        if out_stream is None:
            out_stream = sys.stdout.buffer
        nbytes = fetch(client, request, out_stream, progress=False)
        out_stream.flush()
        return DownloadResult(nbytes=nbytes)

    name = output_name(request.key)
    tmp_file = os.path.join(out_dir, name + TMP_SUFFIX)
    out_file = os.path.join(out_dir, name)

    try:
        f = open(tmp_file, 'w+b')  # truncates a leftover from an interrupted run
    except OSError as e:
        raise TempFileError(f"unable to open file {tmp_file}: {e}") from e

    try:
        with f:
            nbytes = fetch(client, request, f, progress)
            tmp_path, out_path = resolve_paths(tmp_file, out_file)
            logprint(f"Downloaded: {out_path} {nbytes} bytes", 'info')

            verified = None
            if request.expected_hash:
                digest = verify(f, request.expected_hash)
                logprint(f"Downloaded hash is correct: {digest}", 'info')
                verified = True

        commit(tmp_path, out_path)
    except Exception:
        discard(tmp_file)
        raise

    logprint(f"Complete: {out_path}", 'info')
    return DownloadResult(nbytes=nbytes, path=out_path, verified=verified)
