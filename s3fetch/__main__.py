#!/usr/bin/env python3

""" Download an object from an S3 bucket to the working directory. """

import argparse
import logging
import sys
import traceback
from typing import List

from s3fetch.common import logprint, s3_client
from s3fetch.config import Settings
from s3fetch.download import DownloadRequest, download_object
from s3fetch.exceptions import DownloadError

STREAM_TOKEN = '-'

USAGE = """\
%(prog)s [options] bucket_name item_name
       %(prog)s [options] bucket_name item_name sha256
       %(prog)s [options] bucket_name item_name version_id sha256
       %(prog)s [options] bucket_name item_name [version_id] -"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        usage=USAGE,
        description="Download an S3 object to the working directory, optionally checking "
                    "its SHA-1 (40 hex chars) or SHA-256 (64 hex chars) hash before "
                    "moving it into place. A trailing '-' writes the object to stdout instead.")
    parser.add_argument('bucket', help="S3 bucket name")
    parser.add_argument('key', help="S3 object key; the file is saved under its last path segment")
    parser.add_argument('extra', nargs='*', metavar='version_id/hash',
                        help="optional version ID and expected hash, or '-' to stream to stdout")
    parser.add_argument('--no-progress', action='store_true', help="don't show a download progress bar")
    parser.add_argument('--log-file', default=None, help="if provided, output logs to this file")
    parser.add_argument('--log-level', default='info', help="'debug'|'info'|'warning'|'error'|'critical'")
    return parser


def parse_args(argv: List[str] = None) -> argparse.Namespace:
    """
    Parse command line arguments. The meaning of the optional positionals
    depends on how many there are:

        bucket key                  download latest version
        bucket key hash             download latest version and check hash
        bucket key version hash     download a specific version and check hash
        bucket key [version] -      write to stdout, nothing is checked

    Sets 'version_id', 'expected_hash' and 'stream' on the returned namespace.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    extra = list(args.extra)
    args.stream = bool(extra) and extra[-1] == STREAM_TOKEN
    if args.stream:
        extra.pop()

    if len(extra) > 2:
        parser.error(f"too many arguments: {' '.join(args.extra)}")

    args.version_id = None
    args.expected_hash = None
    if args.stream:
        if extra:
            args.version_id = extra[0]  # a hash after it is ignored when streaming
    elif len(extra) == 1:
        args.expected_hash = extra[0]
    elif len(extra) == 2:
        args.version_id, args.expected_hash = extra

    return args


def main(bucket: str, key: str, version_id: str = None, expected_hash: str = None,
         stream: bool = False, settings: Settings = None, progress: bool = True) -> int:
    """ Run one download, returning the process exit code. """

    if settings is None:
        settings = Settings.from_env()

    try:
        request = DownloadRequest(bucket=bucket, key=key, version_id=version_id,
                                  expected_hash=expected_hash, stream=stream)
        client = s3_client(settings)
        download_object(request, client, progress=progress and not stream)
    except DownloadError as e:
        logging.error(f"{type(e).__name__}: {e}")
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


def cli():
    args = parse_args()

    if args.log_file:
        logging.basicConfig(format="%(asctime)s.%(msecs)03d:%(levelname)s:%(message)s",
                            datefmt="%H:%M:%S", level=getattr(logging, args.log_level.upper()),
                            handlers=[logging.FileHandler(filename=args.log_file, mode='a')])
    else:
        logging.disable()

    try:
        code = main(args.bucket, args.key, args.version_id, args.expected_hash,
                    stream=args.stream, progress=not args.no_progress)
    except Exception:
        logging.critical(traceback.format_exc())
        print(traceback.format_exc(), file=sys.stderr)
        code = 1
    sys.exit(code)


if __name__ == '__main__':
    cli()
