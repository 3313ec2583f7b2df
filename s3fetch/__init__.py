""" Download a single S3 object to local disk, with optional hash verification. """

from s3fetch.config import Settings
from s3fetch.download import DownloadRequest, DownloadResult, download_object
from s3fetch.exceptions import (DownloadError, InvalidRequest, InvalidHash, TempFileError,
                                TransferFailed, HashMismatch, PathResolutionFailed, CommitFailed)
