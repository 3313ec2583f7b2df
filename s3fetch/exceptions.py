""" Exceptions raised while downloading and committing an object. """


class DownloadError(Exception):
    """ Base class for every fatal error in the download process. """


class InvalidRequest(DownloadError):
    """ Raised when the bucket, key or version arguments are unusable. """


class InvalidHash(InvalidRequest):
    """ Raised when the expected hash is not 40 or 64 hex characters. """


class TempFileError(DownloadError):
    """ Raised when the temporary download file cannot be opened. """


class TransferFailed(DownloadError):
    """ Raised when the S3 client cannot be created or the transfer fails. """


class HashMismatch(DownloadError):
    """ Raised when the downloaded bytes do not hash to the expected value. """

    def __init__(self, expected: str, actual: str):
        self.expected = expected
        self.actual = actual
        super().__init__(f"downloaded file hash failed: expected {expected}, got {actual}")


class PathResolutionFailed(DownloadError):
    """ Raised when an absolute path for the temporary or final file can't be resolved. """


class CommitFailed(DownloadError):
    """ Raised when the temporary file can't be moved onto the final path. """
