""" Shared test helpers. """

from pathlib import Path

from botocore.exceptions import ClientError, EndpointConnectionError

testdir = Path(__file__).resolve().parent


class FakeS3:
    """ In-memory stand-in for a boto3 S3 client. Objects put without a version are the latest. """

    def __init__(self, chunk_size: int = 4, fail_after: int = None):
        """
        :param chunk_size: number of bytes written per Callback invocation
        :param fail_after: if given, drop the connection after this many bytes
        """
        self.objects = {}
        self.chunk_size = chunk_size
        self.fail_after = fail_after
        self.requests = []

    def put(self, bucket: str, key: str, data: bytes, version_id: str = None):
        self.objects[(bucket, key, version_id)] = data

    def lookup(self, operation: str, bucket: str, key: str, version_id: str = None) -> bytes:
        try:
            return self.objects[(bucket, key, version_id)]
        except KeyError:
            raise ClientError({'Error': {'Code': '404', 'Message': 'Not Found'}}, operation)

    def head_object(self, Bucket, Key, VersionId=None):
        return {'ContentLength': len(self.lookup('HeadObject', Bucket, Key, VersionId))}

    def download_fileobj(self, Bucket, Key, Fileobj, ExtraArgs=None, Callback=None, Config=None):
        version_id = (ExtraArgs or {}).get('VersionId')
        self.requests.append((Bucket, Key, version_id))
        data = self.lookup('GetObject', Bucket, Key, version_id)
        for i in range(0, len(data), self.chunk_size):
            if self.fail_after is not None and i >= self.fail_after:
                raise EndpointConnectionError(endpoint_url=f"https://{Bucket}.s3.amazonaws.com")
            chunk = data[i:i + self.chunk_size]
            Fileobj.write(chunk)
            if Callback:
                Callback(len(chunk))
