""" Shared definitions. """

import logging

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError

from s3fetch.config import Settings
from s3fetch.exceptions import TransferFailed


def logprint(msg, level):
    logger = getattr(logging, level.lower())
    logger(msg)
    print(msg)


def s3_client(settings: Settings):
    """ Create an S3 client using the ambient AWS credentials and the given transport settings. """

    config = Config(connect_timeout=settings.connect_timeout,
                    read_timeout=settings.read_timeout)
    verify = None
    if settings.no_verify_ssl:
        logging.warning("TLS certificate verification is disabled (AWS_NO_VERIFY_SSL)")
        verify = False

    try:
        sess = boto3.session.Session(region_name=settings.region)
        return sess.client('s3', config=config, verify=verify)
    except BotoCoreError as e:
        raise TransferFailed(f"unable to create S3 client: {e}") from e
