""" Settings read from the environment at process start. """

import os
from dataclasses import dataclass
from typing import Mapping

DEFAULT_REGION = 'ap-southeast-2'

TRUE_STRINGS = ('1', 't', 'T', 'TRUE', 'true', 'True')
FALSE_STRINGS = ('0', 'f', 'F', 'FALSE', 'false', 'False')


def parse_bool(value: str) -> bool:
    """ Parse a boolean environment value. Raises ValueError on anything unrecognized. """

    if value in TRUE_STRINGS:
        return True
    if value in FALSE_STRINGS:
        return False
    raise ValueError(f"invalid boolean value: {value!r}")


@dataclass(frozen=True)
class Settings:
    """ Transport settings for the S3 client. """

    region: str = DEFAULT_REGION
    no_verify_ssl: bool = False  # skip TLS certificate checks, opt-in only
    connect_timeout: float = 60
    read_timeout: float = 60

    @classmethod
    def from_env(cls, environ: Mapping[str, str] = None) -> 'Settings':
        """
        Build settings from environment variables.

        AWS_REGION overrides the default region when set and non-empty.
        AWS_NO_VERIFY_SSL disables certificate verification only when it
        parses as a true value; unparseable values count as false.

        :param environ: mapping to read from, defaults to os.environ
        :return: populated Settings object
        """
        if environ is None:
            environ = os.environ

        region = environ.get('AWS_REGION') or DEFAULT_REGION

        no_verify_ssl = False
        if environ.get('AWS_NO_VERIFY_SSL'):
            try:
                no_verify_ssl = parse_bool(environ['AWS_NO_VERIFY_SSL'])
            except ValueError:
                no_verify_ssl = False

        return cls(region=region, no_verify_ssl=no_verify_ssl)
