#!/usr/bin/env python3

""" Download an S3 object to the working directory. See `download_object.py --help`. """

from s3fetch.__main__ import cli

if __name__ == '__main__':
    cli()
