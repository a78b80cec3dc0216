"""Abstraction for where to read record data from"""

import os
from urllib.parse import urlparse

import fsspec

_user_fs_options = {}  # don't access this directly, use get_fs_options()


def set_user_fs_options(args: dict) -> None:
    """Records user arguments that can affect filesystem options (like s3_region)"""
    _user_fs_options.update(args)


def reset_user_fs_options() -> None:
    _user_fs_options.clear()


def get_fs_options(protocol: str) -> dict:
    """Provides a set of storage option kwargs for fsspec calls"""
    options = {}

    if protocol == "s3":
        # Check for region manually. If you aren't using us-east-1, you usually need to specify the region
        # explicitly, and fsspec doesn't seem to check the environment variables for us, nor pull it from
        # ~/.aws/config
        region_name = _user_fs_options.get("s3_region")
        if region_name:
            options["client_kwargs"] = {"region_name": region_name}

        # Records are only ever read, but buckets can still require a specific KMS key ID
        kms_key = _user_fs_options.get("s3_kms_key")
        if kms_key:
            options["s3_additional_kwargs"] = {
                "ServerSideEncryption": "aws:kms",
                "SSEKMSKeyId": kms_key,
            }

    return options


class Root:
    """
    Abstraction for 'a place where we want to do some reading'

    If you want to do any file I/O at all, use this class.

    This is mostly a coupling of a target path and the fsspec filesystem
    to use. With some useful methods mixed in.
    """

    def __init__(self, path: str):
        """
        :param path: location (local path or URL)
        """
        parsed = urlparse(path)
        self.protocol = parsed.scheme or "file"  # assume local if no obvious scheme
        self.path = path if parsed.scheme else os.path.abspath(path)

        try:
            self.fs = fsspec.filesystem(self.protocol, **self.fsspec_options())
        except (ImportError, ValueError):
            # Some URLs (like tcp://) aren't valid fsspec URLs, and some need extra packages (like s3fs).
            # Allow a failure here. If any of the more interesting calls in this class are made, we'll fail.
            self.fs = None

    def isdir(self, path: str) -> bool:
        """Alias for os.path.isdir"""
        return self.fs.isdir(path)

    def fsspec_options(self) -> dict:
        """Provides a set of storage option kwargs for fsspec calls"""
        return get_fs_options(self.protocol)
