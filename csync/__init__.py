"""
c-sync: Back up and synchronize local paths to S3 through the aws CLI.

Local directory structure is mirrored under a bucket by stripping a
configured path prefix from each absolute local path.
"""

__version__ = "0.1.0"
