"""Thin wrapper around the aws CLI used for all remote operations."""

import logging
import subprocess
from typing import List

from .config import AppConfig
from .exceptions import ExternalClientError

AWS_BINARY = "aws"
PROBE_TIMEOUT = 30


class AwsCliClient:
    """Handles aws CLI invocations and validations."""

    def __init__(self, config: AppConfig, dry_run: bool = False):
        self.config = config
        self.dry_run = dry_run
        self.logger = logging.getLogger(__name__)

    def validate_aws_installation(self) -> bool:
        """Check if the aws CLI is installed and accessible."""
        try:
            result = subprocess.run(
                [AWS_BINARY, "--version"],
                capture_output=True,
                text=True,
                timeout=PROBE_TIMEOUT,
            )
            return result.returncode == 0
        except (subprocess.TimeoutExpired, FileNotFoundError, subprocess.SubprocessError):
            return False

    def validate_profile(self) -> bool:
        """Check that the configured profile has credentials set up."""
        try:
            result = subprocess.run(
                [
                    AWS_BINARY,
                    "configure",
                    "get",
                    "aws_access_key_id",
                    "--profile",
                    self.config.profile,
                ],
                capture_output=True,
                text=True,
                timeout=PROBE_TIMEOUT,
            )
        except (subprocess.TimeoutExpired, FileNotFoundError, subprocess.SubprocessError) as e:
            self.logger.error(f"Error checking aws profile '{self.config.profile}': {e}")
            return False

        if result.returncode != 0:
            self.logger.error(
                f"aws configure get failed for profile '{self.config.profile}': {result.stderr}"
            )
            return False
        return True

    def perform_preflight_checks(self) -> List[str]:
        """
        Perform pre-flight checks before any command touches a path.

        Returns:
            List of error messages (empty if all checks pass)
        """
        errors = []

        if not self.validate_aws_installation():
            errors.append("aws CLI is not installed or not accessible")
            return errors  # Can't continue without the CLI

        if not self.validate_profile():
            errors.append(f"AWS profile '{self.config.profile}' not configured")

        return errors

    def object_exists(self, remote_key: str) -> bool:
        """Check whether ``remote_key`` names a single object rather than a prefix."""
        name = remote_key.rsplit("/", 1)[-1]
        if not name:
            return False

        cmd = [AWS_BINARY, "s3", "ls", remote_key, "--profile", self.config.profile]
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=PROBE_TIMEOUT,
            )
        except (subprocess.TimeoutExpired, FileNotFoundError, subprocess.SubprocessError) as e:
            self.logger.error(f"Error checking remote object '{remote_key}': {e}")
            return False

        if result.returncode != 0:
            return False

        for line in result.stdout.splitlines():
            # Objects: "<date> <time> <size> <name>", prefixes: "PRE <name>/"
            parts = line.split(None, 3)
            if len(parts) == 4 and parts[0] != "PRE" and parts[3] == name:
                return True
        return False

    def _run(self, cmd: List[str]) -> None:
        """Run an aws command, streaming its output to the terminal."""
        cmd = [*cmd, "--profile", self.config.profile]
        self.logger.info(f"Running aws command: {' '.join(cmd)}")

        try:
            result = subprocess.run(cmd)
        except FileNotFoundError as e:
            raise ExternalClientError(f"aws CLI could not be started: {e}", returncode=127)

        if result.returncode != 0:
            error_msg = f"aws command failed with exit status {result.returncode}"
            self.logger.error(f"{error_msg}: {' '.join(cmd)}")
            raise ExternalClientError(error_msg, returncode=result.returncode)

    def _transfer(self, cmd: List[str]) -> None:
        if self.dry_run:
            cmd = [*cmd, "--dryrun"]
        self._run(cmd)

    def copy_recursive(self, source: str, destination: str) -> None:
        """Copy a directory tree (``aws s3 cp --recursive``)."""
        self._transfer([AWS_BINARY, "s3", "cp", source, destination, "--recursive"])

    def sync_directory(self, source: str, destination: str) -> None:
        """Sync a directory (``aws s3 sync``)."""
        self._transfer([AWS_BINARY, "s3", "sync", source, destination])

    def copy_object(self, source: str, destination: str) -> None:
        """Copy a single object (``aws s3 cp``)."""
        self._transfer([AWS_BINARY, "s3", "cp", source, destination])

    def list_prefix(self, remote_key: str) -> None:
        """List objects and common prefixes under ``remote_key``."""
        self._run([AWS_BINARY, "s3", "ls", remote_key, "--human-readable"])
