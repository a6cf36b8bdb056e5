"""Command resolution and dispatch for the c-sync CLI."""

import logging
import os
import sys
from typing import Dict, Optional

from .aws_client import AwsCliClient
from .config import AppConfig
from .exceptions import (
    ConfigurationError,
    ExternalClientError,
    InvalidPathError,
    UnknownCommandError,
)
from .path_mapper import absolute_path, map_path

# Command token -> operation name
COMMANDS: Dict[str, str] = {
    "bu": "backup",
    "backup": "backup",
    "sync": "sync",
    "ls": "list",
    "list": "list",
    "rs": "restore",
    "restore": "restore",
    "h": "help",
    "help": "help",
}

UNKNOWN_COMMAND_MESSAGE = (
    "Unknown command. Supported commands: bu - backup, ls - list cloud directories, "
    "rs - restore from cloud, sync - sync cloud with local"
)


def resolve_command(token: Optional[str]) -> str:
    """Return the operation name for a command token; no token means help."""
    if not token:
        return "help"
    try:
        return COMMANDS[token]
    except KeyError:
        raise UnknownCommandError(UNKNOWN_COMMAND_MESSAGE, {"command": token})


class CommandDispatcher:
    """Runs one c-sync command against the aws CLI."""

    def __init__(
        self,
        config: AppConfig,
        client: AwsCliClient,
        cwd: str,
        home: str,
        usage: str = "",
    ):
        self.config = config
        self.client = client
        self.cwd = cwd
        self.home = home
        self.usage = usage
        self.logger = logging.getLogger(__name__)

    def dispatch(self, command: Optional[str], path: str = "") -> int:
        """
        Resolve ``command`` and run it on ``path``.

        Raises:
            UnknownCommandError: the token is not a known command
            ConfigurationError: the pre-flight checks failed
            InvalidPathError: the local path cannot be used
            ExternalClientError: the aws CLI failed

        Returns:
            Process exit code
        """
        preflight_errors = self.client.perform_preflight_checks()
        if preflight_errors:
            for error in preflight_errors:
                self.logger.critical(f"Pre-flight check failed: {error}")
            raise ConfigurationError(
                "; ".join(preflight_errors), {"profile": self.config.profile}
            )

        operation = resolve_command(command)

        if operation == "help":
            self.show_help()
            return 0

        self.logger.info(f"Running '{operation}' for path '{path or self.cwd}'")
        getattr(self, operation)(path or "")
        return 0

    def show_help(self, file=None) -> None:
        print(self.usage, file=file or sys.stdout)

    def local_path(self, path: str) -> str:
        return absolute_path(path, self.cwd, self.home)

    def remote_key(self, path: str) -> str:
        return map_path(
            path,
            self.cwd,
            self.home,
            self.config.path_to_remove,
            self.config.backup_bucket,
            self.config.scheme,
        )

    def _validate_path(self, local: str) -> None:
        if not os.path.exists(local):
            raise InvalidPathError(f"Path does not exist: {local}", {"path": local})

    def _show_progress(
        self, action: str, local: str, remote: str, remote_label: str = "destination"
    ) -> None:
        print(f"Starting {action} of: {local}")
        print(f"Current directory: {self.cwd}")
        print(f"S3 {remote_label}: {remote}")

    def _upload(self, action: str, path: str, directory_operation) -> None:
        local = self.local_path(path)
        self._validate_path(local)

        remote = self.remote_key(path)
        self._show_progress(action, local, remote)

        if os.path.isdir(local):
            print(f"{local} is a directory")
            directory_operation(local, remote)
        elif os.path.isfile(local):
            print(f"{local} is a file")
            # Directory sync does not apply to a single object
            self.client.copy_object(local, remote)
        else:
            raise InvalidPathError(f"{local} is not valid", {"path": local})

    def backup(self, path: str) -> None:
        """Copy a file or directory tree to the bucket."""
        self._upload("backup", path, self.client.copy_recursive)

    def sync(self, path: str) -> None:
        """Sync a directory to the bucket; files are copied."""
        self._upload("sync", path, self.client.sync_directory)

    def list(self, path: str) -> None:
        """List the remote contents that mirror ``path``."""
        remote = self.remote_key(path)
        if not remote.endswith("/"):
            remote += "/"

        print(f"Listing contents of: {remote}")
        print("-------------------------------------------")

        try:
            self.client.list_prefix(remote)
        except ExternalClientError:
            print(
                "Error: Failed to list S3 contents. Please check if the path exists.",
                file=sys.stderr,
            )
            raise

    def restore(self, path: str) -> None:
        """
        Copy the remote counterpart of ``path`` back to the local filesystem.

        A path that is a local file, or that is missing locally but stored
        remotely as a single object, is restored with a single-object copy.
        Anything else is restored recursively as a directory.
        """
        local = self.local_path(path)
        remote = self.remote_key(path)
        self._show_progress("restore", local, remote, remote_label="source")

        if os.path.isfile(local) or (
            not os.path.exists(local) and self.client.object_exists(remote)
        ):
            print(f"{local} is a file")
            self.client.copy_object(remote, local)
        else:
            print(f"{local} is a directory")
            self.client.copy_recursive(remote, local)
