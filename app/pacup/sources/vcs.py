"""VCS revision store.

Keeps the last known upstream commit of every tracked development package
in a JSON file, and asks git whether upstream has moved on.

Storage location: ~/.cache/pacup/vcs.json

    {
      "neovim-git": {"url": "https://github.com/neovim/neovim.git",
                     "branch": "HEAD", "sha": "7f1c0a9..."}
    }
"""

import json
import logging
import os
import subprocess
import threading
from collections.abc import Sequence
from pathlib import Path
from tempfile import NamedTemporaryFile

from pacup.core.paths import get_vcs_path
from pacup.models.vcs import TrackedPackage
from pacup.sources.base import RevisionStore, SourceError
from pacup.utils.shell import command_exists, run_command

logger = logging.getLogger(__name__)

# ls-remote talks to the network; a dead remote must not stall the check
_GIT_TIMEOUT: float = 15.0


class VcsStoreError(SourceError):
    """Raised when the VCS store cannot be read or written."""


class VcsStore(RevisionStore):
    """JSON-backed revision state for VCS packages.

    Attributes:
        path: Location of the JSON file.
    """

    def __init__(self, path: Path | None = None) -> None:
        """Initialize VcsStore.

        Args:
            path: Optional override for the store file.
                  Default: ~/.cache/pacup/vcs.json
        """
        self.path = path if path is not None else get_vcs_path()
        self._lock = threading.Lock()

    def tracked(self) -> list[TrackedPackage]:
        """Return every tracked package, ordered by name.

        Entries that cannot be parsed are skipped with a warning.

        Raises:
            VcsStoreError: If the file exists but cannot be read.
        """
        entries: list[TrackedPackage] = []
        for name, data in sorted(self._read().items()):
            try:
                entries.append(TrackedPackage.from_dict(name, data))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Skipping corrupt VCS entry %s: %s", name, e)
        return entries

    def track(self, entry: TrackedPackage) -> None:
        """Add or replace a tracked package.

        Raises:
            VcsStoreError: If the store cannot be written.
        """
        with self._lock:
            data = self._read()
            data[entry.name] = entry.to_dict()
            self._write(data)

    def remove(self, names: Sequence[str]) -> None:
        """Stop tracking the given packages.

        Unknown names are ignored.

        Raises:
            VcsStoreError: If the store cannot be written.
        """
        with self._lock:
            data = self._read()
            removed = [name for name in names if data.pop(name, None) is not None]
            if removed:
                self._write(data)
                logger.debug("Stopped tracking %s", ", ".join(removed))

    def needs_update(self, entry: TrackedPackage) -> bool:
        """Check if the tracked branch points to a different commit upstream.

        Network or git failures are logged and count as "up to date".
        """
        remote_sha = self.remote_head(entry)
        if remote_sha is None:
            return False
        return remote_sha != entry.sha

    def remote_head(self, entry: TrackedPackage) -> str | None:
        """Return the commit the tracked branch points to upstream."""
        if not command_exists("git"):
            logger.warning("git is not available, cannot check %s", entry.name)
            return None

        try:
            result = run_command(
                ["git", "ls-remote", entry.url, entry.branch],
                timeout=_GIT_TIMEOUT,
                env={"GIT_TERMINAL_PROMPT": "0"},
            )
        except subprocess.TimeoutExpired:
            logger.warning("Timed out checking %s (%s)", entry.name, entry.url)
            return None

        if not result.success:
            logger.warning(
                "git ls-remote failed for %s: %s",
                entry.name,
                result.stderr.strip() or "unknown error",
            )
            return None

        for line in result.stdout.splitlines():
            sha, _, ref = line.partition("\t")
            if sha and ref:
                return sha.strip()
        logger.warning("Branch %s not found upstream for %s", entry.branch, entry.name)
        return None

    def _read(self) -> dict[str, dict[str, str]]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            msg = f"Corrupt VCS store {self.path}: {e}"
            raise VcsStoreError(msg) from e
        except OSError as e:
            msg = f"Cannot read VCS store {self.path}: {e}"
            raise VcsStoreError(msg) from e
        if not isinstance(data, dict):
            msg = f"Corrupt VCS store {self.path}: expected an object"
            raise VcsStoreError(msg)
        return data

    def _write(self, data: dict[str, dict[str, str]]) -> None:
        """Write the store atomically."""
        tmp_path: Path | None = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with NamedTemporaryFile(
                mode="w",
                encoding="utf-8",
                dir=self.path.parent,
                delete=False,
                suffix=".tmp",
            ) as f:
                tmp_path = Path(f.name)
                json.dump(data, f, indent=2, sort_keys=True)
                f.write("\n")
            os.replace(str(tmp_path), str(self.path))
        except OSError as e:
            if tmp_path is not None and tmp_path.exists():
                tmp_path.unlink()
            msg = f"Cannot write VCS store {self.path}: {e}"
            raise VcsStoreError(msg) from e
