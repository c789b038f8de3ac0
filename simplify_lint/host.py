"""
Host access for capability probing.

A probe evaluates one small form in the real host and only looks at whether
that succeeded. Every evaluation happens inside a scratch context that is
thrown away afterwards.
"""

import logging
import os
import subprocess
import tempfile
from abc import ABC, abstractmethod
from contextlib import contextmanager
from pathlib import Path
from typing import ContextManager, Iterator, Optional

from simplify_lint.core.errors import HostError

logger = logging.getLogger(__name__)


class HostSession(ABC):
    """An open scratch context in the host."""

    @abstractmethod
    def evaluate(self, form: str) -> None:
        """
        Evaluate a form for effect.

        Raises:
            HostError: If the host signals an error while evaluating.
        """
        pass


class Host(ABC):
    """Base class for hosts that can be probed."""

    @abstractmethod
    def scratch(self) -> ContextManager[HostSession]:
        """Open a disposable evaluation context, released on exit."""
        pass


class _EmacsBatchSession(HostSession):

    def __init__(self, host: "EmacsBatchHost", workdir: Path):
        self.host = host
        self.workdir = workdir
        self._count = 0

    def evaluate(self, form: str) -> None:
        self._count += 1
        form_file = self.workdir / f"probe-{self._count}.el"
        form_file.write_text(form + "\n", encoding="utf-8")

        cmd = [self.host.executable, "-Q", "--batch", "-l", str(form_file)]
        env = dict(os.environ, HOME=str(self.workdir))
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.host.timeout,
                cwd=self.workdir,
                env=env,
            )
        except subprocess.TimeoutExpired as e:
            raise HostError(f"Evaluation timed out after {self.host.timeout} seconds") from e
        except OSError as e:
            raise HostError(f"Cannot run {self.host.executable}: {e}") from e

        if result.returncode != 0:
            raise HostError(result.stderr.strip() or f"exit code {result.returncode}")


class EmacsBatchHost(Host):
    """
    Probes a real Emacs by running it in batch mode.

    Each scratch context is a temporary directory used as the child's HOME
    and working directory, so the probe cannot touch the user's files.
    """

    def __init__(self, executable: str = "emacs", timeout: Optional[float] = 10):
        self.executable = executable
        self.timeout = timeout

    @contextmanager
    def scratch(self) -> Iterator[HostSession]:
        with tempfile.TemporaryDirectory(prefix="simplify-lint-") as tmp:
            logger.debug("Opened scratch directory %s", tmp)
            yield _EmacsBatchSession(self, Path(tmp))
