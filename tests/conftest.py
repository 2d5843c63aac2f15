"""Shared test fixtures and configuration."""

import tempfile
from pathlib import Path

import pytest

from gato.config import GatoConfig
from gato.git.context import ChangeContext
from gato.llm.invoker import BaseInvoker, InvocationResult


class FakeInvoker(BaseInvoker):
    """Invoker that replays canned results instead of running a process."""

    def __init__(self, results):
        self.results = list(results)
        self.prompts = []

    def invoke(self, prompt: str) -> InvocationResult:
        self.prompts.append(prompt)
        if len(self.results) > 1:
            return self.results.pop(0)
        return self.results[0]

    def require(self) -> None:
        pass


def ok(stdout: str) -> InvocationResult:
    """Successful model run."""
    return InvocationResult(stdout=stdout, stderr="", returncode=0)


def failed(stdout: str = "", stderr: str = "boom") -> InvocationResult:
    """Failed model run."""
    return InvocationResult(stdout=stdout, stderr=stderr, returncode=1)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def config():
    """Configuration with no retry delay and no prompts."""
    return GatoConfig(retry_delay=0.0, confirm=False)


@pytest.fixture
def sample_context():
    """A small change context."""
    return ChangeContext(
        branch="main",
        file_count=2,
        patch_lines=12,
        top_files=("src/app.py", "README.md"),
        name_status="M\tsrc/app.py\nM\tREADME.md",
        stat=" src/app.py | 8 +++++---\n README.md  | 2 +-\n 2 files changed, 6 insertions(+), 4 deletions(-)",
        patch="diff --git a/src/app.py b/src/app.py\n+print('hello')",
    )


@pytest.fixture
def sample_model_output():
    """Typical raw model output with fences and runtime noise."""
    return """```
(node:12345) [UNDICI-EHPA] Warning: EnvHttpProxyAgent is experimental
Add greeting to app startup\r

- print hello when the app starts\r
- document the greeting in README
```"""


@pytest.fixture
def make_script(temp_dir):
    """Factory for executables that print fixed raw bytes to stdout."""

    def _make(name: str, data: bytes, subdir: str = "") -> Path:
        directory = temp_dir / subdir if subdir else temp_dir
        directory.mkdir(parents=True, exist_ok=True)
        payload = temp_dir / f"{name}.out"
        payload.write_bytes(data)
        script = directory / name
        script.write_text(f"#!/bin/sh\ncat '{payload}'\n")
        script.chmod(0o755)
        return script

    return _make
