"""Fake implementation of BFG invocations for testing."""

from dataclasses import dataclass
from pathlib import Path

from claude_cleaner.gateway.bfg.abc import Bfg


@dataclass(frozen=True)
class BfgCall:
    """Record of a BFG invocation.

    Attributes:
        flag: "--delete-files" or "--delete-folders"
        spec: Name spec passed to BFG
        repo: Repository the call targeted
    """

    flag: str
    spec: str
    repo: Path


class FakeBfg(Bfg):
    """In-memory fake BFG.

    Constructor Injection:
    ---------------------
    - failing_specs: Specs whose invocation raises RuntimeError

    Mutation Tracking:
    -----------------
    - calls: Every invocation in order, including failed ones
    """

    def __init__(self, *, failing_specs: set[str] | None = None) -> None:
        self._failing_specs = failing_specs if failing_specs is not None else set()
        self._calls: list[BfgCall] = []

    def delete_files(self, repo: Path, jar: Path, spec: str) -> None:
        self._record("--delete-files", spec, repo)

    def delete_folders(self, repo: Path, jar: Path, spec: str) -> None:
        self._record("--delete-folders", spec, repo)

    def _record(self, flag: str, spec: str, repo: Path) -> None:
        self._calls.append(BfgCall(flag=flag, spec=spec, repo=repo))
        if spec in self._failing_specs:
            raise RuntimeError(f"Failed to {flag[2:]} {spec} with BFG\nExit code: 1")

    @property
    def calls(self) -> list[BfgCall]:
        return list(self._calls)
