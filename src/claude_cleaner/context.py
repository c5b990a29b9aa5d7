"""Application context with dependency injection."""

from dataclasses import dataclass, replace
from pathlib import Path

from claude_cleaner.config import get_bfg_jar_path, get_cache_dir
from claude_cleaner.gateway.bfg.abc import Bfg
from claude_cleaner.gateway.bfg.dry_run import DryRunBfg
from claude_cleaner.gateway.bfg.printing import PrintingBfg
from claude_cleaner.gateway.bfg.real import RealBfg
from claude_cleaner.gateway.git.abc import Git
from claude_cleaner.gateway.git.dry_run import DryRunGit
from claude_cleaner.gateway.git.printing import PrintingGit
from claude_cleaner.gateway.git.real import RealGit
from claude_cleaner.gateway.tools.abc import ToolEnvironment
from claude_cleaner.gateway.tools.dry_run import DryRunToolEnvironment
from claude_cleaner.gateway.tools.printing import PrintingToolEnvironment
from claude_cleaner.gateway.tools.real import RealToolEnvironment


@dataclass(frozen=True)
class CleanerContext:
    """Immutable context holding all dependencies for cleaner operations.

    Created at the CLI entry point and threaded through the application.
    Tests build one with CleanerContext.for_test() and pass it as `obj=`.
    """

    git: Git
    bfg: Bfg
    tools: ToolEnvironment
    cwd: Path
    cache_dir: Path
    dry_run: bool
    verbose: bool

    @property
    def bfg_jar(self) -> Path:
        return get_bfg_jar_path(self.cache_dir)

    def for_dry_run(self) -> "CleanerContext":
        """Return a copy whose gateways no-op every mutation."""
        if self.dry_run:
            return self
        return replace(
            self,
            git=DryRunGit(self.git),
            bfg=DryRunBfg(self.bfg),
            tools=DryRunToolEnvironment(self.tools),
            dry_run=True,
        )

    @staticmethod
    def for_test(
        git: Git | None = None,
        bfg: Bfg | None = None,
        tools: ToolEnvironment | None = None,
        cwd: Path | None = None,
        cache_dir: Path | None = None,
        dry_run: bool = False,
        verbose: bool = False,
    ) -> "CleanerContext":
        """Create a test context; unspecified gateways are empty fakes.

        Example:
            >>> git = FakeGit(git_dirs={Path("/repo")})
            >>> ctx = CleanerContext.for_test(git=git, cwd=Path("/repo"))
        """
        from claude_cleaner.gateway.bfg.fake import FakeBfg
        from claude_cleaner.gateway.git.fake import FakeGit
        from claude_cleaner.gateway.tools.fake import FakeToolEnvironment

        return CleanerContext(
            git=git if git is not None else FakeGit(),
            bfg=bfg if bfg is not None else FakeBfg(),
            tools=tools if tools is not None else FakeToolEnvironment(),
            cwd=cwd if cwd is not None else Path("/test/default/cwd"),
            cache_dir=cache_dir if cache_dir is not None else Path("/test/cache"),
            dry_run=dry_run,
            verbose=verbose,
        )


def create_context(*, dry_run: bool = False, verbose: bool = False) -> CleanerContext:
    """Create production context with real implementations.

    Args:
        dry_run: Wrap every gateway so mutations become no-ops
        verbose: Wrap every gateway so mutating commands are echoed

    Example:
        >>> ctx = create_context(dry_run=False)
        >>> ctx.git.has_head(Path("."))
    """
    git: Git = RealGit()
    bfg: Bfg = RealBfg()
    tools: ToolEnvironment = RealToolEnvironment()

    if dry_run:
        git = DryRunGit(git)
        bfg = DryRunBfg(bfg)
        tools = DryRunToolEnvironment(tools)

    if verbose:
        git = PrintingGit(git, dry_run=dry_run)
        bfg = PrintingBfg(bfg, dry_run=dry_run)
        tools = PrintingToolEnvironment(tools, dry_run=dry_run)

    return CleanerContext(
        git=git,
        bfg=bfg,
        tools=tools,
        cwd=Path.cwd(),
        cache_dir=get_cache_dir(),
        dry_run=dry_run,
        verbose=verbose,
    )
