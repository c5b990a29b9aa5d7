"""Git gateway: repository queries and history-rewriting operations.

Import from submodules:
- abc: Git, CommitInfo, CommitMessage
- real: RealGit
- fake: FakeGit
- dry_run: DryRunGit
- printing: PrintingGit
"""
