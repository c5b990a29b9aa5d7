"""BFG Repo-Cleaner gateway.

Import from submodules:
- abc: Bfg
- real: RealBfg
- fake: FakeBfg
- dry_run: DryRunBfg
- printing: PrintingBfg
"""
