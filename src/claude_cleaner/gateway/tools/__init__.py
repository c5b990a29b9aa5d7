"""Tool environment gateway: executable lookup, version probes, installs and downloads.

Import from submodules:
- abc: ToolEnvironment
- real: RealToolEnvironment
- fake: FakeToolEnvironment
- dry_run: DryRunToolEnvironment
- printing: PrintingToolEnvironment
"""
