"""Interactive selection of detected artifacts.

Entries are shown as a tree (directories first, then files, alphabetical)
and the user picks entries by number.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

import click

from claude_cleaner.file_cleaner import ArtifactEntry
from claude_cleaner.output import user_output


@dataclass
class _TreeNode:
    name: str
    path: str
    is_directory: bool
    entry: ArtifactEntry | None = None
    children: dict[str, _TreeNode] = field(default_factory=dict)


@dataclass(frozen=True)
class TreeOption:
    """One rendered tree line; entry is None for intermediate directories."""

    label: str
    path: str
    entry: ArtifactEntry | None


def _build_tree(entries: Sequence[ArtifactEntry]) -> _TreeNode:
    root = _TreeNode(name="", path="", is_directory=True)
    for entry in entries:
        parts = [p for p in entry.path.split("/") if p]
        current = root
        for i, part in enumerate(parts):
            is_last = i == len(parts) - 1
            child = current.children.get(part)
            if child is None:
                child = _TreeNode(
                    name=part,
                    path="/".join(parts[: i + 1]),
                    is_directory=entry.type == "directory" if is_last else True,
                )
                current.children[part] = child
            if is_last:
                child.entry = entry
            current = child
    return root


def _flatten(node: _TreeNode, prefix: str) -> list[TreeOption]:
    children = sorted(node.children.values(), key=lambda c: (not c.is_directory, c.name))
    options: list[TreeOption] = []
    for i, child in enumerate(children):
        is_last = i == len(children) - 1
        connector = "└─ " if is_last else "├─ "
        icon = "📁" if child.is_directory else "📄"
        reason = f" ({child.entry.reason})" if child.entry is not None else ""
        options.append(
            TreeOption(
                label=f"{prefix}{connector}{icon} {child.name}{reason}",
                path=child.path,
                entry=child.entry,
            )
        )
        options.extend(_flatten(child, prefix + ("   " if is_last else "│  ")))
    return options


def build_tree_options(entries: Sequence[ArtifactEntry]) -> list[TreeOption]:
    return _flatten(_build_tree(entries), "")


def parse_selection(text: str, count: int) -> list[int]:
    """Parse "all", "none" or a list like "1,3-5" into 0-based indices.

    Raises:
        click.BadParameter: For malformed input or numbers outside 1..count
    """
    value = text.strip().lower()
    if value == "all":
        return list(range(count))
    if value in ("", "none"):
        return []

    selected: list[int] = []
    for token in value.split(","):
        token = token.strip()
        if not token:
            continue
        start_text, sep, end_text = token.partition("-")
        try:
            start = int(start_text)
            end = int(end_text) if sep else start
        except ValueError:
            raise click.BadParameter(f"'{token}' is not a number or range") from None
        if start > end:
            raise click.BadParameter(f"Range '{token}' is reversed")
        if start < 1 or end > count:
            raise click.BadParameter(f"'{token}' is outside 1-{count}")
        selected.extend(i - 1 for i in range(start, end + 1) if i - 1 not in selected)
    return selected


Prompt = Callable[..., object]


def select_entries(
    entries: Sequence[ArtifactEntry], *, prompt: Prompt = click.prompt
) -> list[ArtifactEntry]:
    """Show the artifact tree and ask which entries to remove.

    Args:
        prompt: click.prompt compatible callable, injectable for tests
    """
    if not entries:
        return []

    user_output(f"\nFound {len(entries)} Claude artifacts. Select entries to remove:\n")
    selectable: list[ArtifactEntry] = []
    for option in build_tree_options(entries):
        if option.entry is None:
            user_output(f"      {option.label}")
            continue
        selectable.append(option.entry)
        number = click.style(f"{len(selectable):>4}", fg="cyan")
        user_output(f"{number}  {option.label}")

    indices = prompt(
        "\nEntries to remove (all, none, or numbers like 1,3-5)",
        default="all",
        value_proc=lambda text: parse_selection(text, len(selectable)),
        err=True,
    )
    assert isinstance(indices, list)
    return [selectable[i] for i in indices]


def display_selection_summary(selected: Sequence[ArtifactEntry]) -> None:
    if not selected:
        user_output(click.style("\nNo files selected for removal", fg="yellow"))
        return

    user_output(click.style(f"\n✓ Selected {len(selected)} item(s) for removal:", fg="green"))
    for entry in selected:
        icon = "📂" if entry.type == "directory" else "📄"
        user_output(f"  {icon} {entry.path}")
        if entry.first_commit is not None:
            user_output(
                f"    ↳ First appeared: {entry.first_commit.sha[:7]} ({entry.first_commit.date})"
            )
