"""Batch argument handling for BFG Repo-Cleaner.

BFG accepts several names in one invocation as a brace list (`{a,b,c}`).
A name containing a comma or a brace cannot be expressed in that syntax, so
the whole batch is rejected before BFG is ever invoked.
"""

from collections.abc import Sequence

from claude_cleaner.errors import CleanerError

BATCH_FORBIDDEN_CHARS = frozenset({",", "{", "}"})


class FilenameValidationError(CleanerError):
    """A filename cannot be passed to BFG as part of a brace-list batch.

    Attributes:
        offending_file: The first filename containing a forbidden character
        offending_char: The forbidden character found in it
        reason: Human-readable explanation, also used as the message
    """

    def __init__(self, offending_file: str, offending_char: str) -> None:
        reason = (
            f"Cannot perform batched operations on these files because '{offending_file}' "
            f"contains the character '{offending_char}'. "
            f"Please remove '{offending_file}' manually and retry with it excluded."
        )
        super().__init__(reason, "INVALID_FILENAME")
        self.offending_file = offending_file
        self.offending_char = offending_char
        self.reason = reason


def validate_filenames_for_batch(filenames: Sequence[str]) -> None:
    """Check that every filename can be expressed in a BFG brace list.

    Scans filenames in order and characters in order, stopping at the first
    forbidden character.

    Raises:
        FilenameValidationError: On the first filename containing `,`, `{` or `}`
    """
    for filename in filenames:
        for char in filename:
            if char in BATCH_FORBIDDEN_CHARS:
                raise FilenameValidationError(filename, char)


def build_batch_spec(names: Sequence[str]) -> str:
    """Build the BFG name argument: a bare name, or `{a,b}` for several.

    Callers validate first; this does no escaping.
    """
    if not names:
        raise ValueError("build_batch_spec requires at least one name")
    if len(names) == 1:
        return names[0]
    return "{" + ",".join(names) + "}"
