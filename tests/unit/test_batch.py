"""Tests for BFG batch filename validation."""

import pytest

from claude_cleaner.batch import (
    FilenameValidationError,
    build_batch_spec,
    validate_filenames_for_batch,
)
from claude_cleaner.errors import CleanerError


def test_plain_names_pass_validation() -> None:
    """Names without commas or braces are accepted."""
    validate_filenames_for_batch(["CLAUDE.md", ".claude", "claude-temp.log", "a b.txt"])


def test_empty_list_passes_validation() -> None:
    """An empty batch has nothing to reject."""
    validate_filenames_for_batch([])


@pytest.mark.parametrize("char", [",", "{", "}"])
def test_forbidden_character_is_reported(char: str) -> None:
    """Each forbidden character is named in the error."""
    name = f"notes{char}claude.md"

    with pytest.raises(FilenameValidationError) as exc_info:
        validate_filenames_for_batch(["CLAUDE.md", name])

    error = exc_info.value
    assert error.offending_file == name
    assert error.offending_char == char
    assert error.code == "INVALID_FILENAME"


def test_first_offending_file_and_char_win() -> None:
    """Scanning stops at the first forbidden character of the first bad file."""
    with pytest.raises(FilenameValidationError) as exc_info:
        validate_filenames_for_batch(["ok", "a}b,c", "x{y"])

    assert exc_info.value.offending_file == "a}b,c"
    assert exc_info.value.offending_char == "}"


def test_error_message_tells_user_to_remove_file_manually() -> None:
    """The message names the file and the manual workaround."""
    with pytest.raises(FilenameValidationError) as exc_info:
        validate_filenames_for_batch(["a,b"])

    assert exc_info.value.reason == (
        "Cannot perform batched operations on these files because 'a,b' contains the "
        "character ','. Please remove 'a,b' manually and retry with it excluded."
    )
    assert exc_info.value.message == exc_info.value.reason


def test_validation_error_is_a_cleaner_error() -> None:
    """Callers catching CleanerError also see batch failures."""
    assert issubclass(FilenameValidationError, CleanerError)


def test_build_batch_spec_single_name_is_bare() -> None:
    """One name is passed through unchanged."""
    assert build_batch_spec(["CLAUDE.md"]) == "CLAUDE.md"


def test_build_batch_spec_multiple_names_use_braces() -> None:
    """Several names become a brace list in the given order."""
    assert build_batch_spec(["CLAUDE.md", ".clauderc"]) == "{CLAUDE.md,.clauderc}"


def test_build_batch_spec_rejects_empty() -> None:
    """An empty batch is a programming error."""
    with pytest.raises(ValueError):
        build_batch_spec([])
