"""
Tests for input validation helpers.
"""

import doctest
from datetime import date

import pytest

import tdh.validation as validation
from tdh.models import Task
from tdh.validation import (
    collect_existing_tags,
    normalize_tags,
    split_tag_values,
    validate_project_name,
    validate_tags,
    validate_task_number,
    validate_task_text,
)


@pytest.mark.unit
def test_task_number_bounds():
    """
    Verify task numbers must fall within the collection.

    Returns
    -------
    None
        This test asserts on number validation.
    """
    validate_task_number(1, 1)
    with pytest.raises(ValueError, match=r"valid range: 1-2"):
        validate_task_number(0, 2)
    with pytest.raises(ValueError, match="the task list is empty"):
        validate_task_number(1, 0)


@pytest.mark.unit
def test_task_text_limits():
    """
    Ensure blank and overly long text is rejected.

    Returns
    -------
    None
        This test asserts on text validation.
    """
    assert validate_task_text("x" * 500) == "x" * 500
    with pytest.raises(ValueError, match="cannot be empty"):
        validate_task_text("   ")
    with pytest.raises(ValueError, match="actual: 501"):
        validate_task_text("x" * 501)


@pytest.mark.parametrize(
    ("tags", "message"),
    [
        ([""], "cannot be empty"),
        (["a" * 51], "Tag too long"),
        (["has space"], "Invalid tag format"),
        (["bad!"], "Invalid tag format"),
        (["dup", "DUP"], "Duplicate tag"),
    ],
)
@pytest.mark.unit
def test_invalid_tags(tags, message):
    """
    Verify each tag rule.

    Returns
    -------
    None
        This test asserts on tag validation.
    """
    with pytest.raises(ValueError, match=message):
        validate_tags(tags)


@pytest.mark.unit
def test_valid_tags_keep_order():
    """
    Verify accepted characters and order.

    Returns
    -------
    None
        This test asserts on accepted tags.
    """
    assert validate_tags(["b_2", "a-1", "C"]) == ["b_2", "a-1", "C"]


@pytest.mark.unit
def test_split_tag_values_drops_blanks():
    """
    Ensure empty comma segments are ignored.

    Returns
    -------
    None
        This test asserts on tag splitting.
    """
    assert split_tag_values(["a,,b", " ", "c "]) == ["a", "b", "c"]


@pytest.mark.unit
def test_normalize_tags_uses_stored_spelling():
    """
    Verify case variants of existing tags are rewritten.

    Returns
    -------
    None
        This test asserts on tag normalization.
    """
    tasks = [
        Task(id=1, text="a", created_at=date(2026, 2, 1), tags=["Work", "home"]),
        Task(id=2, text="b", created_at=date(2026, 2, 1), tags=["home", "errands"]),
    ]
    existing = collect_existing_tags(tasks)

    normalized, messages = normalize_tags(["work", "HOME", "new"], existing)

    assert existing == ["Work", "home", "errands"]
    assert normalized == ["Work", "home", "new"]
    assert messages == ["'work' -> 'Work'", "'HOME' -> 'home'"]


@pytest.mark.unit
def test_project_name_limits():
    """
    Verify project names are trimmed and must be non-empty and short.

    Returns
    -------
    None
        This test asserts on project name validation.
    """
    assert validate_project_name("  Home  ") == "Home"
    with pytest.raises(ValueError, match="cannot be empty"):
        validate_project_name("   ")
    with pytest.raises(ValueError, match=r"max: 100 characters, actual: 101"):
        validate_project_name("p" * 101)

@pytest.mark.unit
def test_validation_doctest_examples():
    """
    Run doctest examples embedded in validation docstrings.

    Returns
    -------
    None
        This test asserts that doctest examples succeed.
    """
    results = doctest.testmod(validation)
    assert results.failed == 0
