"""Unit tests for the language registry."""

from cfweb.infrastructure.languages import (
    SUPPORTED_LANGUAGES,
    get_language_by_compiler_id,
    get_language_by_extension,
    get_language_by_id,
)


def test_lookup_by_extension_returns_first_registered():
    language = get_language_by_extension(".cpp")

    assert language is not None
    assert language.id == "cpp17"


def test_lookup_by_id():
    language = get_language_by_id("python3")

    assert language is not None
    assert language.extension == ".py"
    assert language.compiler_id == 31


def test_lookup_by_compiler_id():
    language = get_language_by_compiler_id(75)

    assert language is not None
    assert language.id == "rust"


def test_unknown_lookups_return_none():
    assert get_language_by_extension(".cob") is None
    assert get_language_by_id("cobol") is None
    assert get_language_by_compiler_id(-1) is None


def test_ids_and_compiler_ids_are_unique():
    ids = [language.id for language in SUPPORTED_LANGUAGES]
    compiler_ids = [language.compiler_id for language in SUPPORTED_LANGUAGES]

    assert len(ids) == len(set(ids))
    assert len(compiler_ids) == len(set(compiler_ids))
