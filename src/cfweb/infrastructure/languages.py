"""Submission languages and their judge compiler IDs."""

from typing import Optional

from cfweb.domain.models import Language

SUPPORTED_LANGUAGES: tuple[Language, ...] = (
    Language(id="cpp17", name="GNU G++17 7.3.0", extension=".cpp", compiler_id=54),
    Language(id="cpp20", name="GNU G++20 11.2.0 (64 bit)", extension=".cpp", compiler_id=89),
    Language(id="cpp23", name="GNU G++23 14.2 (64 bit)", extension=".cpp", compiler_id=91),
    Language(id="python3", name="Python 3.8.10", extension=".py", compiler_id=31),
    Language(id="pypy3", name="PyPy 3.10 (7.3.15)", extension=".py", compiler_id=70),
    Language(id="java17", name="Java 17 64bit", extension=".java", compiler_id=87),
    Language(id="java21", name="Java 21 64bit", extension=".java", compiler_id=88),
    Language(id="go", name="Go 1.22.2", extension=".go", compiler_id=32),
    Language(id="rust", name="Rust 1.75.0 (2021)", extension=".rs", compiler_id=75),
    Language(id="kotlin", name="Kotlin 1.9.21", extension=".kt", compiler_id=83),
    Language(id="csharp", name="C# 10, .NET SDK 6.0", extension=".cs", compiler_id=79),
    Language(id="ruby", name="Ruby 3.2.2", extension=".rb", compiler_id=67),
    Language(id="js", name="JavaScript V8 4.8.0", extension=".js", compiler_id=34),
    Language(id="php", name="PHP 8.1.7", extension=".php", compiler_id=6),
    Language(id="haskell", name="Haskell GHC 8.10.1", extension=".hs", compiler_id=12),
    Language(id="scala", name="Scala 2.12.8", extension=".scala", compiler_id=20),
)


def get_language_by_extension(extension: str) -> Optional[Language]:
    """First language registered for a file extension like ".cpp"."""
    for language in SUPPORTED_LANGUAGES:
        if language.extension == extension:
            return language
    return None


def get_language_by_id(language_id: str) -> Optional[Language]:
    for language in SUPPORTED_LANGUAGES:
        if language.id == language_id:
            return language
    return None


def get_language_by_compiler_id(compiler_id: int) -> Optional[Language]:
    for language in SUPPORTED_LANGUAGES:
        if language.compiler_id == compiler_id:
            return language
    return None
