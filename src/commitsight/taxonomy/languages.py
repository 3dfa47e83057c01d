"""File name to language detection."""

from __future__ import annotations

_SPECIAL_NAMES = {
    "dockerfile": "Dockerfile",
    "makefile": "Makefile",
    "gnumakefile": "Makefile",
    "cmakelists.txt": "CMake",
}

EXTENSION_LANGUAGES: dict[str, str] = {
    "rs": "Rust",
    "py": "Python",
    "pyw": "Python",
    "pyx": "Python",
    "js": "JavaScript",
    "mjs": "JavaScript",
    "cjs": "JavaScript",
    "jsx": "JavaScript",
    "ts": "TypeScript",
    "tsx": "TypeScript",
    "go": "Go",
    "java": "Java",
    "kt": "Kotlin",
    "kts": "Kotlin",
    "scala": "Scala",
    "clj": "Clojure",
    "groovy": "Groovy",
    "c": "C",
    "h": "C",
    "cpp": "C++",
    "cc": "C++",
    "cxx": "C++",
    "hpp": "C++",
    "hxx": "C++",
    "cs": "C#",
    "swift": "Swift",
    "m": "Objective-C",
    "mm": "Objective-C++",
    "rb": "Ruby",
    "rake": "Ruby",
    "gemspec": "Ruby",
    "php": "PHP",
    "ex": "Elixir",
    "exs": "Elixir",
    "erl": "Erlang",
    "hs": "Haskell",
    "lhs": "Haskell",
    "ml": "OCaml",
    "mli": "OCaml",
    "fs": "F#",
    "fsx": "F#",
    "sh": "Shell",
    "bash": "Shell",
    "zsh": "Shell",
    "fish": "Shell",
    "ps1": "PowerShell",
    "psm1": "PowerShell",
    "html": "HTML",
    "htm": "HTML",
    "css": "CSS",
    "scss": "SCSS",
    "sass": "Sass",
    "less": "Less",
    "vue": "Vue",
    "svelte": "Svelte",
    "sql": "SQL",
    "graphql": "GraphQL",
    "gql": "GraphQL",
    "json": "JSON",
    "yaml": "YAML",
    "yml": "YAML",
    "toml": "TOML",
    "xml": "XML",
    "ini": "INI",
    "md": "Markdown",
    "markdown": "Markdown",
    "rst": "reStructuredText",
    "txt": "Text",
    "lua": "Lua",
    "r": "R",
    "rmd": "R",
    "pl": "Perl",
    "pm": "Perl",
    "dart": "Dart",
    "zig": "Zig",
    "nim": "Nim",
    "jl": "Julia",
    "v": "V",
    "sol": "Solidity",
    "move": "Move",
    "proto": "Protocol Buffers",
    "tf": "Terraform",
    "tfvars": "Terraform",
}


def file_extension(filename: str) -> str:
    """Lowercased text after the last dot of the base name, or ``""``."""

    base = filename.rsplit("/", 1)[-1]
    if "." not in base:
        return ""
    return base.rsplit(".", 1)[-1].lower()


def detect_language(filename: str) -> str | None:
    """Infer a language tag from a path, or None when unknown."""

    base = filename.rsplit("/", 1)[-1].lower()
    if base in _SPECIAL_NAMES:
        return _SPECIAL_NAMES[base]
    if base.startswith("dockerfile."):
        return "Dockerfile"
    if base.endswith(".d.ts"):
        return "TypeScript"
    return EXTENSION_LANGUAGES.get(file_extension(base))
