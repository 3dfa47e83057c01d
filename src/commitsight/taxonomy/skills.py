"""Static skill dictionary with alias resolution."""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING

from commitsight.models.skill import Skill, SkillCategory

if TYPE_CHECKING:
    from collections.abc import Mapping

_LANGUAGES: dict[str, tuple[str, ...]] = {
    "rust": ("rs",),
    "python": ("py", "python3"),
    "javascript": ("js", "ecmascript", "es6", "es2015"),
    "typescript": ("ts",),
    "go": ("golang",),
    "java": (),
    "kotlin": ("kt",),
    "swift": (),
    "c": (),
    "cpp": ("c++", "cxx"),
    "csharp": ("c#", "cs"),
    "ruby": ("rb",),
    "php": (),
    "scala": (),
    "haskell": ("hs",),
    "elixir": ("ex",),
    "sql": ("plsql", "tsql"),
    "shell": ("bash", "sh", "zsh"),
}

_FRAMEWORKS: dict[str, tuple[str, ...]] = {
    "react": ("reactjs", "react.js"),
    "vue": ("vuejs", "vue.js"),
    "angular": ("angularjs",),
    "svelte": ("sveltekit",),
    "nextjs": ("next.js", "next"),
    "nuxt": ("nuxtjs", "nuxt.js"),
    "express": ("expressjs",),
    "django": (),
    "flask": (),
    "fastapi": (),
    "spring": ("spring boot", "springboot"),
    "rails": ("ruby on rails", "ror"),
    "actix": ("actix-web",),
    "axum": (),
    "rocket": (),
    "gin": (),
    "echo": (),
    "react native": ("react-native", "rn"),
    "flutter": (),
    "swiftui": (),
}

_TOOLS: dict[str, tuple[str, ...]] = {
    "docker": ("dockerfile", "containerization"),
    "kubernetes": ("k8s",),
    "terraform": ("tf", "iac"),
    "aws": ("amazon web services",),
    "gcp": ("google cloud", "google cloud platform"),
    "azure": ("microsoft azure",),
    "git": (),
    "github actions": ("gha",),
    "gitlab ci": ("gitlab-ci",),
    "jenkins": (),
    "postgresql": ("postgres", "psql"),
    "mysql": ("mariadb",),
    "mongodb": ("mongo",),
    "redis": (),
    "elasticsearch": ("elastic", "es"),
    "graphql": ("gql",),
    "rest api": ("restful", "rest"),
}

_DOMAINS: dict[str, tuple[str, ...]] = {
    "machine learning": ("ml", "deep learning", "dl", "ai"),
    "data science": ("data analysis", "analytics"),
    "devops": ("sre", "platform engineering"),
    "security": ("cybersecurity", "infosec", "appsec"),
    "frontend": ("front-end", "ui", "client-side"),
    "backend": ("back-end", "server-side"),
    "fullstack": ("full-stack", "full stack"),
    "mobile": ("ios", "android", "mobile development"),
    "embedded": ("embedded systems", "iot"),
    "distributed systems": ("microservices", "distributed"),
    "databases": ("database design", "data modeling"),
}

_PRACTICES: dict[str, tuple[str, ...]] = {
    "testing": ("unit testing", "tdd", "test-driven", "integration testing"),
    "documentation": ("docs", "technical writing"),
    "code review": ("pr review", "pull request review"),
    "ci/cd": ("continuous integration", "continuous deployment", "continuous delivery"),
    "agile": ("scrum", "kanban"),
    "clean code": ("solid", "dry", "kiss"),
    "refactoring": (),
    "debugging": ("troubleshooting",),
    "performance optimization": ("perf", "optimization"),
    "error handling": ("exception handling",),
}

_CATEGORY_TABLES: tuple[tuple[SkillCategory, dict[str, tuple[str, ...]]], ...] = (
    (SkillCategory.LANGUAGE, _LANGUAGES),
    (SkillCategory.FRAMEWORK, _FRAMEWORKS),
    (SkillCategory.TOOL, _TOOLS),
    (SkillCategory.DOMAIN, _DOMAINS),
    (SkillCategory.PRACTICE, _PRACTICES),
)

_CATEGORY_NAMES: dict[str, SkillCategory] = {
    "language": SkillCategory.LANGUAGE,
    "framework": SkillCategory.FRAMEWORK,
    "library": SkillCategory.LIBRARY,
    "tool": SkillCategory.TOOL,
    "domain": SkillCategory.DOMAIN,
    "practice": SkillCategory.PRACTICE,
}


def slugify(normalized_name: str) -> str:
    return normalized_name.replace(" ", "_")


def _build() -> tuple[dict[str, Skill], dict[str, str]]:
    skills: dict[str, Skill] = {}
    aliases: dict[str, str] = {}
    for category, table in _CATEGORY_TABLES:
        for name, name_aliases in table.items():
            key = name.casefold()
            skills[key] = Skill(id=slugify(key), name=name, category=category, aliases=name_aliases)
            for alias in name_aliases:
                aliases[alias.casefold()] = key
    return skills, aliases


class SkillTaxonomy:
    """Canonical skills and their aliases.

    The tables are built once at construction and never mutated afterwards.
    Skill names reported by the model that are not in the dictionary are still
    normalized (stripped and case-folded), so normalization is total.
    """

    def __init__(self) -> None:
        skills, aliases = _build()
        self.skills: Mapping[str, Skill] = MappingProxyType(skills)
        self.aliases: Mapping[str, str] = MappingProxyType(aliases)

    def normalize(self, name: str) -> str:
        folded = name.strip().casefold()
        return self.aliases.get(folded, folded)

    def categorize(self, category: str) -> SkillCategory:
        return _CATEGORY_NAMES.get(category.strip().casefold(), SkillCategory.CONCEPT)

    def get(self, name: str) -> Skill | None:
        return self.skills.get(self.normalize(name))

    def get_or_create(self, name: str, category: SkillCategory) -> Skill:
        """Known skill for ``name``, or a new one keyed by its normalized form."""

        normalized = self.normalize(name)
        known = self.skills.get(normalized)
        if known is not None:
            return known
        return Skill(id=slugify(normalized), name=name.strip(), category=category)


_DEFAULT: SkillTaxonomy | None = None


def default_taxonomy() -> SkillTaxonomy:
    global _DEFAULT
    if _DEFAULT is None:
        _DEFAULT = SkillTaxonomy()
    return _DEFAULT
