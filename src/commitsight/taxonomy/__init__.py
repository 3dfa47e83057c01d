"""Language detection and the skill dictionary."""

from .languages import detect_language, file_extension
from .skills import SkillTaxonomy, default_taxonomy

__all__ = ["SkillTaxonomy", "default_taxonomy", "detect_language", "file_extension"]
