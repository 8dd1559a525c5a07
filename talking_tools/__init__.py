"""
Talking prompts: pick a pronoun and a topic, get sentences ready to speak.

The two core operations are generate_suggestions() and build_prompt().
"""

from .activity_catalog import BASE_PHRASES, ActivityCatalog
from .pronouns import Pronoun
from .sentence_builder import SentenceBuilder, build_prompt
from .suggestion_generator import MAX_SUGGESTIONS, SuggestionGenerator, generate_suggestions

__all__ = [
    "BASE_PHRASES",
    "MAX_SUGGESTIONS",
    "ActivityCatalog",
    "Pronoun",
    "SentenceBuilder",
    "SuggestionGenerator",
    "build_prompt",
    "generate_suggestions",
]
