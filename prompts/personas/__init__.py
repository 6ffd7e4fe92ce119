"""
Persona definitions.

One persona per conversation mode. Each is a template that the context
composer fills with the pet's profile and renders as the behavioral
instructions block.

Usage:
    from prompts.personas import ACTIVE_PERSONA, MEMORIAL_PERSONA
"""

from prompts.personas.active import ACTIVE_PERSONA
from prompts.personas.memorial import MEMORIAL_PERSONA

__all__ = [
    "ACTIVE_PERSONA",
    "MEMORIAL_PERSONA",
]
