"""
Exceptions du module.

Le moteur de blocs (normalizer, store) ne lève jamais pour un problème
structurel : seules la persistance et la couche HTTP utilisent ces classes.
"""


class StoryError(Exception):
    """Erreur de base story_blocks."""


class StoryValidationError(StoryError, ValueError):
    """Champ obligatoire manquant à la sauvegarde (ex : titre vide)."""


class StoryNotFound(StoryError, LookupError):
    """Article introuvable en base."""
