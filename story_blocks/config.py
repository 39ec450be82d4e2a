"""Configuration — variables d'environnement (lues à l'import)."""
import os
from pathlib import Path

DATA_DIR = Path(os.getenv("STORY_DATA_DIR", str(Path.cwd() / "data")))
DB_PATH  = os.getenv("DB_PATH", str(DATA_DIR / "story_blocks.db"))

# Politique du marqueur média (cf. core.normalizer.NormalizePolicy)
#   STORY_MEDIA_MISSING : "end" | "after_first"
#   STORY_MEDIA_LEADING : "move_to_end" | "insert_placeholder"
MEDIA_MISSING = os.getenv("STORY_MEDIA_MISSING", "end")
MEDIA_LEADING = os.getenv("STORY_MEDIA_LEADING", "move_to_end")
