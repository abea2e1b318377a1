import sys

from loguru import logger

from quicknote.api import create_app
from quicknote.config import settings
from quicknote.engine import KnowledgeEngine
from quicknote.note_store.local import LocalNoteStore
from quicknote.search_index.token_index import TokenSearchIndex

logger.configure(handlers=[{"sink": sys.stderr, "level": settings.log_level}])

logger.info(f"Opening vault at {settings.note_store_path}")
engine = KnowledgeEngine(
    note_store=LocalNoteStore(settings.note_store_path),
    search_index=TokenSearchIndex(),
)
if settings.seed_demo_note:
    engine.seed_welcome_note()

logger.info(f"QuickNote is ready: {engine.note_count()} note(s) in vault")
app = create_app(engine=engine)
