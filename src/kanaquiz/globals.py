from fastapi.templating import Jinja2Templates

from .config import settings
from .kana import CharacterSetManager
from .session import SessionStore

templates = Jinja2Templates(directory=settings.TEMPLATE_DIR)
charset_manager = CharacterSetManager(settings.DATA_DIR, settings.BATCH_SIZE)
sessions = SessionStore(settings.SESSION_TIMEOUT_MINUTES)
