"""
Logging configuration

Console output always; a rotating file (50MB, 7 backups) when LOGS_PATH is set.
"""
import logging
import os
from logging.handlers import RotatingFileHandler

from .config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_configured = False

def setup_logging(level: str = None) -> None:
    global _configured
    if _configured:
        return
    
    level = getattr(logging, (level or settings.LOG_LEVEL).upper(), logging.INFO)
    handlers = []
    
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt='%H:%M:%S'))
    handlers.append(console_handler)
    
    if settings.LOGS_PATH:
        os.makedirs(settings.LOGS_PATH, exist_ok=True)
        file_handler = RotatingFileHandler(
            os.path.join(settings.LOGS_PATH, "backoffice.log"),
            maxBytes=50*1024*1024,  # 50MB
            backupCount=7,
            encoding='utf-8'
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
        handlers.append(file_handler)
    
    # SQL echo is controlled by DEBUG, keep the engine loggers quiet otherwise
    logging.getLogger('sqlalchemy').setLevel(logging.WARNING)
    logging.getLogger('sqlalchemy.engine').setLevel(logging.WARNING)
    logging.getLogger('sqlalchemy.pool').setLevel(logging.WARNING)
    
    logging.basicConfig(level=level, handlers=handlers)
    _configured = True
