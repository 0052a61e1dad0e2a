from contextvars import ContextVar
from datetime import datetime
from enum import StrEnum
import logging
import os
from pathlib import Path
import re
import sys
import zoneinfo

from loguru import logger as loguru_logger

from src.platform.config.core_setting import settings
from src.platform.logging.service_context import get_service_context


LOG_DIR = Path(os.environ.get('TEST_LOG_DIR', Path(__file__).resolve().parents[3] / 'logs'))

SENSITIVE_KEYWORDS = {
    'password',
    'mongo_url',
}

# Upper bound for any single logged value (image payloads travel through use cases)
MAX_LOGGED_CONTENT_LENGTH = 300

chain_start_time_var: ContextVar[float] = ContextVar('first_time_var', default=0)
call_depth_var: ContextVar[int] = ContextVar('call_depth_var', default=0)


class ExtraField(StrEnum):
    SERVICE_CONTEXT = 'service_context'
    CHAIN_START_TIME = 'chain_start_time'
    CALL_TARGET = 'call_target'


# uvicorn access line: '127.0.0.1:52100 - "GET /api/products HTTP/1.1" 200'
_ACCESS_LOG_STATUS = re.compile(r' - "[^"]* HTTP/[\d.]+" (?P<status>\d{3})\b')

# Below INFO these only report heartbeats, pool events and plugin probing
_QUIET_BELOW_INFO = ('pymongo', 'PIL', 'asyncio', 'multipart')


def access_log_level(message: str) -> str | None:
    """Loguru level for a uvicorn access line by status class; None for other messages."""
    if not (match := _ACCESS_LOG_STATUS.search(message)):
        return None

    status_code = int(match['status'])
    if status_code >= 500:
        return 'CRITICAL'
    if status_code >= 400:
        return 'ERROR'
    if status_code >= 300:
        return 'WARNING'
    return 'SUCCESS' if status_code >= 200 else 'INFO'


# Log format for LoguruIO decorated functions
io_log_format = ' | '.join(
    (
        f'<c>{{extra[{ExtraField.SERVICE_CONTEXT}]}}</>',
        '<lvl>{level:<8}</>',
        f'<c>{{file}}::{{function}}:{{line}}</>=><y>{{extra[{ExtraField.CALL_TARGET}]}}</>',
        '{message}',
        '<lk>{elapsed}</>',
        f'<lk>{{extra[{ExtraField.CHAIN_START_TIME}]:<18}}</>',
    )
)

loguru_logger.remove()  # Drop the default stderr sink; every sink uses io_log_format
custom_logger = loguru_logger.bind(
    **{
        ExtraField.SERVICE_CONTEXT: get_service_context(),
        ExtraField.CHAIN_START_TIME: '',
        ExtraField.CALL_TARGET: '',
    }
)


class InterceptHandler(logging.Handler):
    """Route stdlib logging (uvicorn, pymongo, PIL) into the catalog loguru sinks."""

    def emit(self, record: logging.LogRecord) -> None:
        if record.levelno < logging.INFO and record.name.startswith(_QUIET_BELOW_INFO):
            return

        message = record.getMessage()
        level: str | int | None = access_log_level(message)
        if level is None:
            try:
                level = loguru_logger.level(record.levelname).name
            except ValueError:
                level = record.levelno

        # Point loguru at the frame that called logging, not at this handler
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back  # type: ignore
            depth += 1

        custom_logger.opt(depth=depth, exception=record.exc_info).log(level, message)


min_log_level = 'DEBUG' if settings.DEBUG else 'INFO'

custom_logger.add(sys.stdout, format=io_log_format, level=min_log_level, enqueue=True)

# Hourly files only while debugging; production ships stdout to the log collector
if settings.DEBUG:
    hour = datetime.now(zoneinfo.ZoneInfo(settings.LOG_TIMEZONE)).strftime('%Y-%m-%d_%H')
    prefix = 'test_' if os.environ.get('TEST_LOG_DIR') else ''
    custom_logger.add(
        LOG_DIR / f'{prefix}{hour}.log',
        format=io_log_format,
        rotation='1 hour',
        retention='7 days',
        compression='gz',
        enqueue=True,
        level=min_log_level,
    )

logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

for logger_name in ('uvicorn', 'uvicorn.error', 'uvicorn.access'):
    logging_logger = logging.getLogger(logger_name)
    logging_logger.handlers = [InterceptHandler()]
    logging_logger.propagate = False
