"""Logging configuration.

Two channels:
1. loguru: operational and debug logs
2. structlog: structured business events (cache hits, upstream failures, fan-out)
"""

import sys
from typing import Any

import structlog
from loguru import logger

from src.core.config import settings


def setup_logging() -> None:
    """Configure application logging with structlog and loguru."""
    _configure_structlog()
    _configure_loguru()

    logger.info(f"Logging configured with level: {settings.LOG_LEVEL}")


def _configure_structlog() -> None:
    # 本地开发使用人类可读格式，其余环境输出 JSON
    if settings.ENVIRONMENT == "local":
        renderer = structlog.dev.ConsoleRenderer(colors=True)
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.CallsiteParameterAdder(
                [
                    structlog.processors.CallsiteParameter.MODULE,
                    structlog.processors.CallsiteParameter.FUNC_NAME,
                    structlog.processors.CallsiteParameter.LINENO,
                ]
            ),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            _get_log_level_number(settings.LOG_LEVEL)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def _configure_loguru() -> None:
    logger.remove()

    logger.add(
        sys.stderr,
        level=settings.LOG_LEVEL,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        ),
        colorize=True,
    )

    if settings.ENVIRONMENT != "local":
        logger.add(
            "logs/newslens_{time:YYYY-MM-DD}.log",
            rotation="00:00",
            retention="14 days",
            level="INFO",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
        )


def _get_log_level_number(level: str) -> int:
    levels = {
        "DEBUG": 10,
        "INFO": 20,
        "WARNING": 30,
        "ERROR": 40,
        "CRITICAL": 50,
    }
    return levels.get(level.upper(), 20)


# ============================================================================
# 业务事件日志
# ============================================================================


class BusinessEvents:
    """Structured business event helpers.

    Usage:
        from src.core.infrastructure.logging import BusinessEvents

        BusinessEvents.news_cache_hit(endpoint="/top-headlines", cache_key="news:...")
    """

    _log = structlog.get_logger("business.events")

    @classmethod
    def news_cache_hit(cls, endpoint: str, cache_key: str, age_sec: float) -> None:
        cls._log.info(
            "news_cache_hit",
            event_type="cache",
            endpoint=endpoint,
            cache_key=cache_key,
            age_sec=round(age_sec, 3),
        )

    @classmethod
    def news_cache_miss(cls, endpoint: str, cache_key: str, stale: bool) -> None:
        cls._log.info(
            "news_cache_miss",
            event_type="cache",
            endpoint=endpoint,
            cache_key=cache_key,
            stale=stale,
        )

    @classmethod
    def upstream_request_failed(
        cls,
        endpoint: str,
        error: str,
        status_code: int | None = None,
        **extra: Any,
    ) -> None:
        cls._log.warning(
            "upstream_request_failed",
            event_type="upstream_error",
            endpoint=endpoint,
            error=error,
            status_code=status_code,
            **extra,
        )

    @classmethod
    def fanout_combination_failed(
        cls,
        category: str,
        country: str,
        error: str,
        **extra: Any,
    ) -> None:
        """记录个性化扇出中单个组合失败（不影响整体结果）。"""
        cls._log.warning(
            "fanout_combination_failed",
            event_type="fanout",
            category=category,
            country=country,
            error=error,
            **extra,
        )

    @classmethod
    def personalized_news_served(
        cls,
        combinations: int,
        failed: int,
        total_results: int,
        returned: int,
        **extra: Any,
    ) -> None:
        cls._log.info(
            "personalized_news_served",
            event_type="personalized",
            combinations=combinations,
            failed=failed,
            total_results=total_results,
            returned=returned,
            **extra,
        )
