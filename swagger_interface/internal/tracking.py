"""
Трекинг восстановимых ошибок генерации
"""

import logging
from typing import List, Protocol

logger = logging.getLogger(__name__)


class ErrorTracking(Protocol):
    """Получатель ошибок, после которых генерация продолжается"""

    def report(self, failure: BaseException) -> None: ...


class NoopErrorTracking:
    """Ничего не делает, используется по умолчанию"""

    def report(self, failure: BaseException) -> None:
        pass


class LoggingErrorTracking:
    """Пишет ошибки в лог с уровнем WARNING"""

    def __init__(self, log: logging.Logger = None):
        self._logger = log or logger

    def report(self, failure: BaseException) -> None:
        self._logger.warning("Пропущен фрагмент схемы: %s", failure, exc_info=failure)


class RecordingErrorTracking:
    """Накапливает ошибки в списке (для CLI и тестов)"""

    def __init__(self):
        self.failures: List[BaseException] = []

    def report(self, failure: BaseException) -> None:
        self.failures.append(failure)


def safe_report(error_tracking: ErrorTracking, failure: BaseException) -> None:
    """Передача ошибки трекеру; сбой самого трекера не прерывает генерацию"""
    try:
        error_tracking.report(failure)
    except Exception:
        logger.exception("Трекер ошибок упал при обработке %r", failure)
