"""
core/logging.py 테스트

핸들러 구성 및 로그 파일 경로 테스트
"""

import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

import pytest

from binance_futures.core.constants import Paths
from binance_futures.core.logging import get_log_file_path, setup_logging


@pytest.fixture
def restore_root_logger():
    """테스트 후 루트 로거 핸들러/레벨 복원"""
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    yield root
    for handler in root.handlers:
        if handler not in saved_handlers:
            handler.close()
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)


class TestSetupLogging:
    """setup_logging 테스트"""

    def test_console_only(self, restore_root_logger: logging.Logger) -> None:
        """log_dir 미지정 시 콘솔 핸들러만"""
        root = setup_logging("trader")

        assert root is restore_root_logger
        assert len(root.handlers) == 1
        assert not isinstance(root.handlers[0], TimedRotatingFileHandler)

    def test_file_handler(self, restore_root_logger: logging.Logger, temp_dir: Path) -> None:
        """log_dir 지정 시 daily 롤링 파일 핸들러 추가"""
        log_dir = temp_dir / "logs"
        root = setup_logging("trader", file_level=logging.DEBUG, log_dir=log_dir)

        file_handlers = [h for h in root.handlers if isinstance(h, TimedRotatingFileHandler)]
        assert len(file_handlers) == 1
        assert file_handlers[0].level == logging.DEBUG
        assert log_dir.exists()
        assert Path(file_handlers[0].baseFilename).name == "trader.log"

    def test_noisy_loggers_quietened(self, restore_root_logger: logging.Logger) -> None:
        """httpx / httpcore는 WARNING"""
        setup_logging("trader")

        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("httpcore").level == logging.WARNING

    def test_repeated_setup_does_not_duplicate(self, restore_root_logger: logging.Logger) -> None:
        """재호출 시 핸들러 중복 없음"""
        setup_logging("trader")
        root = setup_logging("trader")

        assert len(root.handlers) == 1


class TestGetLogFilePath:
    def test_default_dir(self) -> None:
        assert get_log_file_path("trader") == Paths.LOGS_DIR / "trader.log"

    def test_custom_dir(self, temp_dir: Path) -> None:
        assert get_log_file_path("bot", temp_dir) == temp_dir / "bot.log"
