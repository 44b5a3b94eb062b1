# launchpd/core/reporter.py
"""Status reporting and prompting interfaces

Services report progress and ask questions only through these
interfaces, so they run the same under a terminal, a test or a script.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional


class StatusReporter(ABC):
    """Abstract progress reporter with a single active status line"""

    @abstractmethod
    def start(self, text: str) -> None:
        """Begin a status line"""
        pass

    @abstractmethod
    def update(self, text: str) -> None:
        """Replace the text of the active status line"""
        pass

    @abstractmethod
    def succeed(self, text: Optional[str] = None) -> None:
        """Finish the active status line as successful"""
        pass

    @abstractmethod
    def fail(self, text: Optional[str] = None) -> None:
        """Finish the active status line as failed"""
        pass

    @abstractmethod
    def warn(self, text: Optional[str] = None) -> None:
        """Finish the active status line with a warning"""
        pass

    @abstractmethod
    def stop(self) -> None:
        """Clear the active status line without a verdict"""
        pass

    @abstractmethod
    def info(self, message: str) -> None:
        pass

    @abstractmethod
    def warning(self, message: str) -> None:
        pass

    @abstractmethod
    def success(self, message: str) -> None:
        pass


class Prompter(ABC):
    """Abstract interactive prompter"""

    @abstractmethod
    def confirm(self, question: str, default: bool = True) -> bool:
        pass

    @abstractmethod
    def ask(self, question: str, default: Optional[str] = None) -> str:
        pass

    @abstractmethod
    def ask_secret(self, question: str) -> str:
        pass


class LoggingReporter(StatusReporter):
    """Reporter that writes everything to a logger (headless runs)"""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger("launchpd")
        self._current: Optional[str] = None

    def start(self, text: str) -> None:
        self._current = text
        self.logger.info(text)

    def update(self, text: str) -> None:
        self._current = text
        self.logger.debug(text)

    def succeed(self, text: Optional[str] = None) -> None:
        self.logger.info(text or self._current or "Done")
        self._current = None

    def fail(self, text: Optional[str] = None) -> None:
        self.logger.error(text or self._current or "Failed")
        self._current = None

    def warn(self, text: Optional[str] = None) -> None:
        self.logger.warning(text or self._current or "Warning")
        self._current = None

    def stop(self) -> None:
        self._current = None

    def info(self, message: str) -> None:
        self.logger.info(message)

    def warning(self, message: str) -> None:
        self.logger.warning(message)

    def success(self, message: str) -> None:
        self.logger.info(message)


class AutoConfirmPrompter(Prompter):
    """Non-interactive prompter answering every question with its default"""

    def confirm(self, question: str, default: bool = True) -> bool:
        return default

    def ask(self, question: str, default: Optional[str] = None) -> str:
        return default or ""

    def ask_secret(self, question: str) -> str:
        return ""
