"""
ResultLogger — Логирование путей отказа

Явно передаваемый коллаборатор вместо глобального singleton-логгера:
- Каждое сообщение помечается тегом по ResultCode ("ERROR (wrong dimension): ...")
- SUCCESS пишется на уровне INFO, остальные коды на уровне ERROR
- Клиенты подключаются/отключаются явно (attach/detach)
- Вывод можно перенаправить в файл (set_log_file)

Логирование является только side-channel и никогда не влияет на возвращаемые коды.
"""

import logging
from typing import Final, Optional

from src.core.result import ResultCode

DEFAULT_LOGGER_NAME: Final[str] = "src.boxgrid"

_TAGS: Final[dict[ResultCode, str]] = {
    ResultCode.SUCCESS: "INFO: ",
    ResultCode.OUT_OF_MEMORY: "ERROR (out of memory): ",
    ResultCode.BAD_REFERENCE: "ERROR (bad reference): ",
    ResultCode.WRONG_DIM: "ERROR (wrong dimension): ",
    ResultCode.DIVISION_BY_ZERO: "ERROR (division by zero): ",
    ResultCode.NAN_VALUE: "ERROR (not a number): ",
    ResultCode.FILE_ERROR: "ERROR (file error): ",
    ResultCode.OUT_OF_BOUNDS: "ERROR (out of bounds): ",
    ResultCode.NOT_FOUND: "ERROR (not found): ",
    ResultCode.WRONG_ARGUMENT: "ERROR (wrong argument): ",
    ResultCode.CALCULATION_ERROR: "ERROR (calculation error): ",
    ResultCode.MULTIPLE_DEFINITION: "ERROR (multiple definition): ",
}


def format_message(message: str, code: ResultCode) -> str:
    """Сообщение с тегом кода результата."""
    return f"{_TAGS[code]}{message}"


class ResultLogger:
    """Логгер результатов поверх logging.Logger.

    Несколько независимых клиентов могут делить один экземпляр;
    attach/detach возвращают False при повторном подключении/отключении.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Args:
            logger: целевой logging.Logger (default: logging.getLogger("src.boxgrid"))
        """
        self._logger = logger or logging.getLogger(DEFAULT_LOGGER_NAME)
        self._clients: list[object] = []
        self._file_handler: Optional[logging.FileHandler] = None

    @property
    def name(self) -> str:
        return self._logger.name

    @property
    def clients(self) -> tuple[object, ...]:
        return tuple(self._clients)

    def attach(self, client: object) -> bool:
        """Подключение клиента. False если клиент уже подключён."""
        if any(c is client for c in self._clients):
            return False
        self._clients.append(client)
        return True

    def detach(self, client: object) -> bool:
        """Отключение клиента. False если клиент не был подключён."""
        for i, c in enumerate(self._clients):
            if c is client:
                del self._clients[i]
                return True
        return False

    def log(self, message: str, code: ResultCode) -> None:
        """Запись тегированного сообщения."""
        level = logging.INFO if code == ResultCode.SUCCESS else logging.ERROR
        self._logger.log(level, format_message(message, code))

    def set_log_file(self, path: Optional[str]) -> ResultCode:
        """Перенаправление вывода в файл.

        path=None закрывает ранее открытый файл и возвращает вывод
        в обработчики, настроенные приложением.

        Returns:
            SUCCESS или FILE_ERROR, если файл не удалось открыть
        """
        if self._file_handler is not None:
            self._logger.removeHandler(self._file_handler)
            self._file_handler.close()
            self._file_handler = None

        if path is None:
            return ResultCode.SUCCESS

        try:
            handler = logging.FileHandler(path, mode="w", encoding="utf-8")
        except OSError:
            return ResultCode.FILE_ERROR

        handler.setFormatter(logging.Formatter("%(message)s"))
        self._logger.addHandler(handler)
        self._file_handler = handler
        return ResultCode.SUCCESS


def report(logger: Optional[ResultLogger], message: str, code: ResultCode) -> ResultCode:
    """Логирование отказа через опциональный логгер.

    Returns:
        тот же code (для `return report(...)`)
    """
    if logger is not None:
        logger.log(message, code)
    return code
