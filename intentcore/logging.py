from __future__ import annotations


class Logger:
    def __init__(self, verbose: bool = False) -> None:
        self.verbose = verbose

    def _emit(self, prefix: str, message: str) -> None:
        print(f"{prefix} {message}")

    def info(self, message: str) -> None:
        self._emit("[*]", message)

    def success(self, message: str) -> None:
        self._emit("[+]", message)

    def warn(self, message: str) -> None:
        self._emit("[!]", message)

    def error(self, message: str) -> None:
        self._emit("[-]", message)

    def debug(self, message: str) -> None:
        if self.verbose:
            self._emit("[DBG]", message)
