from __future__ import annotations


class MenuStoreError(RuntimeError):
    def __init__(self, operation: str, message: str) -> None:
        super().__init__(message)
        self.operation = operation
