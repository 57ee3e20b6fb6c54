from __future__ import annotations


class UnspecdError(RuntimeError):
    """Base class for errors the CLI reports to the operator and exits on."""


class NoToolsFoundError(UnspecdError):
    pass


class ToolFileNotFoundError(UnspecdError):
    def __init__(self, path: str) -> None:
        super().__init__(f"Tool file not found: {path}")
        self.path = path


class ProjectExistsError(UnspecdError):
    pass


class ToolValidationError(UnspecdError, ValueError):
    pass


class FunctionNotFoundError(UnspecdError, LookupError):
    def __init__(self, function_name: str, available: list[str]) -> None:
        super().__init__(
            f"Function '{function_name}' not found in spec. "
            f"Available functions: {', '.join(available)}"
        )
        self.function_name = function_name
        self.available = available
