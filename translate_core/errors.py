from __future__ import annotations


class TranslatorError(Exception):
    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ConfigurationError(TranslatorError):
    pass


class MissingApiKeyError(ConfigurationError):
    def __init__(self, message: str = "API Key is missing") -> None:
        super().__init__(message)


class GatewayError(TranslatorError):
    pass


class FetchError(GatewayError):
    pass


class FetchTimeoutError(FetchError):
    pass


class FetchStatusError(FetchError):
    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code
