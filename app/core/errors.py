class ApiError(Exception):
    """Terminal request failure, rendered by the app as ``{"message", "code"}``."""

    def __init__(self, status_code: int, code: str, message: str):
        self.status_code = status_code
        self.code = str(code)
        self.message = message
        super().__init__(message)

    def to_body(self) -> dict[str, str]:
        return {"message": self.message, "code": self.code}
