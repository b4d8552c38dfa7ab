from dataclasses import dataclass

SUCCESS = "success"
VALIDATION = "validation"
ERROR = "error"

# Backend and unexpected failures start with this marker.
ERROR_MARKER = "Error: "


@dataclass(frozen=True)
class Message:
    text: str
    level: str = SUCCESS    # 'success' | 'validation' | 'error'

    @classmethod
    def success(cls, text: str) -> "Message":
        return cls(text, SUCCESS)

    @classmethod
    def validation(cls, text: str) -> "Message":
        return cls(text, VALIDATION)

    @classmethod
    def error(cls, text: str) -> "Message":
        if not text.startswith(ERROR_MARKER):
            text = ERROR_MARKER + text
        return cls(text, ERROR)
