from typing import Any


def error_response(message: str) -> dict:
    return {"error": message}


def describe_validation_errors(errors: list[dict[str, Any]]) -> str:
    """Collapse pydantic validation errors into one readable sentence."""
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid value")
    return f"{location}: {message}" if location else message
