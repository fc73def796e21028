from pydantic import ValidationError


def first_validation_message(error: ValidationError) -> str:
    """Human-readable form of the first pydantic error."""
    first = error.errors()[0]
    location = ".".join(
        str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")
    )
    message = first.get("msg", "Invalid input")
    return f"{location}: {message}" if location else message
