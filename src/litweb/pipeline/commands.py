from enum import Enum


class Command(str, Enum):
    """Operations the runner can perform on a document."""

    LIST = "list"
    TANGLE = "tangle"
    WEAVE = "weave"


def parse_command(value: str) -> Command:
    try:
        return Command(value)
    except ValueError:
        raise ValueError(f"Unknown command {value}. Try one of: {', '.join(c.value for c in Command)}") from None
