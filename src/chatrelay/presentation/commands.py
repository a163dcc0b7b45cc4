"""Bot command parsing."""

TTS_COMMAND = "tts"
IMAGE_COMMAND = "img"


def extract_command_text(text: str | None, command: str) -> str | None:
    """Return the argument of ``/command`` if the text starts with it.

    The command is matched case-insensitively and may carry a bot mention
    (``/tts@my_bot hello``).

    Args:
        text: Message text.
        command: Command name without the slash.

    Returns:
        The stripped argument text (possibly empty), or None if the text
        is not this command.
    """
    if not text or not text.strip():
        return None

    first = text.split()[0]
    if not first.startswith("/"):
        return None

    name = first[1:].lower().split("@", 1)[0]
    if name != command.lower():
        return None

    return text[text.index(first) + len(first) :].strip()
