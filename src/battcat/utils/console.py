import sys
from typing import Optional, TextIO


def echo(text: str = "", file: Optional[TextIO] = None) -> None:
    """Print text, degrading characters the console cannot encode (€, —)."""
    stream = file or sys.stdout
    line = f"{text}\n"
    try:
        stream.write(line)
    except UnicodeEncodeError:
        encoding = getattr(stream, "encoding", None) or "utf-8"
        stream.write(line.encode(encoding, errors="backslashreplace").decode(encoding, errors="replace"))
    stream.flush()
