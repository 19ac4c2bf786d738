"""
Text processing utilities for tool output.
"""

import re

ANSI_ESCAPE = re.compile(r'\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])')


def strip_ansi(text: str) -> str:
    """
    Strip ANSI escape sequences from text.

    Linters print colored output when they think they are attached to a
    terminal; the color codes would otherwise end up inside captured fields.
    """
    return ANSI_ESCAPE.sub('', text)


def truncate_message(message: str, max_length: int = 80) -> str:
    """Keep the first line of a message, shortened for summary output"""
    first_line = message.split('\n')[0]
    if len(first_line) <= max_length:
        return first_line
    return first_line[:max_length - 3] + "..."
