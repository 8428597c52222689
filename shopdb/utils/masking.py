"""Helpers for keeping credentials out of log output."""

import re

_PASSWORD_FRAGMENT = re.compile(r'password=[^&]*')

def mask_password(url: str) -> str:
    """Replace every ``password=...`` fragment of a URL with ``password=***``.
    
    The fragment runs up to the next ``&`` or the end of the string.
    
    Args:
        url: Connection URL, possibly carrying a password query parameter
        
    Returns:
        URL safe to write to logs
    """
    if not url:
        return url
    return _PASSWORD_FRAGMENT.sub('password=***', url)
