"""
File Name Utilities

One sanitization rule, shared by the media copier and the HTML path rewrite,
so rewritten references point at the copied files.
"""

import re


def sanitize_file_name(name: str) -> str:
    """
    Make a name safe for the media directory

    Runs of characters other than letters, digits, '.', '_' and '-' become a
    single underscore; leading and trailing underscores are removed.

    Args:
        name: File name or relative path

    Returns:
        Sanitized name (applying this twice gives the same result)
    """
    name = re.sub(r'[^A-Za-z0-9._-]+', '_', str(name))

    # Collapse multiple underscores
    name = re.sub(r'_+', '_', name)

    return name.strip('_')
