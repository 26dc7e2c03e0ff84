"""Content hashing used for change detection."""


def content_hash(text: str) -> str:
    """
    Compute a 32-bit rolling hash of text.

    Uses h = h * 31 + code over the characters, wrapped to a signed 32-bit
    integer after every step. Not suitable for anything but cheap change
    detection.

    Args:
        text: Text to hash (callers pass the trimmed content)

    Returns:
        Hash rendered as a decimal string (may be negative)
    """
    h = 0
    for char in text:
        h = ((h << 5) - h + ord(char)) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return str(h)
