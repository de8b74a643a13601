"""Client-specific byte counts required before browsers render progressively."""

# Order matters: Chrome user agents also contain "Safari".
BROWSER_THRESHOLDS: tuple[tuple[str, int], ...] = (
    ("MSIE", 255),
    ("Chrome", 2048),
    ("Safari", 1024),
)


def progressive_rendering_threshold(
    content_type: str | None, user_agent: str | None
) -> int:
    """Number of bytes the client must receive before it renders anything.

    Args:
        content_type: The response content type
        user_agent: The request's User-Agent header

    Returns:
        Bytes of padding needed in the first chunk; 0 for non-HTML responses
        and for clients that render progressively without a primer
    """
    if not content_type or not content_type.startswith("text/html"):
        return 0

    agent = user_agent or ""
    for marker, threshold in BROWSER_THRESHOLDS:
        if marker in agent:
            return threshold
    return 0
