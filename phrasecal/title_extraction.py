"""
Title cleanup: strips the date phrase and range keyword out of the user's input.
"""

RANGE_KEYWORD = "from"


def extract_title(original_text: str, matched_span_text: str) -> str:
    """
    Derive an event title from the input by removing the date/time phrase.

    The first exact occurrence of the matched phrase is removed, then the first
    literal "from" (case-sensitive substring match, so "fromage" loses it too),
    then surrounding whitespace.

    Args:
        original_text: Text as typed by the user
        matched_span_text: Substring the date parser attributed to the span

    Returns:
        Cleaned title, possibly empty
    """
    title = original_text.replace(matched_span_text, "", 1) if matched_span_text else original_text
    title = title.replace(RANGE_KEYWORD, "", 1)
    return title.strip()
