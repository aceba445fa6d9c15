"""Text normalization for title comparison."""

import unicodedata

# Standalone (spacing) dakuten/handakuten and their combining equivalents
_SPACING_TO_COMBINING = str.maketrans({
    "\u309b": "\u3099",
    "\u309c": "\u309a",
})


def normalize(text) -> str:
    """
    Normalize text so visually identical kana compare equal.

    Maps the spacing voiced sound marks (U+309B, U+309C) to their combining
    forms, then composes the string to NFC. Pre-composed and decomposed
    spellings of the same glyph therefore produce the same output.

    Args:
        text: Text to normalize. Anything that is not a str yields "".

    Returns:
        NFC-normalized string
    """
    if not isinstance(text, str):
        return ""
    return unicodedata.normalize("NFC", text.translate(_SPACING_TO_COMBINING))
