class FormatError(ValueError):
    """Raised when raw input cannot be turned into physician note text.

    With the default format set the plain-text fallback accepts any input, so
    this only surfaces for a custom format list or a JSON object that carries
    no text at all.
    """
