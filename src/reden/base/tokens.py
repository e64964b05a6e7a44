"""Naive token estimation for prompt text."""

import math

WORDS_PER_TOKEN = 0.7
CHARS_PER_WORD = 4.6


def estimate_tokens(text: str) -> int:
    """Estimate the number of tokens in a string.

    Averages a word based guess and a character based guess. Usually
    overestimates, typically within about 10-15% of the real token count.

    Args:
        text: Text to estimate tokens for.

    Returns:
        Estimated token count.
    """
    word_guess = math.ceil(len(text.split(" ")) / WORDS_PER_TOKEN)
    char_guess = math.ceil(len(text) / CHARS_PER_WORD / WORDS_PER_TOKEN)
    return math.ceil((word_guess + char_guess) / 2)
