"""
WorshipDeck Backend - String Similarity
========================================

What:  Sørensen-Dice coefficient over character bigrams.
Why:   The song duplicate-name guard needs a cheap "are these two titles
       basically the same?" score that tolerates one-letter typos.
How:   Split each string into adjacent character pairs and count how many
       pairs the two strings share:

           score = 2 × |shared bigrams| / (|bigrams(a)| + |bigrams(b)|)

Behaviour details (kept identical to the `compareTwoStrings` scores that
existing clients were built against):
    - Whitespace is removed before comparing: "Amazing Grace" and
      "AmazingGrace" score 1.0.
    - No case folding: "amazing grace" vs "Amazing Grace" shares only the
      lowercase bigrams.
    - Bigrams are a multiset: "aaaa" has three "aa" bigrams and each can be
      matched once.
    - Equal strings (after whitespace removal) score 1.0, including two
      empty strings. Otherwise, if either side is shorter than two
      characters there are no bigrams to compare and the score is 0.0.

Examples:
    >>> compare_two_strings("Amazing Grace", "Amazing Grace")
    1.0
    >>> round(compare_two_strings("Amazing Grace", "Amazing Grase"), 3)
    0.818
    >>> compare_two_strings("a", "b")
    0.0
"""

import re
from collections import Counter

_WHITESPACE = re.compile(r"\s+")


def bigrams(value: str) -> Counter:
    """Multiset of adjacent character pairs: "abab" → {"ab": 2, "ba": 1}."""
    return Counter(value[i:i + 2] for i in range(len(value) - 1))


def compare_two_strings(first: str, second: str) -> float:
    """
    Similarity of two strings in [0, 1]; symmetric in its arguments.

    Complexity: O(len(first) + len(second)).
    """
    first = _WHITESPACE.sub("", first)
    second = _WHITESPACE.sub("", second)

    if first == second:
        return 1.0
    if len(first) < 2 or len(second) < 2:
        return 0.0

    first_bigrams = bigrams(first)
    second_bigrams = bigrams(second)
    # Counter & Counter keeps min(count) per bigram
    shared = sum((first_bigrams & second_bigrams).values())

    total = (len(first) - 1) + (len(second) - 1)
    return min(1.0, 2.0 * shared / total)
