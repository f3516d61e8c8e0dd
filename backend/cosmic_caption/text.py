"""Caption and description tokenization for vocabulary matching."""

import re

# Hints only use words of 4+ characters, scoring counts words of 3+.
HINT_MIN_LENGTH = 3
SCORE_MIN_LENGTH = 2

# Anything that is not a lowercase ASCII letter, a digit or whitespace is
# deleted outright, so "sun-also-rises" collapses into a single token.
_STRIP_RE = re.compile(r"[^a-z0-9\s]")

# Common English function words (NLTK list plus frequent adverbs/quantifiers)
STOPWORDS: frozenset[str] = frozenset(
    {
        "i", "me", "my", "myself", "we", "our", "ours", "ourselves", "you",
        "your", "yours", "yourself", "yourselves", "he", "him", "his",
        "himself", "she", "her", "hers", "herself", "it", "its", "itself",
        "they", "them", "their", "theirs", "themselves", "what", "which",
        "who", "whom", "this", "that", "these", "those", "am", "is", "are",
        "was", "were", "be", "been", "being", "have", "has", "had", "having",
        "do", "does", "did", "doing", "a", "an", "the", "and", "but", "if",
        "or", "because", "as", "until", "while", "of", "at", "by", "for",
        "with", "about", "against", "between", "into", "through", "during",
        "before", "after", "above", "below", "to", "from", "up", "down", "in",
        "out", "on", "off", "over", "under", "again", "further", "then",
        "once", "here", "there", "when", "where", "why", "how", "all", "any",
        "both", "each", "few", "more", "most", "other", "some", "such", "no",
        "nor", "not", "only", "own", "same", "so", "than", "too", "very", "s",
        "t", "can", "will", "just", "don", "should", "now", "d", "ll", "m",
        "o", "re", "ve", "y", "ain", "aren", "couldn", "didn", "doesn",
        "hadn", "hasn", "haven", "isn", "ma", "mightn", "mustn", "needn",
        "shan", "shouldn", "wasn", "weren", "won", "wouldn", "also", "could",
        "would", "might", "must", "shall", "may", "upon", "yet", "though",
        "although", "however", "therefore", "hence", "thus", "still",
        "already", "even", "ever", "never", "always", "often", "sometimes",
        "usually", "really", "actually", "certainly", "probably", "perhaps",
        "maybe", "likely", "unlikely", "one", "two", "three", "four", "five",
        "first", "second", "third", "new", "old", "many", "much", "little",
        "less", "least", "next", "another", "either", "neither", "every",
        "everything", "everyone", "everywhere", "something", "someone",
        "somewhere", "nothing", "nowhere", "anything", "anyone", "anywhere",
    }
)


def normalize(text: str, min_length: int) -> list[str]:
    """Return the qualifying tokens of *text*, in order, duplicates kept.

    Tokens must be longer than *min_length* characters and must not be
    stopwords.
    """
    cleaned = _STRIP_RE.sub("", text.lower())
    return [
        word
        for word in cleaned.split()
        if len(word) > min_length and word not in STOPWORDS
    ]


def count_words(text: str) -> int:
    """Raw whitespace-separated word count of a draft description."""
    return len(text.split())
