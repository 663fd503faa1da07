"""
Snowball Stemmer for English (via NLTK).

Used by the stop-word/stemming ingestion policy only; the default TF-IDF
path indexes terms exactly as tokenized.

Examples:
- "ARCHITECTURES" → "ARCHITECTUR"
- "SEARCHING" → "SEARCH"
"""

from nltk.stem.snowball import SnowballStemmer

# Initialize stemmer once (reusable)
_stemmer = SnowballStemmer('english')


def stem(term: str) -> str:
    """
    Stem a single term, preserving upper-case normalisation.

    Examples:
        >>> stem("ARCHITECTURES")
        'ARCHITECTUR'
        >>> stem("searching")
        'SEARCH'
    """
    return _stemmer.stem(term.lower()).upper()
