# bionic_subtitles/emphasis/lexicon.py
"""
Closed word lists used by the emphasis processors.
"""

ARTICLES = frozenset({"the", "a", "an"})

CONNECTORS = frozenset({
    # Articles
    "the", "a", "an",
    # Conjunctions
    "and", "or", "but", "nor", "yet", "so",
    # Prepositions
    "to", "for", "of", "in", "on", "at", "by", "with", "from", "as", "into",
    "onto", "upon", "about", "above", "across", "after", "against", "along",
    "among", "around", "before", "behind", "below", "beneath", "beside",
    "between", "beyond", "during", "except", "inside", "near", "off", "out",
    "over", "through", "toward", "under", "until", "up", "via", "within",
    "without",
    # Forms of "to be" and "to have"
    "is", "am", "are", "was", "were", "be", "been", "being", "has", "have",
    "had",
    # Auxiliaries
    "do", "does", "did", "will", "would", "shall", "should", "can", "could",
    "may", "might", "must",
    # Determiners, interrogatives and the like
    "this", "that", "these", "those", "what", "which", "who", "whom", "whose",
    "when", "where", "why", "how", "if", "than", "then", "there",
})

PRONOUNS = frozenset({
    "i", "you", "he", "she", "it", "we", "they",
    "me", "him", "her", "us", "them",
    "my", "your", "his", "its", "our", "their",
})

STOPWORDS = frozenset({
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for", "of",
    "with", "by", "from", "as", "is", "was", "are", "be", "been", "it",
    "this", "that", "these", "those", "i", "you", "he", "she", "we", "they",
    "here", "there", "now", "then", "very", "just", "really",
    "your", "my", "his", "her", "our", "their",
})
