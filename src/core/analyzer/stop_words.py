"""Common English words ignored by keyword extraction."""

STOP_WORDS: frozenset[str] = frozenset(
    {
        "the", "and", "for", "are", "but", "not", "you", "all", "can", "had",
        "her", "was", "one", "our", "out", "day", "get", "has", "him", "his",
        "how", "its", "may", "new", "now", "old", "see", "two", "way", "who",
        "boy", "did", "man", "men", "put", "say", "she", "too", "use", "with",
        "this", "that", "they", "have", "from", "been", "were", "said", "each",
        "which", "their", "time", "will", "about", "there", "could", "other",
        "after", "first", "well", "also", "where", "much", "some", "very",
        "when", "come", "here", "just", "like", "long", "make", "many", "over",
        "such", "take", "than", "them", "these", "think", "want", "what",
        "your", "into", "more", "only", "right", "should", "through", "under",
        "water", "would", "write", "years", "before", "great", "might", "never",
        "place", "small", "sound", "still", "those", "three", "world", "being",
        "every", "found", "going", "house", "large", "often", "seems", "shall",
        "show", "start", "state", "story", "study", "system", "today", "told",
        "took", "turn", "until", "using", "white", "whole", "within", "without",
        "young",
    }
)
