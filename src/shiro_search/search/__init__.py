"""
Search indexing and query engine package.

This package provides a pure-Python search stack:
- analyzers: Tokenizer pipeline (word runs, lowercase, dedupe)
- search_index: In-memory inverted index built from a corpus snapshot
- relevance: Static per-posting relevance
- fuzzy: Edit distance and vocabulary scan
- matcher: Exact, prefix and fuzzy term resolution
- scoring: Multi-term aggregation and ranking
- filters, suggestions, snippet, history: Query-time helpers
"""
