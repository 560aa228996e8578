"""
Search-and-filter engine.

Responsibilities:
- Tokenize recipe fields and build inverted indexes over the catalog.
- Build prefix tries over each vocabulary for autocomplete.
- Combine free-text search and tag filters into the visible recipe set.
- Derive the tag options still worth offering in each dropdown.
"""
