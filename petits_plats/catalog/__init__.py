"""
Recipe catalog package.

Responsibilities:
- Validate raw recipe records into immutable Recipe models.
- Load the bundled (or configured) recipe file once per process.
- Expose the read-only Catalog used by the search engine.
"""
