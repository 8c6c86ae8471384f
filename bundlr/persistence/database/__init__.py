"""Collection-level operation classes (one per ArangoDB collection)."""
