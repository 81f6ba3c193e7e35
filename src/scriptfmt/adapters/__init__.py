"""Host adapters that feed documents to the formatter and apply its edits."""
