"""Host adapters for the interaction engine."""
