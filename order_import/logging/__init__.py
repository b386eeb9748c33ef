"""Application logging and the JSON Lines validation error log."""
