"""Chat flows and the storage bundle they operate on."""
