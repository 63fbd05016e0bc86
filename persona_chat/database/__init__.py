"""
The `database` package holds the persistence layer: configuration,
domain records, repository protocols and their in-memory and SQLAlchemy
implementations, plus the chat flows built on top of them.
"""
