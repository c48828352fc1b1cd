"""Configuration, logging, storage, domain records and application state."""
