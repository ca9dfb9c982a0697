"""Configuration, logging, security and persistence plumbing."""
