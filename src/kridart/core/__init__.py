"""Configuration, logging, security and error primitives."""
