"""Key derivation, configuration and the key-generation workflow."""
