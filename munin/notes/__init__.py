"""Note model, validation and vault loading."""
