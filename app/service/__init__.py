"""Use-cases wiring the token factory to the token store."""
