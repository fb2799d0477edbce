"""Infrastructure implementations for examcraft."""
