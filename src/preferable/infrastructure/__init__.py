"""Infrastructure layer — preference store adapters (in-memory, SQL)."""
