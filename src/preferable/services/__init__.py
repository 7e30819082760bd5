"""Service layer — registry, per-instance accessor, defaults merge, descriptors."""
