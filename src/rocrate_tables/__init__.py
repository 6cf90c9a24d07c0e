"""Flatten RO-Crate entity graphs into one CSV table per entity type."""
