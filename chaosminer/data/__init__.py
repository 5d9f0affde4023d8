"""Seeding, parameter synthesis, schemas and fingerprints."""
