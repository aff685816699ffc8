"""Pipeline stages and run orchestration."""
