"""Infrastructure Layer — MongoDB store adapter and logging setup."""
