"""Impact-effects computation service."""
