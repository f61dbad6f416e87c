"""Command implementations for the monodeps CLI."""
