"""Shared infrastructure for the lite-cli tools."""
