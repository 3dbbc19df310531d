"""Shared exceptions, validators and the command line entry point."""
