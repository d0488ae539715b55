"""Shared configuration, constants and exceptions."""
