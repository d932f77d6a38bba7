"""Shared configuration, logging, error handling, types and storage."""
