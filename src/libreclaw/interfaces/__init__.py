"""User-facing interfaces: the preview web service."""
