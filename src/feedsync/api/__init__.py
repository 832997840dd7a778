"""本地 API."""
