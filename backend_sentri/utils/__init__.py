"""Small helpers shared by the API server and tools."""
