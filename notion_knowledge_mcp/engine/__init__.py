"""Knowledge engine: tool handlers and result formatting."""
