"""goto — interactive launcher for named shell commands."""
