"""duke: a personal task-tracking assistant driven by one-line commands."""
