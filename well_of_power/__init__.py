"""Well of Power: career-progression narrative decision game backend."""
