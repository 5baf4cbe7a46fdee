"""Knowledge-record access, loading, and source configuration."""
