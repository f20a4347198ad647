"""Network clients (best-effort, single attempt)."""
