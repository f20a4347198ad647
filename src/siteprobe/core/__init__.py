"""Core analysis: snapshot records, robots.txt parsing, endpoint classification, scoring."""
