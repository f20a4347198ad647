"""siteprobe: scraping-feasibility advisor for site analysis snapshots."""

__version__ = "0.1.0"
