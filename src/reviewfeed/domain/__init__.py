"""Domain layer: review records, rows and list snapshots."""
