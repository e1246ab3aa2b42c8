"""Row geometry: text metrics, rating glyphs, review and summary rows."""
