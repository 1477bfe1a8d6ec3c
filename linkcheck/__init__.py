"""LinkCheck — fetch a page and probe every hyperlink on it."""
