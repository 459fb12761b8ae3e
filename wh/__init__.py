"""wh — CLI ekstraktora tabel HTML (suggest / extract / scrape)."""
