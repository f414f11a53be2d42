"""Convert RSS 2.0 feeds named in a feed list into static HTML pages."""
